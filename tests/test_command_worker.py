"""Tests for the pool worker and the thread controller."""

import sys
import time

import pytest

from singleplexer.managers.process_manager import CommandResult, CommandRunner, LaunchError
from singleplexer.workers.command_worker import CommandWorker
from singleplexer.workers.thread_trackers import SafeQRunnable


class FakeRunner:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def run(self, command_line):
        self.calls.append(command_line)
        if self.error is not None:
            raise self.error
        return self.result


def record(worker):
    events = []
    worker.signals.result.connect(lambda r: events.append(("result", r)))
    worker.signals.error.connect(lambda m: events.append(("error", m)))
    worker.signals.finished.connect(lambda: events.append(("finished", None)))
    return events


def test_worker_emits_result_then_finished(qapp) -> None:
    result = CommandResult("hi\n", "", 0)
    worker = CommandWorker(FakeRunner(result=result), "echo hi")
    events = record(worker)

    worker.run()

    assert events == [("result", result), ("finished", None)]


def test_worker_emits_error_then_finished(qapp) -> None:
    worker = CommandWorker(FakeRunner(error=LaunchError("not found", ["nope"])), "nope")
    events = record(worker)

    worker.run()

    assert events == [("error", "not found"), ("finished", None)]


def test_worker_still_finishes_on_unexpected_exception(qapp, caplog) -> None:
    worker = CommandWorker(FakeRunner(error=RuntimeError("boom")), "echo")
    events = record(worker)

    worker.run()

    assert events == [("finished", None)]
    assert "Uncaught exception in QRunnable" in caplog.text


def test_safe_runnable_logs_instead_of_raising(caplog) -> None:
    def explode():
        raise ValueError("bad")

    SafeQRunnable(explode).run()

    assert "Uncaught exception in QRunnable" in caplog.text


@pytest.mark.skipif(sys.platform == "win32", reason="uses POSIX tools")
def test_thread_controller_runs_worker_off_thread(qapp, thread_controller, wait_until) -> None:
    worker = CommandWorker(CommandRunner(), "echo pooled")
    events = record(worker)
    finished = []
    thread_controller.thread_finished.connect(finished.append)

    thread_controller.submit(worker)
    wait_until(lambda: finished)

    assert events[0][0] == "result"
    assert events[0][1].stdout_text == "pooled\n"
    assert events[-1] == ("finished", None)
    assert finished == [worker]
    assert thread_controller.active_count() == 0


def test_thread_controller_defaults_max_threads_from_cpu_count(qapp) -> None:
    from PyQt6.QtCore import QThreadPool

    from singleplexer.managers.thread_controller import ThreadController

    controller = ThreadController(thread_pool=QThreadPool())

    assert controller.max_threads >= 2
    assert controller.thread_pool.maxThreadCount() == controller.max_threads


@pytest.mark.skipif(sys.platform == "win32", reason="uses POSIX tools")
def test_shutdown_stops_long_running_command(qapp, thread_controller) -> None:
    runner = CommandRunner()
    worker = CommandWorker(runner, "sleep 600")
    thread_controller.submit(worker)
    deadline = time.monotonic() + 10
    while runner.process is None and time.monotonic() < deadline:
        time.sleep(0.01)

    started = time.monotonic()
    thread_controller.shutdown()

    assert time.monotonic() - started < 5
    assert thread_controller.thread_pool.activeThreadCount() == 0
    assert thread_controller.active_count() == 0
