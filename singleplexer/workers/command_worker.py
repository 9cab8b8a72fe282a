#command_worker.py

import logging
from PyQt6.QtCore import QObject, pyqtSignal
from singleplexer.managers.process_manager import LaunchError
from singleplexer.workers.thread_trackers import SafeQRunnable


class WorkerSignals(QObject):
    result = pyqtSignal(object)
    error = pyqtSignal(str)
    finished = pyqtSignal()


class CommandWorker(SafeQRunnable):
    """Runs one command line on a pool thread and reports back through signals.

    ``finished`` is emitted last in every case, after ``result`` or ``error``.
    """

    def __init__(self, runner, command_line):
        super().__init__(target=self.execute)
        self.runner = runner
        self.command_line = command_line
        self.signals = WorkerSignals()

    def execute(self):
        try:
            result = self.runner.run(self.command_line)
        except LaunchError as e:
            self.signals.error.emit(e.message)
        else:
            self.signals.result.emit(result)
        finally:
            logging.debug(f"Worker finished: {self.command_line!r}")
            self.signals.finished.emit()

    def stop(self):
        if self.runner.terminate():
            logging.info(f"Stopped running command: {self.command_line!r}")

    def __repr__(self):
        return f"CommandWorker({self.command_line!r})"
