import logging
import subprocess
import threading
from dataclasses import dataclass, field
from enum import Enum


class RunState(Enum):
    IDLE = "idle"
    LAUNCHING = "launching"
    LAUNCH_FAILED = "launch_failed"
    RUNNING = "running"
    DRAINING = "draining"
    EXITED = "exited"


@dataclass(frozen=True)
class CommandResult:
    stdout_text: str
    stderr_text: str
    exit_code: int
    argv: list = field(default_factory=list, compare=False)

    @property
    def succeeded(self):
        return self.exit_code == 0


class LaunchError(Exception):
    """Raised when the child process could not be created at all."""

    def __init__(self, message, argv=None):
        super().__init__(message)
        self.message = message
        self.argv = list(argv or [])


def tokenize(command_line):
    # Literal single-space split: no quoting, no collapsing of repeated spaces.
    return command_line.split(" ")


class StreamReader(threading.Thread):
    """Drains one pipe line by line into a buffer."""

    def __init__(self, stream, name):
        super().__init__(name=name, daemon=True)
        self.stream = stream
        self.lines = []

    def run(self):
        try:
            for line in self.stream:
                if not line.endswith("\n"):
                    line += "\n"
                self.lines.append(line)
        finally:
            self.stream.close()

    def text(self):
        return "".join(self.lines)


class CommandRunner:
    def __init__(self):
        self.state = RunState.IDLE
        self.lock = threading.Lock()
        self.process = None

    def _set_state(self, state):
        logging.debug(f"Command runner: {self.state.value} -> {state.value}")
        self.state = state

    def run(self, command_line):
        return self.run_argv(tokenize(command_line))

    def run_argv(self, argv):
        argv = list(argv)
        if not argv:
            raise LaunchError("empty command", argv)

        with self.lock:
            self._set_state(RunState.LAUNCHING)
            logging.info(f"Launching command: {argv}")
            try:
                process = subprocess.Popen(
                    argv,
                    stdin=subprocess.DEVNULL,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.PIPE,
                    text=True,
                    errors="replace",
                )
            except (OSError, ValueError) as e:
                self._set_state(RunState.LAUNCH_FAILED)
                message = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
                if isinstance(e, OSError) and e.filename is not None:
                    message = f"{message}: '{e.filename}'"
                logging.warning(f"Failed to launch {argv[0]!r}: {message}")
                raise LaunchError(message, argv) from e

            self.process = process
            self._set_state(RunState.RUNNING)
            stdout_reader = StreamReader(process.stdout, f"stdout-{process.pid}")
            stderr_reader = StreamReader(process.stderr, f"stderr-{process.pid}")
            stdout_reader.start()
            stderr_reader.start()

            self._set_state(RunState.DRAINING)
            stdout_reader.join()
            stderr_reader.join()
            exit_code = process.wait()
            self.process = None

            self._set_state(RunState.EXITED)
            logging.info(f"Process {process.pid} ({argv[0]}) exited with code {exit_code}")
            return CommandResult(stdout_reader.text(), stderr_reader.text(), exit_code, argv)

    def terminate(self, timeout=2.0):
        """Stop the running child, if any. Returns True when one was signalled."""
        process = self.process
        if process is None or process.poll() is not None:
            return False
        logging.warning(f"Terminating running process {process.pid}")
        process.terminate()
        try:
            process.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            logging.warning(f"Process {process.pid} did not terminate, forcing kill")
            process.kill()
        return True
