import logging
import psutil
from PyQt6.QtCore import QThreadPool, QObject, pyqtSignal
from singleplexer.workers.thread_trackers import SafeQRunnable


class ThreadController(QObject):
    thread_finished = pyqtSignal(object)

    def __init__(self, max_threads=None, thread_pool=None):
        super().__init__()
        self.max_threads = max_threads or (psutil.cpu_count() or 1) * 2
        self.thread_pool = thread_pool or QThreadPool.globalInstance()
        self.thread_pool.setMaxThreadCount(self.max_threads)
        self.active_runnables = []

    def submit(self, runnable: SafeQRunnable):
        logging.debug(f"Submitting new runnable: {runnable!r}")
        runnable.setAutoDelete(False)
        signals = getattr(runnable, "signals", None)
        if signals is not None and hasattr(signals, "finished"):
            signals.finished.connect(lambda r=runnable: self.on_thread_finished(r))
        self.active_runnables.append(runnable)
        self.thread_pool.start(runnable)

    def on_thread_finished(self, runnable):
        logging.debug(f"Thread finished: {runnable!r}")
        if runnable in self.active_runnables:
            self.active_runnables.remove(runnable)
        self.thread_finished.emit(runnable)

    def active_count(self):
        return len(self.active_runnables)

    def shutdown(self, timeout_ms=5000):
        logging.info("Shutting down ThreadController")
        self.thread_pool.clear()
        for runnable in list(self.active_runnables):
            if hasattr(runnable, "stop") and callable(runnable.stop):
                runnable.stop()
        if not self.thread_pool.waitForDone(timeout_ms):
            logging.warning(f"{self.thread_pool.activeThreadCount()} threads still running after shutdown timeout")
        self.active_runnables.clear()
        logging.info("ThreadController shutdown complete")
