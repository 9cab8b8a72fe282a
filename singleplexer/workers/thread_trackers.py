import logging
import traceback
from PyQt6.QtCore import QRunnable, pyqtSlot


class SafeQRunnable(QRunnable):
    def __init__(self, target, *args, **kwargs):
        super().__init__()
        self.target = target
        self.args = args
        self.kwargs = kwargs

    @pyqtSlot()
    def run(self):
        try:
            self.target(*self.args, **self.kwargs)
        except Exception as e:
            logging.critical(f"Uncaught exception in QRunnable {self!r}:")
            logging.exception(e)
            traceback.print_exc()
