import sys
import os
import signal
import logging
import traceback
from PyQt6.QtWidgets import QApplication
from PyQt6.QtCore import QTimer

from singleplexer.managers.settings_manager import SettingsManager
from singleplexer.managers.theme_manager import ThemeManager
from singleplexer.managers.font_manager import FontManager
from singleplexer.managers.thread_controller import ThreadController
from singleplexer.managers.process_manager import CommandRunner
from singleplexer.widgets.main_window import MainWindow


def setup_logging(log_directory, level=logging.INFO):
    os.makedirs(log_directory, exist_ok=True)
    log_file_path = os.path.join(log_directory, 'app.log')

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file_path, 'a'),
            logging.StreamHandler()
        ],
        force=True
    )
    return log_file_path


def exception_hook(exctype, value, tb):
    logging.error("Uncaught exception", exc_info=(exctype, value, tb))
    traceback.print_exception(exctype, value, tb)


def install_signal_handlers(app):
    def signal_handler(signum, frame):
        logging.warning(f"Received signal: {signum}, quitting")
        app.quit()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    # Let the interpreter run every 500 ms so Python signal handlers fire
    timer = QTimer(app)
    timer.start(500)
    timer.timeout.connect(lambda: None)
    return timer


def main():
    app = QApplication(sys.argv)

    settings_manager = SettingsManager()
    log_file_path = setup_logging(settings_manager.get_log_dir())
    logging.info(f"Application started, logging to {log_file_path}")
    sys.excepthook = exception_hook

    install_signal_handlers(app)

    theme_manager = ThemeManager(settings_manager)
    theme_manager.apply_theme()
    font_manager = FontManager(settings_manager)
    thread_controller = ThreadController()

    window = MainWindow(settings_manager, theme_manager, font_manager, thread_controller, CommandRunner())
    window.show()

    logging.info("Entering Qt event loop")
    exit_code = app.exec()
    logging.info(f"Application exited with code {exit_code}")
    sys.exit(exit_code)


if __name__ == '__main__':
    main()
