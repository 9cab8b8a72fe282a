from PyQt6.QtWidgets import QMainWindow, QMessageBox
import logging

from singleplexer.widgets.terminal_widget import TerminalWidget


class MainWindow(QMainWindow):
    def __init__(self, settings_manager, theme_manager, font_manager, thread_controller, runner=None):
        super().__init__()
        self.settings_manager = settings_manager
        self.theme_manager = theme_manager
        self.thread_controller = thread_controller

        self.setWindowTitle(self.settings_manager.get_window_title())
        self.terminal = TerminalWidget(settings_manager, theme_manager, font_manager, thread_controller, runner, self)
        self.setCentralWidget(self.terminal)
        self.theme_manager.apply_palette(self)
        self.resize(self.sizeHint())

        if not self.settings_manager.load_layout(self):
            self.center_on_screen()

    def center_on_screen(self):
        screen = self.screen()
        if screen is None:
            return
        frame = self.frameGeometry()
        frame.moveCenter(screen.availableGeometry().center())
        self.move(frame.topLeft())

    def confirm_exit(self):
        response = QMessageBox.question(
            self,
            "Exit?",
            "Are you sure you want to exit?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        return response == QMessageBox.StandardButton.Yes

    def closeEvent(self, event):
        if not self.confirm_exit():
            event.ignore()
            return
        logging.info("Closing main window")
        self.settings_manager.save_layout(self)
        self.thread_controller.shutdown()
        event.accept()
