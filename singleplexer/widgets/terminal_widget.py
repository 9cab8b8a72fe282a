from PyQt6.QtWidgets import QWidget, QVBoxLayout, QTextEdit
from PyQt6.QtGui import QAction, QTextCursor, QTextCharFormat
from PyQt6.QtCore import Qt, QSize
import logging

from singleplexer.managers.process_manager import CommandRunner
from singleplexer.workers.command_worker import CommandWorker
from singleplexer.widgets.prompt_input import PromptInput


class TerminalWidget(QWidget):
    def __init__(self, settings_manager, theme_manager, font_manager, thread_controller, runner=None, parent=None):
        super().__init__(parent)
        self.settings_manager = settings_manager
        self.theme_manager = theme_manager
        self.font_manager = font_manager
        self.thread_controller = thread_controller
        self.runner = runner or CommandRunner()
        self.current_worker = None
        self.preferred_output_size = QSize()
        self.input_height = 0

        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(0, 0, 0, 0)
        self.layout.setSpacing(0)

        font = self.font_manager.get_font()

        self.output = QTextEdit(self)
        self.output.setReadOnly(True)
        self.output.setFont(font)
        self.output.setAcceptRichText(False)
        self.output.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.output.customContextMenuRequested.connect(self.show_context_menu)
        self.layout.addWidget(self.output, 1)

        self.input = PromptInput(self.settings_manager.get_prompt(), self.settings_manager.get_history_size(), self)
        self.input.setFont(font)
        self.input.returnPressed.connect(self.execute_command)
        self.layout.addWidget(self.input)

        output_size, input_size = self.font_manager.preferred_sizes(font)
        self.preferred_output_size = output_size
        self.input_height = max(input_size.height(), self.input.sizeHint().height())
        self.input.setFixedHeight(self.input_height)

        self.apply_theme()
        self.theme_manager.theme_changed.connect(self.apply_theme)

    def apply_theme(self, theme=None):
        self.theme_manager.apply_palette(self.output)
        self.theme_manager.apply_palette(self.input)

    def sizeHint(self):
        return QSize(self.preferred_output_size.width(), self.preferred_output_size.height() + self.input_height)

    def is_busy(self):
        return self.current_worker is not None

    def execute_command(self):
        if self.is_busy():
            return
        command = self.input.command_text()
        if not command.strip():
            self.input.clear_command()
            return

        self.append_output(f"{self.input.prompt}{command}\n", self.theme_manager.color("prompt"))
        self.input.add_history(command)
        self.input.setEnabled(False)

        worker = CommandWorker(self.runner, command)
        worker.signals.result.connect(self.on_result)
        worker.signals.error.connect(self.on_error)
        worker.signals.finished.connect(self.on_finished)
        self.current_worker = worker
        self.thread_controller.submit(worker)

    def on_result(self, result):
        self.append_output(result.stdout_text, self.theme_manager.color("text"))
        self.append_output(result.stderr_text, self.theme_manager.color("stderr"))
        status_color = self.theme_manager.color("success" if result.succeeded else "error")
        self.append_output(f"Exit code: {result.exit_code}\n", status_color)

    def on_error(self, message):
        self.append_output(f"Error: {message}\n", self.theme_manager.color("error"))

    def on_finished(self):
        self.current_worker = None
        self.input.clear_command()
        self.input.setEnabled(True)
        self.input.setFocus()

    def append_output(self, text, color):
        if not text:
            return
        cursor = self.output.textCursor()
        cursor.movePosition(QTextCursor.MoveOperation.End)
        text_format = QTextCharFormat()
        text_format.setForeground(color)
        cursor.insertText(text, text_format)
        self.output.setTextCursor(cursor)
        self.output.ensureCursorVisible()

    def transcript(self):
        return self.output.toPlainText()

    def clear_output(self):
        logging.info("Clearing terminal output")
        self.output.clear()

    def show_context_menu(self, pos):
        context_menu = self.output.createStandardContextMenu()
        context_menu.addSeparator()
        clear_action = QAction("Clear", context_menu)
        clear_action.triggered.connect(self.clear_output)
        context_menu.addAction(clear_action)
        context_menu.exec(self.output.mapToGlobal(pos))
