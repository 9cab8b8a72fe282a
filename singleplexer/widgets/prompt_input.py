import os
import logging
from PyQt6.QtWidgets import QLineEdit
from PyQt6.QtCore import Qt


def clamp_selection(prompt_length, start, end):
    return max(start, prompt_length), max(end, prompt_length)


class PromptInput(QLineEdit):
    """Single-line input whose leading prompt cannot be selected, edited or deleted."""

    def __init__(self, prompt="> ", history_size=100, parent=None):
        super().__init__(parent)
        self.prompt = prompt
        self.history = []
        self.history_size = history_size
        self.history_index = None
        self.pending_text = ""
        self._adjusting = False

        self.setAcceptDrops(False)
        super().setText(self.prompt)
        self.cursorPositionChanged.connect(self.enforce_bounds)
        self.selectionChanged.connect(self.enforce_bounds)
        self.textChanged.connect(self.restore_prompt)

    def command_text(self):
        return self.text()[len(self.prompt):]

    def set_command_text(self, text):
        self.setText(self.prompt + text)
        self.end(False)

    def clear_command(self):
        self.history_index = None
        self.pending_text = ""
        self.set_command_text("")

    def enforce_bounds(self, *args):
        if self._adjusting:
            return
        prompt_length = len(self.prompt)
        self._adjusting = True
        try:
            if self.hasSelectedText():
                start = self.selectionStart()
                end = start + len(self.selectedText())
                if start < prompt_length:
                    start, end = clamp_selection(prompt_length, start, end)
                    if end > start:
                        self.setSelection(start, end - start)
                    else:
                        self.setCursorPosition(prompt_length)
            elif self.cursorPosition() < prompt_length:
                self.setCursorPosition(prompt_length)
        finally:
            self._adjusting = False

    def restore_prompt(self, text):
        if self._adjusting or text.startswith(self.prompt):
            return
        kept = len(os.path.commonprefix([text, self.prompt]))
        rest = text[kept:]
        # Drop whatever tail of the prompt survived the edit
        tail = self.prompt[kept:]
        for start in range(len(tail)):
            if rest.startswith(tail[start:]):
                rest = rest[len(tail) - start:]
                break
        logging.debug(f"Prompt was edited, restoring it (kept {rest!r})")
        self._adjusting = True
        try:
            self.setText(self.prompt + rest)
            self.setCursorPosition(len(self.prompt))
        finally:
            self._adjusting = False

    def keyPressEvent(self, event):
        prompt_length = len(self.prompt)
        key = event.key()
        shift = bool(event.modifiers() & Qt.KeyboardModifier.ShiftModifier)

        if key == Qt.Key.Key_Up:
            self.history_previous()
            return
        if key == Qt.Key.Key_Down:
            self.history_next()
            return

        if not self.hasSelectedText() and self.cursorPosition() <= prompt_length:
            if key == Qt.Key.Key_Backspace:
                event.accept()
                return
            if key == Qt.Key.Key_Left and not shift:
                event.accept()
                return
        if key == Qt.Key.Key_Home:
            if shift:
                self.setSelection(self.cursorPosition(), prompt_length - self.cursorPosition())
            else:
                self.setCursorPosition(prompt_length)
            event.accept()
            return

        super().keyPressEvent(event)

    def add_history(self, command):
        if not command.strip():
            return
        if not self.history or self.history[-1] != command:
            self.history.append(command)
        del self.history[:-self.history_size]

    def history_previous(self):
        if not self.history:
            return
        if self.history_index is None:
            self.pending_text = self.command_text()
            self.history_index = len(self.history) - 1
        else:
            self.history_index = max(0, self.history_index - 1)
        self.set_command_text(self.history[self.history_index])

    def history_next(self):
        if self.history_index is None:
            return
        self.history_index += 1
        if self.history_index >= len(self.history):
            self.history_index = None
            self.set_command_text(self.pending_text)
        else:
            self.set_command_text(self.history[self.history_index])
