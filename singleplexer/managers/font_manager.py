from PyQt6.QtGui import QFont, QFontMetrics
from PyQt6.QtCore import QSize
import logging


class FontManager:
    def __init__(self, settings_manager):
        self.settings_manager = settings_manager

    def get_font(self, family=None, size=None):
        font = QFont(family or self.settings_manager.get_font_family(), size or self.settings_manager.get_font_size())
        font.setStyleHint(QFont.StyleHint.Monospace)
        font.setFixedPitch(True)
        return font

    def cell_size(self, font):
        metrics = QFontMetrics(font)
        return metrics.horizontalAdvance("M"), metrics.height()

    def preferred_sizes(self, font):
        """Return (output size, input size) for the configured grid."""
        column_width, row_height = self.cell_size(font)
        line_height = self.settings_manager.get_line_height()
        width = column_width * self.settings_manager.get_columns()
        output_height = int(row_height * self.settings_manager.get_rows() * line_height)
        input_height = int(row_height * line_height)
        logging.debug(f"Cell {column_width}x{row_height}, output {width}x{output_height}, input height {input_height}")
        return QSize(width, output_height), QSize(width, input_height)
