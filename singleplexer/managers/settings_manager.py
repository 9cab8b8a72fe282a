# settings_manager.py
from PyQt6.QtCore import QSettings
import os

DEFAULTS = {
    "window_title": "Terminal singleplexer",
    "prompt": "> ",
    "columns": 120,
    "rows": 30,
    "line_height": 1.2,
    "font_family": "Monospace",
    "font_size": 14,
    "history_size": 100,
    "theme": "singleplexer",
}


class SettingsManager:
    def __init__(self, settings=None):
        self.settings = settings if settings is not None else QSettings("singleplexer", "Terminal singleplexer")
        self.ensure_app_data_dir()

    def get_value(self, key, default=None, value_type=None):
        if default is None:
            default = DEFAULTS.get(key)
        if value_type is None and default is not None:
            value_type = type(default)
        if value_type is None:
            return self.settings.value(key, default)
        return self.settings.value(key, default, type=value_type)

    def set_value(self, key, value):
        self.settings.setValue(key, value)

    def save_layout(self, main_window):
        self.set_value("geometry", main_window.saveGeometry())

    def load_layout(self, main_window):
        geometry = self.settings.value("geometry")
        if geometry:
            return main_window.restoreGeometry(geometry)
        return False

    def get_window_title(self):
        return self.get_value("window_title")

    def get_prompt(self):
        return self.get_value("prompt")

    def get_columns(self):
        return self.get_value("columns")

    def get_rows(self):
        return self.get_value("rows")

    def get_line_height(self):
        return self.get_value("line_height")

    def get_font_family(self):
        return self.get_value("font_family")

    def get_font_size(self):
        return self.get_value("font_size")

    def get_history_size(self):
        return self.get_value("history_size")

    def get_theme_name(self):
        return self.get_value("theme")

    def set_theme_name(self, name):
        self.set_value("theme", name)

    def get_app_data_dir(self):
        return self.get_value("app_data_dir", "", str)

    def get_log_dir(self):
        return os.path.join(self.get_app_data_dir(), "logs")

    def get_settings(self):
        return self.settings

    def ensure_app_data_dir(self):
        app_data_dir = self.get_value("app_data_dir", "", str)
        if not app_data_dir:
            app_data_dir = os.path.join(os.path.expanduser("~"), ".singleplexer")
            self.set_value("app_data_dir", app_data_dir)
        os.makedirs(app_data_dir, exist_ok=True)
