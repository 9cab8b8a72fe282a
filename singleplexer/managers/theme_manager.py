from PyQt6.QtCore import QObject, pyqtSignal
from PyQt6.QtGui import QColor, QPalette
from PyQt6.QtWidgets import QApplication
from qt_material import apply_stylesheet, list_themes
import logging
import traceback
import json
import os

default_theme = {
    "name": "singleplexer",
    "colors": {
        "background_primary": "#000000",
        "background_secondary": "#404040",
        "prompt": "#C0C0C0",
        "text": "#FFFFFF",
        "error": "#FF0000",
        "success": "#00FF00",
        "stderr": "#FFAFAF",
    },
}


def merge_themes(default, custom):
    merged = dict(default)
    merged.update({k: v for k, v in custom.items() if k != "colors"})
    colors = dict(default.get("colors", {}))
    colors.update(custom.get("colors", {}))
    merged["colors"] = colors
    return merged


class ThemeManager(QObject):
    theme_changed = pyqtSignal(dict)

    def __init__(self, settings_manager):
        super().__init__()
        self.settings_manager = settings_manager
        self.config_dir = settings_manager.get_app_data_dir()
        self.custom_themes_dir = os.path.join(self.config_dir, "custom_themes")
        os.makedirs(self.custom_themes_dir, exist_ok=True)
        self.custom_themes = {}
        self.current_theme = merge_themes(default_theme, {})
        self.load_custom_themes()
        self.current_theme = self.get_theme_data(settings_manager.get_theme_name()) or self.current_theme

    def load_custom_themes(self):
        for filename in sorted(os.listdir(self.custom_themes_dir)):
            if not filename.endswith(".json"):
                continue
            theme_name = os.path.splitext(filename)[0]
            try:
                with open(os.path.join(self.custom_themes_dir, filename), "r") as f:
                    theme_data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logging.error(f"Error loading custom theme {filename}: {e}")
                continue
            if not isinstance(theme_data, dict) or not isinstance(theme_data.get("colors", {}), dict):
                logging.error(f"Error loading custom theme {filename}: expected an object with a 'colors' object")
                continue
            self.custom_themes[theme_name] = theme_data

    def add_custom_theme(self, name, theme_data):
        self.custom_themes[name] = theme_data
        with open(os.path.join(self.custom_themes_dir, f"{name}.json"), "w") as f:
            json.dump(theme_data, f, indent=2)

    def get_available_themes(self):
        return [default_theme["name"]] + list(self.custom_themes.keys()) + list_themes()

    def get_theme_data(self, theme_name):
        if theme_name == default_theme["name"]:
            return merge_themes(default_theme, {})
        if theme_name in self.custom_themes:
            return merge_themes(default_theme, dict(self.custom_themes[theme_name], name=theme_name))
        if theme_name in list_themes():
            return merge_themes(default_theme, {"name": theme_name, "type": "built-in"})
        logging.warning(f"Unknown theme {theme_name!r}, using default")
        return None

    def get_current_theme(self):
        return self.current_theme

    def color(self, key):
        return QColor(self.current_theme["colors"].get(key, default_theme["colors"][key]))

    def generate_stylesheet(self, theme_data):
        colors = theme_data["colors"]
        return f"""
            QMainWindow {{
                background-color: {colors['background_primary']};
            }}
            QTextEdit, QLineEdit {{
                background-color: {colors['background_secondary']};
                color: {colors['text']};
                border: none;
            }}
        """

    def apply_theme(self, theme=None):
        theme_data = theme if isinstance(theme, dict) else self.get_theme_data(theme or self.current_theme["name"])
        if not theme_data:
            return
        logging.info(f"Applying theme: {theme_data['name']}")
        try:
            app = QApplication.instance()
            if theme_data.get("type") == "built-in":
                apply_stylesheet(app, theme=theme_data["name"])
                app.setStyleSheet(app.styleSheet() + self.generate_stylesheet(theme_data))
            else:
                app.setStyleSheet(self.generate_stylesheet(theme_data))
            self.current_theme = theme_data
            self.settings_manager.set_theme_name(theme_data["name"])
            self.theme_changed.emit(theme_data)
        except Exception as e:
            logging.error(f"Error applying theme: {e}")
            logging.error(traceback.format_exc())

    def apply_palette(self, widget):
        palette = widget.palette()
        palette.setColor(QPalette.ColorRole.Window, self.color("background_primary"))
        palette.setColor(QPalette.ColorRole.Base, self.color("background_secondary"))
        palette.setColor(QPalette.ColorRole.Text, self.color("text"))
        widget.setPalette(palette)
