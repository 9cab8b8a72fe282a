import os
import time

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtCore import QSettings, QThreadPool
from PyQt6.QtWidgets import QApplication

from singleplexer.managers.settings_manager import SettingsManager
from singleplexer.managers.theme_manager import ThemeManager
from singleplexer.managers.font_manager import FontManager
from singleplexer.managers.thread_controller import ThreadController


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def settings_manager(tmp_path, qapp):
    settings = QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)
    settings.setValue("app_data_dir", str(tmp_path / "appdata"))
    return SettingsManager(settings)


@pytest.fixture
def theme_manager(settings_manager):
    return ThemeManager(settings_manager)


@pytest.fixture
def font_manager(settings_manager):
    return FontManager(settings_manager)


@pytest.fixture
def thread_controller(qapp):
    controller = ThreadController(max_threads=2, thread_pool=QThreadPool())
    yield controller
    controller.shutdown()


@pytest.fixture
def wait_until(qapp):
    """Pump the Qt event loop until predicate() is true."""

    def _wait(predicate, timeout=10.0):
        deadline = time.monotonic() + timeout
        while not predicate():
            if time.monotonic() > deadline:
                raise AssertionError("Timed out waiting for condition")
            qapp.processEvents()
            time.sleep(0.01)
        qapp.processEvents()

    return _wait
