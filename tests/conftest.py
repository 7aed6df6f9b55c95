import os
import sys

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest  # noqa: E402
from PyQt6.QtWidgets import QApplication  # noqa: E402

from snapnav.core.config import NavigationSettings  # noqa: E402
from snapnav.core.navigation import NavigationController  # noqa: E402
from snapnav.utils.clock import ManualClock  # noqa: E402

app = None


@pytest.fixture(scope="session", autouse=True)
def _app():
    global app
    if QApplication.instance() is None:
        app = QApplication(sys.argv)
    else:
        app = QApplication.instance()
    yield app


@pytest.fixture
def clock():
    return ManualClock(0)


@pytest.fixture
def settings():
    return NavigationSettings(normal_throttle_ms=600, momentum_throttle_ms=1800)


@pytest.fixture
def make_controller(clock, settings):
    def _make(total=5, initial_index=0, **kw):
        return NavigationController(total, initial_index, settings=kw.pop("settings", settings), clock=clock, **kw)
    return _make
