import sys
from dataclasses import replace
from PyQt6.QtCore import QSettings  # type: ignore[import]
from PyQt6.QtWidgets import QApplication  # type: ignore[import]

from snapnav.storage.settings_store import load_settings
from snapnav.utils.logging_setup import setup_logging, shutdown_logging, apply_debug
from snapnav.ui.main_window import SnapNavWindow

if __name__ == "__main__":
    # 명령줄: --debug, 그리고 선택적 딥링크(#about 또는 about)
    flags = [a for a in sys.argv[1:] if a.startswith('--')]
    args = [a for a in sys.argv[1:] if a and not a.startswith('-')]
    debug = "--debug" in flags
    setup_logging("DEBUG" if debug else None)
    app = QApplication(sys.argv)
    settings = load_settings(QSettings("SnapNav", "SnapNav"))
    if debug:
        settings = replace(settings, debug=True)
    apply_debug(settings.debug)
    window = SnapNavWindow(settings=settings)
    if args:
        window.open_hash(args[0])
    window.show()
    code = app.exec()
    shutdown_logging()
    sys.exit(code)
