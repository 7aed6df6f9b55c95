import json
import logging

from snapnav.utils import logging_setup as ls


def test_resolve_level(monkeypatch):
    monkeypatch.delenv("SNAPNAV_LOG_LEVEL", raising=False)
    assert ls.resolve_level() == "INFO"
    monkeypatch.setenv("SNAPNAV_LOG_LEVEL", " debug ")
    assert ls.resolve_level() == "DEBUG"
    assert ls.resolve_level("warning") == "WARNING"


def test_get_logger_is_namespaced():
    assert ls.get_logger("core.navigation").name == "snapnav.core.navigation"


def test_setup_writes_rotating_file(tmp_path):
    root = logging.getLogger()
    old_level = root.level
    try:
        ls.setup_logging("INFO", log_dir=str(tmp_path))
        # 두 번째 호출은 레벨만 바꾼다
        ls.setup_logging("DEBUG", log_dir=str(tmp_path))
        assert root.level == logging.DEBUG
        ls.get_logger("core.navigation").info("jump | from=%d | to=%d", 0, 1)
    finally:
        ls.shutdown_logging()
        root.setLevel(old_level)
    text = (tmp_path / ls.LOG_FILE_NAME).read_text(encoding="utf-8")
    assert "| core.navigation | sid=" + ls.get_session_id() in text
    assert "jump | from=0 | to=1" in text


def test_json_lines_escape_message(tmp_path):
    root = logging.getLogger()
    old_level = root.level
    try:
        ls.setup_logging("INFO", log_dir=str(tmp_path), json=True)
        ls.get_logger("ui.history").warning('bad "hash"\nvalue')
    finally:
        ls.shutdown_logging()
        root.setLevel(old_level)
    lines = [json.loads(x) for x in (tmp_path / ls.LOG_FILE_NAME).read_text(encoding="utf-8").splitlines() if x]
    entry = [e for e in lines if e["name"] == "ui.history"][0]
    assert entry["msg"] == 'bad "hash"\nvalue'
    assert entry["level"] == "WARNING"


def test_apply_debug_only_touches_app_loggers():
    try:
        ls.apply_debug(True)
        assert logging.getLogger("snapnav").level == logging.DEBUG
        assert ls.get_logger("input.wheel").isEnabledFor(logging.DEBUG)
    finally:
        ls.apply_debug(False)
    assert logging.getLogger("snapnav").level == logging.NOTSET
