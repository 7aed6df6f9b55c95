import os
import sys
import json as _json
import uuid
import logging
import logging.handlers
import queue
from typing import Optional

APP_LOGGER = "snapnav"
LOG_FILE_NAME = "snapnav.log"

_SESSION_ID = uuid.uuid4().hex[:8]
_listener: logging.handlers.QueueListener | None = None
_queue_handler: logging.handlers.QueueHandler | None = None

_TEXT_FORMAT = "%(asctime)s | %(levelname)s | %(component)s | sid=%(session_id)s | %(message)s"


class _SessionFilter(logging.Filter):
    """세션 ID와 짧은 컴포넌트 이름(snapnav. 접두사 제거)을 레코드에 붙인다."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        if not hasattr(record, "session_id"):
            record.session_id = _SESSION_ID
        if not hasattr(record, "component"):
            name = record.name
            prefix = APP_LOGGER + "."
            record.component = name[len(prefix):] if name.startswith(prefix) else name
        return True


class _JsonFormatter(logging.Formatter):
    """한 줄에 JSON 객체 하나. 메시지의 따옴표/개행도 안전하게 이스케이프."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "name": getattr(record, "component", record.name),
            "sid": getattr(record, "session_id", _SESSION_ID),
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return _json.dumps(payload, ensure_ascii=False)


def _default_log_dir() -> str:
    if sys.platform == "win32":
        base = os.getenv("LOCALAPPDATA") or os.path.expanduser("~\\AppData\\Local")
    else:
        base = os.getenv("XDG_STATE_HOME") or os.path.expanduser("~/.local/state")
    path = os.path.join(base, "SnapNav", "logs")
    try:
        os.makedirs(path, exist_ok=True)
        return path
    except OSError:
        return os.getcwd()


def resolve_level(level: Optional[str] = None) -> str:
    """명시 인자 > SNAPNAV_LOG_LEVEL > INFO 순으로 레벨 이름 결정."""
    if level:
        return str(level).upper()
    env = os.getenv("SNAPNAV_LOG_LEVEL")
    if env and env.strip():
        return env.strip().upper()
    return "INFO"


def _level_no(level: str) -> int:
    lvl = logging.getLevelName(str(level).upper())
    return lvl if isinstance(lvl, int) else logging.INFO


def _build_formatter(json: bool) -> logging.Formatter:
    return _JsonFormatter() if json else logging.Formatter(_TEXT_FORMAT)


def _build_handlers(log_dir: str, lvl: int, fmt: logging.Formatter) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []
    try:
        fh = logging.handlers.RotatingFileHandler(
            os.path.join(log_dir, LOG_FILE_NAME), maxBytes=5 * 1024 * 1024, backupCount=10, encoding="utf-8"
        )
        fh.setFormatter(fmt)
        handlers.append(fh)
    except OSError as e:
        # 파일을 못 열면 콘솔만 사용
        sys.stderr.write(f"log_file_unavailable | dir={log_dir} | err={e}\n")
    sh = logging.StreamHandler(stream=sys.stderr)
    sh.setLevel(lvl)
    sh.setFormatter(fmt)
    handlers.append(sh)
    return handlers


def setup_logging(level: Optional[str] = None, log_dir: Optional[str] = None, json: bool = False) -> None:
    """큐 리스너 + 회전 파일 로그를 앱 전체에 설치한다. 두 번째 호출은 레벨만 바꾼다."""
    global _listener, _queue_handler
    level = resolve_level(level)
    if _listener is not None:
        set_level(level)
        return

    lvl = _level_no(level)
    q: "queue.Queue[logging.LogRecord]" = queue.Queue(maxsize=10000)
    qh = logging.handlers.QueueHandler(q)
    qh.addFilter(_SessionFilter())

    root = logging.getLogger()
    root.setLevel(lvl)
    root.addHandler(qh)

    handlers = _build_handlers(log_dir or _default_log_dir(), lvl, _build_formatter(json))
    _listener = logging.handlers.QueueListener(q, *handlers, respect_handler_level=True)
    _listener.start()
    _queue_handler = qh
    get_logger("logging").info("logging_ready | level=%s | sid=%s", level, _SESSION_ID)


def shutdown_logging() -> None:
    """리스너를 멈추고(남은 레코드 flush) 루트에서 큐 핸들러를 뗀다."""
    global _listener, _queue_handler
    listener, qh = _listener, _queue_handler
    _listener = None
    _queue_handler = None
    if qh is not None:
        logging.getLogger().removeHandler(qh)
    if listener is not None:
        listener.stop()
        for h in listener.handlers:
            h.close()


def set_level(level: str) -> None:
    logging.getLogger().setLevel(_level_no(level))


def apply_debug(enabled: bool) -> None:
    """내비게이션 debug 설정이 켜지면 snapnav.* 만 DEBUG로 내린다."""
    logging.getLogger(APP_LOGGER).setLevel(logging.DEBUG if enabled else logging.NOTSET)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{APP_LOGGER}.{name}")


def get_log_dir() -> str:
    """현재 사용 중인 로그 디렉터리 반환."""
    return _default_log_dir()


def get_session_id() -> str:
    return _SESSION_ID
