import os
from dataclasses import fields
from typing import Any, Dict, Mapping, Optional

import yaml  # type: ignore

from ..core.config import NavigationSettings, DEFAULT_SETTINGS
from ..utils.logging_setup import get_logger

_log = get_logger("storage.settings")

_QSETTINGS_GROUP = "nav"
_ENV_PREFIX = "SNAPNAV_"


def _default_config_paths() -> list[str]:
    paths: list[str] = []
    # 1) 실행 디렉터리의 config.yaml
    try:
        paths.append(os.path.join(os.getcwd(), "config.yaml"))
    except Exception:
        pass
    # 2) 사용자 홈 디렉터리 하위
    try:
        home = os.path.expanduser("~")
        paths.append(os.path.join(home, ".snapnav", "config.yaml"))
    except Exception:
        pass
    # 3) 환경변수로 지정된 경로 최우선
    env = os.getenv("SNAPNAV_CONFIG")
    if env:
        paths.insert(0, env)
    dedup: list[str] = []
    seen: set[str] = set()
    for p in paths:
        if not p:
            continue
        ap = os.path.abspath(os.path.expanduser(p))
        if ap not in seen:
            seen.add(ap)
            dedup.append(ap)
    return dedup


def _load_yaml_file(path: str) -> Dict[str, Any]:
    try:
        if not path or not os.path.isfile(path):
            return {}
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        _log.warning("config_read_fail | path=%s | err=%s", path, str(e))
        return {}
    if not isinstance(raw, dict):
        return {}
    # 최상위 navigation: 아래만 사용, 없으면 파일 전체를 설정으로 본다
    nav = raw.get("navigation", raw)
    return nav if isinstance(nav, dict) else {}


def _coerce(kind: type, value: Any) -> Any:
    if kind is bool:
        if isinstance(value, bool):
            return value
        s = str(value).strip().lower()
        if s in ("1", "true", "yes", "on"):
            return True
        if s in ("0", "false", "no", "off"):
            return False
        raise ValueError(f"not a boolean: {value!r}")
    if kind is int:
        return int(float(value))
    if kind is float:
        return float(value)
    return value


_FIELD_TYPES: Dict[str, type] = {
    f.name: type(getattr(DEFAULT_SETTINGS, f.name)) for f in fields(NavigationSettings)
}


def _clean(values: Mapping[str, Any], source: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for k, v in (values or {}).items():
        kind = _FIELD_TYPES.get(str(k))
        if kind is None:
            continue
        try:
            out[str(k)] = _coerce(kind, v)
        except (TypeError, ValueError):
            _log.warning("config_value_ignored | source=%s | key=%s | value=%r", source, k, v)
    return out


def _apply(settings: NavigationSettings, values: Dict[str, Any], source: str) -> NavigationSettings:
    if not values:
        return settings
    try:
        return settings.with_overrides(values)
    except ValueError as e:
        # 한 묶음이 유효성 검사에 실패하면 그 출처 전체를 무시
        _log.warning("config_source_rejected | source=%s | err=%s", source, str(e))
        return settings


def _read_qsettings(qsettings) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    if qsettings is None:
        return out
    try:
        for name in _FIELD_TYPES:
            key = f"{_QSETTINGS_GROUP}/{name}"
            if qsettings.contains(key):
                out[name] = qsettings.value(key)
    except Exception as e:
        _log.warning("qsettings_read_fail | err=%s", str(e))
    return out


def _read_env(env: Mapping[str, str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for name in _FIELD_TYPES:
        raw = env.get(_ENV_PREFIX + name.upper())
        if raw is not None and str(raw).strip() != "":
            out[name] = raw
    return out


def load_settings(qsettings=None, config_paths: Optional[list[str]] = None,
                  env: Optional[Mapping[str, str]] = None) -> NavigationSettings:
    """기본값 <- YAML <- QSettings <- 환경변수 순으로 덮어쓴다."""
    settings = DEFAULT_SETTINGS
    paths = _default_config_paths() if config_paths is None else config_paths
    # 뒤쪽(우선순위 낮음)부터 적용해 앞쪽 경로가 이기도록
    for p in reversed(paths):
        data = _load_yaml_file(p)
        if data:
            settings = _apply(settings, _clean(data, p), p)
    settings = _apply(settings, _clean(_read_qsettings(qsettings), "qsettings"), "qsettings")
    settings = _apply(settings, _clean(_read_env(os.environ if env is None else env), "env"), "env")
    return settings


def save_settings(settings: NavigationSettings, qsettings) -> None:
    try:
        for name in _FIELD_TYPES:
            qsettings.setValue(f"{_QSETTINGS_GROUP}/{name}", getattr(settings, name))
        qsettings.sync()
    except Exception as e:
        _log.warning("qsettings_write_fail | err=%s", str(e))
