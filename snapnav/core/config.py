from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Dict


@dataclass(frozen=True)
class NavigationSettings:
    # 제스처 분류
    min_delta: float = 4.0            # 이보다 작은 델타는 센서 노이즈
    min_time_gap_ms: int = 1500       # 관성 이벤트는 이 간격 안에서 연달아 들어온다
    # 적응형 스로틀
    normal_throttle_ms: int = 600
    momentum_throttle_ms: int = 1800  # 관성 캐스케이드 전체(~2-3초)를 덮어야 함
    # 터치 스와이프
    min_swipe_px: float = 50.0
    max_swipe_ms: int = 800
    # 전환 완료/복구
    visibility_threshold: float = 0.5
    safety_timeout_ms: int = 2000
    watchdog_interval_ms: int = 1000
    stall_threshold_ms: int = 5000
    # 호스트 스크롤 애니메이션
    scroll_duration_ms: int = 450
    debug: bool = False

    def __post_init__(self) -> None:
        if self.min_delta < 0:
            raise ValueError(f"min_delta must be >= 0, got {self.min_delta}")
        for name in ("min_time_gap_ms", "normal_throttle_ms", "momentum_throttle_ms",
                     "max_swipe_ms", "safety_timeout_ms", "stall_threshold_ms", "scroll_duration_ms"):
            if int(getattr(self, name)) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")
        if self.watchdog_interval_ms <= 0:
            raise ValueError(f"watchdog_interval_ms must be > 0, got {self.watchdog_interval_ms}")
        if self.min_swipe_px < 0:
            raise ValueError(f"min_swipe_px must be >= 0, got {self.min_swipe_px}")
        if not (0.0 < self.visibility_threshold <= 1.0):
            raise ValueError(f"visibility_threshold must be in (0, 1], got {self.visibility_threshold}")

    def with_overrides(self, values: Dict[str, Any]) -> "NavigationSettings":
        """알려진 필드만 골라 새 설정을 만든다. 알 수 없는 키는 무시."""
        known = {f.name for f in fields(self)}
        picked = {k: v for k, v in (values or {}).items() if k in known}
        if not picked:
            return self
        return replace(self, **picked)


DEFAULT_SETTINGS = NavigationSettings()
