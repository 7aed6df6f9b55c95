from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..utils.clock import Clock, monotonic_ms
from ..utils.logging_setup import get_logger

_log = get_logger("core.throttle")

# reset() 이후에는 어떤 지속시간으로도 스로틀되지 않도록 충분히 먼 과거
_FAR_PAST_MS = -(1 << 62)


@dataclass
class ThrottleState:
    last_accepted_ms: int = _FAR_PAST_MS


@dataclass(frozen=True)
class ThrottleStatus:
    throttled: bool
    remaining_ms: int
    effective_ms: int
    since_last_ms: int
    kind: str  # "momentum" | "normal"


class AdaptiveThrottle:
    """관성 판정에 따라 두 가지 대기시간 중 하나로 내비게이션을 제한한다.

    mark_accepted()는 수락된 내비게이션 1회당 정확히 한 번만 호출해야 한다
    (원시 이벤트마다 호출하면 관성 캐스케이드가 스스로 창을 연장한다).
    """

    def __init__(self, normal_ms: int = 600, momentum_ms: int = 1800,
                 clock: Optional[Clock] = None, debug: bool = False):
        if normal_ms < 0 or momentum_ms < 0:
            raise ValueError("throttle durations must be >= 0")
        self.normal_ms = int(normal_ms)
        self.momentum_ms = int(momentum_ms)
        self.debug = bool(debug)
        self._clock: Clock = clock or monotonic_ms
        self._state = ThrottleState()

    @classmethod
    def from_settings(cls, settings, clock: Optional[Clock] = None) -> "AdaptiveThrottle":
        return cls(settings.normal_throttle_ms, settings.momentum_throttle_ms, clock=clock, debug=settings.debug)

    @property
    def last_accepted_ms(self) -> int:
        return self._state.last_accepted_ms

    def effective_ms(self, is_momentum: bool) -> int:
        return self.momentum_ms if is_momentum else self.normal_ms

    def _now(self, now: Optional[int]) -> int:
        return int(now) if now is not None else int(self._clock())

    def is_throttled(self, is_momentum: bool, now: Optional[int] = None) -> bool:
        t = self._now(now)
        effective = self.effective_ms(is_momentum)
        throttled = (t - self._state.last_accepted_ms) < effective
        if self.debug and throttled:
            _log.debug(
                "throttled | kind=%s | effective=%d | wait=%d",
                "momentum" if is_momentum else "normal", effective,
                effective - (t - self._state.last_accepted_ms),
            )
        return throttled

    def mark_accepted(self, now: Optional[int] = None) -> None:
        t = self._now(now)
        # 단조 증가 유지: 과거 시각으로 되돌리지 않는다
        if t > self._state.last_accepted_ms:
            self._state.last_accepted_ms = t
        if self.debug:
            _log.debug("throttle_armed | at=%d | next_normal=%d", t, t + self.normal_ms)

    def status(self, is_momentum: bool, now: Optional[int] = None) -> ThrottleStatus:
        t = self._now(now)
        effective = self.effective_ms(is_momentum)
        since = t - self._state.last_accepted_ms
        remaining = max(0, effective - since)
        return ThrottleStatus(
            throttled=remaining > 0,
            remaining_ms=int(remaining),
            effective_ms=effective,
            since_last_ms=int(since),
            kind="momentum" if is_momentum else "normal",
        )

    def reset(self) -> None:
        self._state = ThrottleState()
        if self.debug:
            _log.debug("throttle_reset")
