from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .axis import AxisStrategy
from ..core.navigation import NavigationController
from ..utils.logging_setup import get_logger

_log = get_logger("input.touch")


@dataclass
class TouchGestureState:
    origin: float = 0.0
    origin_ms: int = 0
    is_active: bool = False


class TouchAdapter:
    """터치 스와이프 하나를 상대 이동 한 번으로 바꾼다.

    터치는 이벤트 수준에서 트랙패드식 관성 주입이 없으므로 항상 일반(짧은) 스로틀을 쓴다.
    """

    def __init__(self, controller: NavigationController, axis: AxisStrategy,
                 min_swipe_px: Optional[float] = None, max_swipe_ms: Optional[int] = None):
        self.controller = controller
        self.axis = axis
        s = controller.settings
        self.min_swipe_px = float(s.min_swipe_px if min_swipe_px is None else min_swipe_px)
        self.max_swipe_ms = int(s.max_swipe_ms if max_swipe_ms is None else max_swipe_ms)
        self.state = TouchGestureState()

    @property
    def is_active(self) -> bool:
        return self.state.is_active

    def begin(self, x: float, y: float) -> bool:
        if self.controller.in_transition:
            return False
        self.state = TouchGestureState(self.axis.project_point(x, y), self.controller.now(), True)
        return True

    def move(self, x: float, y: float) -> bool:
        # 활성 상태면 기본 스크롤을 막는다
        return self.state.is_active

    def end(self, x: float, y: float) -> bool:
        st = self.state
        if not st.is_active:
            return False
        st.is_active = False
        delta = st.origin - self.axis.project_point(x, y)
        elapsed = self.controller.now() - st.origin_ms
        distance = abs(delta)
        if distance < self.min_swipe_px:
            return False
        if elapsed > self.max_swipe_ms:
            _log.debug("swipe_too_slow | distance=%.1f | elapsed=%d", distance, elapsed)
            return False
        # 위로(왼쪽으로) 밀면 다음 섹션
        return self.controller.step_by(delta, is_momentum=False)

    def cancel(self) -> None:
        self.state.is_active = False
