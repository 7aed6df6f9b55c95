from __future__ import annotations

from typing import Optional, Tuple

from PyQt6.QtCore import Qt  # type: ignore[import]

from .axis import AxisStrategy
from ..core.gesture_classifier import GestureClassifier, GestureSample, GestureKind
from ..core.navigation import NavigationController
from ..utils.logging_setup import get_logger

_log = get_logger("input.wheel")

# angleDelta 120 = 휠 한 칸
_ANGLE_UNITS_PER_STEP = 120.0


def wheel_delta_from_event(event, pixels_per_step: float = 40.0) -> Tuple[float, float, bool]:
    """QWheelEvent에서 (dx, dy, shift) 추출. 양수 = 다음 방향.

    Qt는 위로 굴릴 때 양수이므로 부호를 뒤집는다. 트랙패드는 pixelDelta를 우선 사용.
    """
    try:
        pd = event.pixelDelta()
        if not pd.isNull():
            dx, dy = float(pd.x()), float(pd.y())
        else:
            ad = event.angleDelta()
            dx = ad.x() / _ANGLE_UNITS_PER_STEP * pixels_per_step
            dy = ad.y() / _ANGLE_UNITS_PER_STEP * pixels_per_step
    except Exception:
        return 0.0, 0.0, False
    try:
        shift = bool(event.modifiers() & Qt.KeyboardModifier.ShiftModifier)
    except Exception:
        shift = False
    # 일부 플랫폼은 Shift+휠을 이미 가로(dx)로 바꿔서 보낸다. 가로 축은 dx를 먼저 보므로 그대로 둔다
    return -dx, -dy, shift


class WheelAdapter:
    """휠/트랙패드 이벤트 스트림 하나를 상대 이동 요청으로 바꾼다."""

    def __init__(self, controller: NavigationController, axis: AxisStrategy,
                 classifier: Optional[GestureClassifier] = None):
        self.controller = controller
        self.axis = axis
        # 입력 스트림마다 분류기 하나
        self.classifier = classifier or controller.classifier
        self.last_kind: Optional[GestureKind] = None

    def handle(self, dx: float, dy: float, shift: bool = False) -> bool:
        """이벤트를 소비해야 하면 True(기본 스크롤 억제)."""
        delta = self.axis.project_wheel(dx, dy, shift)
        if delta == 0:
            return False
        if not self.classifier.is_significant(delta):
            return True
        t = self.controller.now()
        kind = self.classifier.classify(GestureSample.from_delta(delta, t))
        self.last_kind = kind
        moved = self.controller.step_by(delta, kind is GestureKind.MOMENTUM)
        if moved:
            _log.debug("wheel_step | delta=%.1f | kind=%s | index=%d", delta, kind.value, self.controller.current_index)
        return True

    def handle_event(self, event) -> bool:
        dx, dy, shift = wheel_delta_from_event(event)
        return self.handle(dx, dy, shift)
