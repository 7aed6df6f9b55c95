from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from PyQt6.QtCore import Qt  # type: ignore[import]


class Axis(str, Enum):
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


@dataclass(frozen=True)
class AxisStrategy:
    """축별로 달라지는 부분만 모은 전략 객체.

    델타 부호 규약: 양수 = 다음 섹션/아이템 방향.
    """
    axis: Axis
    orientation: Qt.Orientation
    align_center: bool  # False면 시작 가장자리 정렬

    def project_wheel(self, dx: float, dy: float, shift: bool = False) -> float:
        if self.axis is Axis.VERTICAL:
            return float(dy)
        # 가로: 보조축 델타 우선, 없으면 Shift+세로 휠을 가로 의도로 해석
        if dx != 0:
            return float(dx)
        if shift:
            return float(dy)
        return 0.0

    def project_point(self, x: float, y: float) -> float:
        return float(y) if self.axis is Axis.VERTICAL else float(x)

    def scroll_bar(self, area):
        if self.axis is Axis.VERTICAL:
            return area.verticalScrollBar()
        return area.horizontalScrollBar()

    def offset_of(self, widget) -> int:
        return int(widget.y()) if self.axis is Axis.VERTICAL else int(widget.x())

    def extent_of(self, widget) -> int:
        return int(widget.height()) if self.axis is Axis.VERTICAL else int(widget.width())

    def viewport_extent(self, area) -> int:
        vp = area.viewport()
        return int(vp.height()) if self.axis is Axis.VERTICAL else int(vp.width())

    def target_scroll_value(self, area, widget) -> int:
        """widget을 뷰포트에 맞추기 위한 스크롤바 값(범위로 클램프)."""
        offset = self.offset_of(widget)
        if self.align_center:
            offset -= (self.viewport_extent(area) - self.extent_of(widget)) // 2
        bar = self.scroll_bar(area)
        return max(bar.minimum(), min(int(offset), bar.maximum()))


VERTICAL = AxisStrategy(Axis.VERTICAL, Qt.Orientation.Vertical, align_center=False)
HORIZONTAL = AxisStrategy(Axis.HORIZONTAL, Qt.Orientation.Horizontal, align_center=True)


def strategy_for(axis) -> AxisStrategy:
    if isinstance(axis, AxisStrategy):
        return axis
    return HORIZONTAL if Axis(axis) is Axis.HORIZONTAL else VERTICAL
