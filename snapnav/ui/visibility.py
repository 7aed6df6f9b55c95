from __future__ import annotations

from typing import Callable, Optional

from PyQt6.QtCore import QObject, QPoint, QRect, QTimer  # type: ignore[import]


def visible_ratio(area, widget) -> float:
    """QScrollArea 뷰포트 안에서 widget이 보이는 면적 비율(0..1)."""
    try:
        content = area.widget()
        if content is None or widget is None:
            return 0.0
        # 위젯 좌표 -> content 좌표 -> 뷰포트 좌표
        top_left = widget.mapTo(content, QPoint(0, 0)) + content.pos()
        rect = QRect(top_left, widget.size())
        total = rect.width() * rect.height()
        if total <= 0:
            return 0.0
        inter = rect.intersected(area.viewport().rect())
        if inter.isEmpty():
            return 0.0
        return (inter.width() * inter.height()) / float(total)
    except Exception:
        return 0.0


class VisibilityObserver(QObject):
    """전환 대상이 충분히 보이면 완료를 알린다(IntersectionObserver 대응).

    스크롤 값 변경마다 바로 판정하지 않고 다음 이벤트 루프로 미뤄 한 번에 처리한다.
    """

    def __init__(self, area, widget_for: Callable[[int], Optional[object]],
                 target_for: Callable[[], int], on_visible: Callable[[int], object],
                 threshold: float = 0.5, parent=None):
        super().__init__(parent)
        self._area = area
        self._widget_for = widget_for
        self._target_for = target_for
        self._on_visible = on_visible
        self.threshold = float(threshold)
        self._pending = QTimer(self)
        self._pending.setSingleShot(True)
        self._pending.setInterval(0)
        self._pending.timeout.connect(self.check)

    def schedule_check(self, *_args) -> None:
        if not self._pending.isActive():
            self._pending.start()

    def cancel(self) -> None:
        self._pending.stop()

    def check(self) -> bool:
        idx = int(self._target_for())
        if idx < 0:
            return False
        widget = self._widget_for(idx)
        if widget is None:
            return False
        if visible_ratio(self._area, widget) >= self.threshold:
            self._on_visible(idx)
            return True
        return False
