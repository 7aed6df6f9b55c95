from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import QObject, QEvent, Qt  # type: ignore[import]

from ..utils.logging_setup import get_logger

_log = get_logger("input.filter")


def _first_point(event):
    try:
        pts = event.points()
        if pts:
            p = pts[0].position()
            return float(p.x()), float(p.y())
    except Exception:
        pass
    return None


class GestureEventFilter(QObject):
    """제스처 표면으로 지정된 위젯의 휠/터치 이벤트를 어댑터로 보낸다.

    표면은 창 전체일 수도, 컨테이너만일 수도 있다. 계약은 동일.
    중첩된 컨테이너(세로 섹션 안의 가로 캐러셀)는 forward_to()로 바깥 필터를 연결해
    같은 이벤트를 바깥 축에도 전달한다. 바깥 컨테이너는 창 전체에서 듣는 것과 같게 동작한다.
    """

    def __init__(self, wheel_adapter, touch_adapter, parent=None):
        super().__init__(parent)
        self._wheel = wheel_adapter
        self._touch = touch_adapter
        self._surfaces: list = []
        self._outer: Optional["GestureEventFilter"] = None
        self.enabled = True

    def attach(self, surface) -> None:
        try:
            surface.setAttribute(Qt.WidgetAttribute.WA_AcceptTouchEvents, True)
        except Exception:
            pass
        surface.installEventFilter(self)
        self._surfaces.append(surface)
        _log.debug("filter_attach | surface=%s", type(surface).__name__)

    def detach_all(self) -> None:
        for s in self._surfaces:
            try:
                s.removeEventFilter(self)
            except Exception:
                pass
        self._surfaces.clear()

    def forward_to(self, outer: Optional["GestureEventFilter"]) -> None:
        if outer is self:
            raise ValueError("filter cannot forward to itself")
        self._outer = outer
        _log.debug("filter_forward | outer=%s", "none" if outer is None else "set")

    def _chain(self) -> list["GestureEventFilter"]:
        chain = []
        f: Optional[GestureEventFilter] = self
        while f is not None and f not in chain:
            if f.enabled:
                chain.append(f)
            f = f._outer
        return chain

    def eventFilter(self, obj, event):
        if not self.enabled:
            return False
        et = event.type()
        if et == QEvent.Type.Wheel:
            # 각 축이 자기 성분만 본다. 하나라도 처리하면 기본 스크롤을 막는다
            handled = [f._on_wheel(event) for f in self._chain()]
            return any(handled)
        if et in (QEvent.Type.TouchBegin, QEvent.Type.TouchUpdate, QEvent.Type.TouchEnd, QEvent.Type.TouchCancel):
            handled = [f._on_touch(et, event) for f in self._chain()]
            if et == QEvent.Type.TouchBegin and any(handled):
                # TouchBegin을 수락해야 이후 Update/End가 전달된다
                event.accept()
            return any(handled)
        return False

    def _on_wheel(self, event) -> bool:
        if self._wheel is None:
            return False
        return bool(self._wheel.handle_event(event))

    def _on_touch(self, et, event) -> bool:
        if self._touch is None:
            return False
        if et == QEvent.Type.TouchBegin:
            pt = _first_point(event)
            if pt is not None:
                self._touch.begin(*pt)
            return True
        if et == QEvent.Type.TouchUpdate:
            return bool(self._touch.move(0.0, 0.0))
        if et == QEvent.Type.TouchEnd:
            pt = _first_point(event)
            if pt is not None:
                self._touch.end(*pt)
            else:
                self._touch.cancel()
            return True
        self._touch.cancel()
        return True
