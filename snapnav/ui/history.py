from __future__ import annotations

from typing import Sequence

from PyQt6.QtCore import QObject, pyqtSignal  # type: ignore[import]

from ..utils.logging_setup import get_logger

_log = get_logger("ui.history")


def normalize_hash(value: str) -> str:
    v = str(value or "").strip()
    return v[1:] if v.startswith("#") else v


class SectionHistory(QObject):
    """#섹션ID 해시 기반 히스토리(브라우저 URL/뒤로가기 대응).

    push()는 제스처/API 전환에서만 호출된다. back()/forward()는 popState를 내보내며
    이 경로의 전환은 다시 push되지 않는다.
    """

    hashChanged = pyqtSignal(str)
    popState = pyqtSignal(int)

    def __init__(self, section_ids: Sequence[str], parent=None):
        super().__init__(parent)
        self._ids = [str(s) for s in section_ids]
        self._entries: list[str] = []
        self._pos = -1

    @property
    def section_ids(self) -> list[str]:
        return list(self._ids)

    @property
    def current_hash(self) -> str:
        if 0 <= self._pos < len(self._entries):
            return f"#{self._entries[self._pos]}"
        return ""

    def index_for_hash(self, value: str) -> int:
        key = normalize_hash(value)
        try:
            return self._ids.index(key)
        except ValueError:
            return -1

    def replace(self, index: int) -> None:
        """현재 항목을 바꾼다(초기 로드/딥링크)."""
        if not (0 <= index < len(self._ids)):
            return
        sid = self._ids[index]
        if self._pos < 0:
            self._entries = [sid]
            self._pos = 0
        else:
            self._entries[self._pos] = sid
        self.hashChanged.emit(self.current_hash)

    def push(self, index: int) -> None:
        if not (0 <= index < len(self._ids)):
            return
        sid = self._ids[index]
        if 0 <= self._pos < len(self._entries) and self._entries[self._pos] == sid:
            return
        # 앞으로 가기 기록은 버린다
        del self._entries[self._pos + 1:]
        self._entries.append(sid)
        self._pos = len(self._entries) - 1
        _log.debug("history_push | hash=#%s | depth=%d", sid, len(self._entries))
        self.hashChanged.emit(self.current_hash)

    def can_back(self) -> bool:
        return self._pos > 0

    def can_forward(self) -> bool:
        return self._pos < len(self._entries) - 1

    def back(self) -> bool:
        if not self.can_back():
            return False
        self._pos -= 1
        self._emit_pop()
        return True

    def forward(self) -> bool:
        if not self.can_forward():
            return False
        self._pos += 1
        self._emit_pop()
        return True

    def _emit_pop(self) -> None:
        h = self.current_hash
        self.hashChanged.emit(h)
        idx = self.index_for_hash(h)
        if idx != -1:
            self.popState.emit(idx)
