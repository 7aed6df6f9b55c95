from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from PyQt6.QtCore import Qt, QSettings  # type: ignore[import]
from PyQt6.QtGui import QKeySequence, QShortcut  # type: ignore[import]
from PyQt6.QtWidgets import (  # type: ignore[import]
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QButtonGroup,
)

from ..core.config import NavigationSettings
from ..core.navigation import MotionStyle
from ..input.axis import Axis
from ..storage.settings_store import load_settings
from ..utils.logging_setup import get_logger
from .history import SectionHistory
from .scroll_container import SnapScrollContainer
from . import title_status as ts


@dataclass(frozen=True)
class SectionSpec:
    id: str
    title: str
    description: str
    color: str


DEFAULT_SECTIONS: tuple[SectionSpec, ...] = (
    SectionSpec("home", "Home", "휠, 트랙패드, 터치로 한 섹션씩 이동합니다.", "#3b5bdb"),
    SectionSpec("about", "About", "관성 스크롤은 한 번의 이동으로만 처리됩니다.", "#7048e8"),
    SectionSpec("features", "Features", "Shift+휠 또는 가로 스와이프로 아이템을 넘깁니다.", "#c2255c"),
    SectionSpec("demo", "Try It", "트랙패드로 세게 밀어도 한 칸만 이동합니다.", "#e8590c"),
    SectionSpec("contact", "Get Started", "Alt+←/→ 로 뒤로/앞으로 이동합니다.", "#2b8a3e"),
)

CAROUSEL_ITEMS = ("Wheel", "Trackpad", "Touch", "Keyboard", "History", "Watchdog")


def _section_widget(section: SectionSpec, extra: Optional[QWidget] = None) -> QWidget:
    w = QWidget()
    w.setObjectName(f"section_{section.id}")
    w.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
    w.setStyleSheet(f"#section_{section.id} {{ background-color: {section.color}; }} QLabel {{ color: #ffffff; }}")
    lay = QVBoxLayout(w)
    lay.setContentsMargins(40, 40, 40, 40)
    lay.addStretch(1)
    title = QLabel(section.title, w)
    title.setAlignment(Qt.AlignmentFlag.AlignCenter)
    title.setStyleSheet("font-size: 36px; font-weight: 600;")
    desc = QLabel(section.description, w)
    desc.setAlignment(Qt.AlignmentFlag.AlignCenter)
    desc.setWordWrap(True)
    lay.addWidget(title)
    lay.addWidget(desc)
    if extra is not None:
        lay.addWidget(extra)
    lay.addStretch(1)
    return w


def _carousel_item(text: str) -> QLabel:
    lbl = QLabel(text)
    lbl.setAlignment(Qt.AlignmentFlag.AlignCenter)
    lbl.setStyleSheet("background-color: rgba(0,0,0,90); border-radius: 6px; font-size: 20px;")
    return lbl


class SnapNavWindow(QMainWindow):
    def __init__(self, sections: Sequence[SectionSpec] = DEFAULT_SECTIONS,
                 settings: Optional[NavigationSettings] = None, with_carousel: bool = True):
        super().__init__()
        self.log = get_logger("ui.SnapNavWindow")
        self.qsettings = QSettings("SnapNav", "SnapNav")
        self.settings = settings or load_settings(self.qsettings)
        self.sections = tuple(sections)
        self.resize(960, 640)

        central = QWidget()
        self.setCentralWidget(central)
        root = QVBoxLayout(central)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(0)

        self.history = SectionHistory([s.id for s in self.sections], self)

        self.container = SnapScrollContainer(Axis.VERTICAL, self.settings, central)
        self.carousel: Optional[SnapScrollContainer] = None
        for section in self.sections:
            extra = None
            if with_carousel and section.id == "features" and self.carousel is None:
                extra = self._build_carousel()
            self.container.add_section(_section_widget(section, extra), section.id)

        body = QHBoxLayout()
        body.setContentsMargins(0, 0, 0, 0)
        body.setSpacing(0)
        body.addWidget(self.container, 1)
        body.addWidget(self._build_dots(central))
        root.addLayout(body, 1)

        status = QHBoxLayout()
        status.setContentsMargins(8, 4, 8, 4)
        self.status_left_label = QLabel("", central)
        self.status_right_label = QLabel("", central)
        self.status_right_label.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        status.addWidget(self.status_left_label)
        status.addWidget(self.status_right_label, 1)
        root.addLayout(status)

        # 제스처/API 전환만 해시 기록, 뒤로/앞으로는 popState로 돌아온다
        self.container.set_url_updater(self.history.push)
        self.history.popState.connect(self.container.handle_pop_state_navigation)
        self.container.currentIndexChanged.connect(self._on_index_changed)
        self.container.transitionFinished.connect(lambda *_: ts.update_status_right(self))
        self.history.hashChanged.connect(lambda *_: ts.update_status_right(self))

        self._setup_shortcuts()
        self.history.replace(self.container.current_index)
        self._on_index_changed(self.container.current_index)

    def _build_carousel(self) -> QWidget:
        self.carousel = SnapScrollContainer(Axis.HORIZONTAL, self.settings, section_extent_ratio=0.6)
        self.carousel.setMinimumHeight(140)
        # 캐러셀 위의 세로 제스처도 섹션을 넘긴다
        self.carousel.nest_in(self.container)
        for i, text in enumerate(CAROUSEL_ITEMS):
            self.carousel.add_section(_carousel_item(text), f"item-{i + 1}")
        return self.carousel

    def _build_dots(self, parent: QWidget) -> QWidget:
        panel = QWidget(parent)
        lay = QVBoxLayout(panel)
        lay.setContentsMargins(8, 8, 8, 8)
        lay.addStretch(1)
        self.dot_group = QButtonGroup(panel)
        self.dot_group.setExclusive(True)
        for i, section in enumerate(self.sections):
            b = QPushButton("", panel)
            b.setCheckable(True)
            b.setFixedSize(14, 14)
            b.setToolTip(section.title)
            b.setFocusPolicy(Qt.FocusPolicy.NoFocus)
            b.setStyleSheet(
                "QPushButton { border-radius: 7px; background: rgba(128,128,128,110); }"
                "QPushButton:checked { background: #ffffff; border: 1px solid #555; }"
            )
            self.dot_group.addButton(b, i)
            lay.addWidget(b)
        lay.addStretch(1)
        self.dot_group.idClicked.connect(self.container.jump_to)
        return panel

    def _setup_shortcuts(self) -> None:
        self._shortcuts = []
        bindings = (
            ("Down", self.container.next), ("PgDown", self.container.next),
            ("Up", self.container.previous), ("PgUp", self.container.previous),
            ("Home", lambda: self.container.jump_to(0)),
            ("End", lambda: self.container.jump_to(self.container.section_count() - 1)),
            ("Alt+Left", self.history.back), ("Alt+Right", self.history.forward),
        )
        for seq, fn in bindings:
            sc = QShortcut(QKeySequence(seq), self)
            sc.setContext(Qt.ShortcutContext.ApplicationShortcut)
            sc.activated.connect(fn)
            self._shortcuts.append(sc)
        if self.carousel is not None:
            for seq, fn in (("Right", self.carousel.next), ("Left", self.carousel.previous)):
                sc = QShortcut(QKeySequence(seq), self)
                sc.activated.connect(fn)
                self._shortcuts.append(sc)

    def _on_index_changed(self, index: int) -> None:
        section = self.sections[index] if 0 <= index < len(self.sections) else None
        ts.update_window_title(self, section.title if section else None)
        ts.update_status_left(self)
        ts.update_status_right(self)
        btn = self.dot_group.button(index)
        if btn is not None:
            btn.setChecked(True)

    def open_hash(self, value: str) -> bool:
        """딥링크(#about 등). 초기 로드는 애니메이션 없이 이동."""
        idx = self.history.index_for_hash(value)
        if idx == -1:
            self.log.info("deep_link_unknown | hash=%s", value)
            return False
        ok = self.container.handle_url_section_change(idx, MotionStyle.IMMEDIATE)
        if ok:
            self.history.replace(idx)
        return ok

    def closeEvent(self, event):
        self.log.info("window_close | index=%d", self.container.current_index)
        self.container.teardown()
        if self.carousel is not None:
            self.carousel.teardown()
        super().closeEvent(event)
