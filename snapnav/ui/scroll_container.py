from __future__ import annotations

from typing import Callable, Optional

from PyQt6.QtCore import Qt, QTimer, pyqtSignal, QEasingCurve, QPropertyAnimation  # type: ignore[import]
from PyQt6.QtWidgets import QScrollArea, QWidget, QVBoxLayout, QHBoxLayout, QFrame  # type: ignore[import]

from ..core.config import NavigationSettings, DEFAULT_SETTINGS
from ..core.navigation import NavigationController, JumpCause, MotionStyle
from ..input.axis import Axis, strategy_for
from ..input.wheel_adapter import WheelAdapter
from ..input.touch_adapter import TouchAdapter
from ..input.event_filters import GestureEventFilter
from ..utils.clock import Clock
from ..utils.logging_setup import get_logger
from .visibility import VisibilityObserver


class SnapScrollContainer(QScrollArea):
    """섹션(세로) 또는 아이템(가로)을 한 번에 하나씩 넘기는 스크롤 영역.

    - 요소 레지스트리: add_section()으로 등록한 위젯 목록
    - 화면 이동: 축 스크롤바 값을 QPropertyAnimation으로 이동
    - 완료 감지: VisibilityObserver가 대상 가시 비율 >= 임계값이면 confirm_arrived
    - 복구: 전환별 안전 타이머 + 주기적 워치독
    """

    currentIndexChanged = pyqtSignal(int)
    transitionStarted = pyqtSignal(int)
    transitionFinished = pyqtSignal(int, str)

    def __init__(self, axis=Axis.VERTICAL, settings: Optional[NavigationSettings] = None,
                 parent: Optional[QWidget] = None, clock: Optional[Clock] = None,
                 update_url: Optional[Callable[[int], None]] = None,
                 section_extent_ratio: float = 1.0):
        super().__init__(parent)
        self.axis = strategy_for(axis)
        self.settings = settings or DEFAULT_SETTINGS
        self.log = get_logger(f"ui.SnapScrollContainer.{self.axis.axis.value}")
        self._sections: list[QWidget] = []
        self._section_ids: list[str] = []
        self._update_url = update_url
        self._extent_ratio = max(0.05, min(1.0, float(section_extent_ratio)))
        self._torn_down = False
        self._safety_token = 0
        self._anim: Optional[QPropertyAnimation] = None

        # 어댑터가 스크롤 제스처를 소유하므로 기본 스크롤바/포커스 스크롤은 끈다
        self.setWidgetResizable(True)
        self.setFrameShape(QFrame.Shape.NoFrame)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setFocusPolicy(Qt.FocusPolicy.NoFocus)

        self._content = QWidget(self)
        if self.axis.axis is Axis.VERTICAL:
            self._layout = QVBoxLayout(self._content)
        else:
            self._layout = QHBoxLayout(self._content)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._layout.setSpacing(0)
        self.setWidget(self._content)

        self.controller = NavigationController(
            1,
            settings=self.settings,
            clock=clock,
            scroll_into_view=self._scroll_into_view,
            update_url=self._notify_url,
            on_index_changed=self.currentIndexChanged.emit,
            on_transition_started=self._on_transition_started,
            on_transition_finished=self._on_transition_finished,
        )

        self.wheel_adapter = WheelAdapter(self.controller, self.axis)
        self.touch_adapter = TouchAdapter(self.controller, self.axis)
        self._filter = GestureEventFilter(self.wheel_adapter, self.touch_adapter, self)
        self._filter.attach(self.viewport())

        self.observer = VisibilityObserver(
            self, self.section_widget, self._observed_target,
            self.controller.confirm_arrived, threshold=self.settings.visibility_threshold, parent=self,
        )
        self.axis.scroll_bar(self).valueChanged.connect(self.observer.schedule_check)

        self._safety_timer = QTimer(self)
        self._safety_timer.setSingleShot(True)
        self._safety_timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._safety_timer.timeout.connect(self._on_safety_timeout)

        self._watchdog_timer = QTimer(self)
        self._watchdog_timer.setInterval(int(self.settings.watchdog_interval_ms))
        self._watchdog_timer.timeout.connect(self._on_watchdog)
        self._watchdog_timer.start()

    # --- 요소 레지스트리 -------------------------------------------------

    def add_section(self, widget: QWidget, section_id: Optional[str] = None) -> int:
        index = len(self._sections)
        self._sections.append(widget)
        self._section_ids.append(str(section_id) if section_id else f"section-{index + 1}")
        self._layout.addWidget(widget)
        self._apply_section_extent(widget)
        self.controller.set_total(len(self._sections))
        return index

    def section_widget(self, index: int) -> Optional[QWidget]:
        if 0 <= index < len(self._sections):
            return self._sections[index]
        return None

    @property
    def section_ids(self) -> list[str]:
        return list(self._section_ids)

    def section_count(self) -> int:
        return len(self._sections)

    def gesture_surface(self, widget: QWidget) -> None:
        """뷰포트 외에 추가로 제스처를 받을 위젯(예: 창 전체)."""
        self._filter.attach(widget)

    def set_url_updater(self, fn: Optional[Callable[[int], None]]) -> None:
        self._update_url = fn

    def nest_in(self, outer: Optional["SnapScrollContainer"]) -> None:
        """바깥 컨테이너 안에 놓인 경우, 이 표면의 제스처를 바깥 축에도 전달한다."""
        self._filter.forward_to(None if outer is None else outer._filter)

    # --- 공개 내비게이션 API ---------------------------------------------

    @property
    def current_index(self) -> int:
        return self.controller.current_index

    @property
    def current_item(self) -> int:
        return self.controller.current_index

    @property
    def in_transition(self) -> bool:
        return self.controller.in_transition

    def jump_to(self, index: int, motion: MotionStyle = MotionStyle.SMOOTH) -> bool:
        if self._torn_down:
            return False
        return self.controller.jump_to(index, JumpCause.API, motion)

    # 가로 축 별칭
    def scroll_to_item(self, index: int, motion: MotionStyle = MotionStyle.SMOOTH) -> bool:
        return self.jump_to(index, motion)

    def next(self) -> bool:
        return self.jump_to(self.current_index + 1)

    def previous(self) -> bool:
        return self.jump_to(self.current_index - 1)

    def handle_pop_state_navigation(self, index: int) -> bool:
        if self._torn_down:
            return False
        return self.controller.handle_pop_state_navigation(index)

    def handle_url_section_change(self, index: int, motion: MotionStyle = MotionStyle.SMOOTH) -> bool:
        if self._torn_down:
            return False
        return self.controller.handle_url_section_change(index, motion)

    # --- 컨트롤러 협력자 -------------------------------------------------

    def _scroll_into_view(self, index: int, motion: MotionStyle) -> bool:
        widget = self.section_widget(index)
        if widget is None:
            return False
        bar = self.axis.scroll_bar(self)
        end = self.axis.target_scroll_value(self, widget)
        try:
            if self._anim is not None:
                self._anim.stop()
        except Exception:
            pass
        duration = int(self.settings.scroll_duration_ms)
        if motion is MotionStyle.IMMEDIATE or duration <= 0 or bar.value() == end:
            bar.setValue(end)
            # 값이 그대로면 valueChanged가 오지 않으므로 직접 예약
            self.observer.schedule_check()
            return True
        self._anim = QPropertyAnimation(bar, b"value", self)
        self._anim.setDuration(duration)
        self._anim.setEasingCurve(QEasingCurve.Type.OutCubic)
        self._anim.setStartValue(bar.value())
        self._anim.setEndValue(end)
        self._anim.finished.connect(self.observer.schedule_check)
        self._anim.start()
        return True

    def _notify_url(self, index: int) -> None:
        if self._update_url is None:
            return
        try:
            self._update_url(index)
        except Exception as e:
            self.log.warning("update_url_fail | index=%d | err=%s", index, str(e))

    def _observed_target(self) -> int:
        return self.controller.target_index if self.controller.in_transition else -1

    def _on_transition_started(self, index: int, transition_id: int) -> None:
        self._safety_token = transition_id
        self._safety_timer.start(int(self.settings.safety_timeout_ms))
        self.transitionStarted.emit(index)

    def _on_transition_finished(self, index: int, reason: str) -> None:
        self._safety_timer.stop()
        self.transitionFinished.emit(index, reason)

    def _on_safety_timeout(self) -> None:
        if self._torn_down:
            return
        self.controller.safety_timeout_expired(self._safety_token)

    def _on_watchdog(self) -> None:
        if self._torn_down:
            return
        self.controller.watchdog_tick()

    # --- Qt 이벤트 -------------------------------------------------------

    def wheelEvent(self, event):
        # 네이티브 스크롤 금지. 축과 무관한 휠은 부모로 전파
        event.ignore()

    def keyPressEvent(self, event):
        event.ignore()

    def closeEvent(self, event):
        self.teardown()
        super().closeEvent(event)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        for w in self._sections:
            self._apply_section_extent(w)
        # 리사이즈 후에도 현재 섹션에 맞춰 둔다
        if not self.controller.in_transition:
            QTimer.singleShot(0, self._resnap)

    def _apply_section_extent(self, widget: QWidget) -> None:
        extent = int(self.axis.viewport_extent(self) * self._extent_ratio)
        if extent <= 0:
            return
        if self.axis.axis is Axis.VERTICAL:
            widget.setFixedHeight(extent)
        else:
            widget.setFixedWidth(extent)

    def _resnap(self) -> None:
        if self._torn_down or self.controller.in_transition:
            return
        widget = self.section_widget(self.current_index)
        if widget is None:
            return
        self.axis.scroll_bar(self).setValue(self.axis.target_scroll_value(self, widget))

    # --- 정리 ------------------------------------------------------------

    def teardown(self) -> None:
        if self._torn_down:
            return
        self._torn_down = True
        self._safety_timer.stop()
        self._watchdog_timer.stop()
        self.observer.cancel()
        try:
            if self._anim is not None:
                self._anim.stop()
        except Exception:
            pass
        self._filter.enabled = False
        self._filter.detach_all()
        self.controller.reset()
        self.log.info("teardown | sections=%d | index=%d", len(self._sections), self.current_index)

    @property
    def is_torn_down(self) -> bool:
        return self._torn_down

    def watchdog_active(self) -> bool:
        return self._watchdog_timer.isActive()
