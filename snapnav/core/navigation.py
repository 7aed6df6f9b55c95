from __future__ import annotations

from enum import Enum
from typing import Callable, Optional

from .config import NavigationSettings, DEFAULT_SETTINGS
from .gesture_classifier import GestureClassifier, sign
from .state import NavigationState, NavigationSnapshot
from .throttle import AdaptiveThrottle
from ..utils.clock import Clock, monotonic_ms
from ..utils.logging_setup import get_logger

_log = get_logger("core.navigation")


class JumpCause(str, Enum):
    GESTURE = "gesture"      # 휠/터치 어댑터
    API = "api"              # 직접 호출(버튼, 키보드 등)
    POP_STATE = "pop_state"  # 뒤로/앞으로
    URL = "url"              # 초기 로드/딥링크


class MotionStyle(str, Enum):
    SMOOTH = "smooth"
    IMMEDIATE = "immediate"


# 스로틀을 소모하고 URL 갱신을 알리는 원인
_RECORDED_CAUSES = (JumpCause.GESTURE, JumpCause.API)


class NavigationController:
    """현재 섹션 인덱스를 소유하고 진행 중 전환을 직렬화하는 상태 머신.

    Idle -> Transitioning: jump_to()
    Transitioning -> Idle: confirm_arrived(), safety_timeout_expired(), watchdog_tick()

    완료 신호와 워치독은 in_transition만 해제하고 current_index는 건드리지 않는다.
    """

    def __init__(
        self,
        total: int,
        initial_index: int = 0,
        *,
        settings: Optional[NavigationSettings] = None,
        throttle: Optional[AdaptiveThrottle] = None,
        classifier: Optional[GestureClassifier] = None,
        clock: Optional[Clock] = None,
        scroll_into_view: Optional[Callable[[int, MotionStyle], bool]] = None,
        update_url: Optional[Callable[[int], None]] = None,
        on_index_changed: Optional[Callable[[int], None]] = None,
        on_transition_started: Optional[Callable[[int, int], None]] = None,
        on_transition_finished: Optional[Callable[[int, str], None]] = None,
    ):
        if int(total) < 1:
            raise ValueError(f"total must be >= 1, got {total}")
        if not (0 <= int(initial_index) < int(total)):
            raise ValueError(f"initial_index {initial_index} out of range for total {total}")
        self.settings = settings or DEFAULT_SETTINGS
        self._clock: Clock = clock or monotonic_ms
        self.throttle = throttle or AdaptiveThrottle.from_settings(self.settings, clock=self._clock)
        self.classifier = classifier or GestureClassifier.from_settings(self.settings)
        self._state = NavigationState(current_index=int(initial_index), total=int(total))

        self._scroll_into_view = scroll_into_view
        self._update_url = update_url
        self._on_index_changed = on_index_changed
        self._on_transition_started = on_transition_started
        self._on_transition_finished = on_transition_finished

    # --- 읽기 전용 상태 -------------------------------------------------

    @property
    def current_index(self) -> int:
        return self._state.current_index

    # 가로 축 별칭
    @property
    def current_item(self) -> int:
        return self._state.current_index

    @property
    def total(self) -> int:
        return self._state.total

    @property
    def in_transition(self) -> bool:
        return self._state.in_transition

    @property
    def target_index(self) -> int:
        return self._state.target_index

    @property
    def transition_id(self) -> int:
        return self._state.transition_id

    @property
    def state(self) -> NavigationState:
        return self._state

    def now(self) -> int:
        return int(self._clock())

    def in_range(self, index: int) -> bool:
        return 0 <= index < self._state.total

    def snapshot(self, now: Optional[int] = None) -> NavigationSnapshot:
        return NavigationSnapshot.of(self._state, self.now() if now is None else int(now))

    # --- 전환 시작 -------------------------------------------------------

    def jump_to(self, target_index: int, cause: JumpCause = JumpCause.API,
                motion: MotionStyle = MotionStyle.SMOOTH) -> bool:
        target_index = int(target_index)
        if not self.in_range(target_index):
            _log.debug("jump_ignored_out_of_range | target=%d | total=%d | cause=%s",
                       target_index, self._state.total, cause.value)
            return False
        if self._state.in_transition and cause is JumpCause.GESTURE:
            # 제스처 전환은 동시에 하나만
            return False

        now = self.now()
        st = self._state
        if st.in_transition:
            _log.info("jump_supersede | prev_target=%d | target=%d | cause=%s",
                      st.target_index, target_index, cause.value)
        st.in_transition = True
        st.transition_started_at = now
        st.target_index = target_index
        st.transition_id += 1

        issued = False
        if self._scroll_into_view is not None:
            issued = bool(self._scroll_into_view(target_index, motion))
        if not issued:
            _log.debug("scroll_skipped_no_element | target=%d", target_index)

        prev = st.current_index
        st.current_index = target_index
        _log.info("jump | from=%d | to=%d | cause=%s | motion=%s", prev, target_index, cause.value, motion.value)

        if self._on_transition_started is not None:
            self._on_transition_started(target_index, st.transition_id)
        if prev != target_index and self._on_index_changed is not None:
            self._on_index_changed(target_index)
        if cause in _RECORDED_CAUSES:
            if self._update_url is not None:
                self._update_url(target_index)
            self.throttle.mark_accepted(now)
        return True

    def step_by(self, delta: float, is_momentum: bool = False) -> bool:
        direction = sign(delta)
        if direction == 0:
            return False
        target = self._state.current_index + direction
        if self._state.in_transition:
            return False
        if self.throttle.is_throttled(is_momentum, self.now()):
            return False
        return self.jump_to(target, JumpCause.GESTURE)

    def handle_pop_state_navigation(self, index: int) -> bool:
        return self.jump_to(index, JumpCause.POP_STATE, MotionStyle.SMOOTH)

    def handle_url_section_change(self, index: int, motion: MotionStyle = MotionStyle.SMOOTH) -> bool:
        return self.jump_to(index, JumpCause.URL, motion)

    # --- 전환 종료 -------------------------------------------------------

    def _finish(self, reason: str) -> None:
        st = self._state
        st.in_transition = False
        if self._on_transition_finished is not None:
            self._on_transition_finished(st.target_index, reason)

    def confirm_arrived(self, index: Optional[int] = None) -> bool:
        st = self._state
        if not st.in_transition:
            return False
        if index is not None and int(index) != st.target_index:
            return False
        self._finish("arrived")
        return True

    def safety_timeout_expired(self, transition_id: Optional[int] = None) -> bool:
        st = self._state
        if not st.in_transition:
            return False
        if transition_id is not None and int(transition_id) != st.transition_id:
            # 이미 다른 전환으로 대체됨
            return False
        _log.info("transition_timeout | target=%d | age=%d", st.target_index, self.now() - st.transition_started_at)
        self._finish("timeout")
        return True

    def watchdog_tick(self, now: Optional[int] = None) -> bool:
        st = self._state
        if not st.in_transition:
            return False
        t = self.now() if now is None else int(now)
        age = t - st.transition_started_at
        if age > self.settings.stall_threshold_ms:
            _log.warning("watchdog_recover | target=%d | age=%d", st.target_index, age)
            self._finish("watchdog")
            return True
        return False

    # --- 수명 주기 -------------------------------------------------------

    def set_total(self, total: int) -> None:
        total = int(total)
        if total < 1:
            raise ValueError(f"total must be >= 1, got {total}")
        self._state.total = total
        if self._state.current_index >= total:
            # 마지막 섹션으로 즉시 이동(전환 중이던 대상도 함께 대체된다)
            _log.info("sections_shrunk | total=%d | index=%d", total, self._state.current_index)
            self.jump_to(total - 1, JumpCause.URL, MotionStyle.IMMEDIATE)

    def reset(self) -> None:
        self.throttle.reset()
        self.classifier.reset()
        st = self._state
        st.in_transition = False
        st.target_index = -1
