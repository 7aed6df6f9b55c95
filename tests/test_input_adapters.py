import pytest
from PyQt6.QtCore import QEvent, QPoint, QPointF, Qt

from snapnav.core.gesture_classifier import GestureKind
from snapnav.input.axis import HORIZONTAL, VERTICAL, Axis, strategy_for
from snapnav.input.event_filters import GestureEventFilter
from snapnav.input.touch_adapter import TouchAdapter
from snapnav.input.wheel_adapter import WheelAdapter, wheel_delta_from_event


class FakeWheelEvent:
    def __init__(self, pixel=(0, 0), angle=(0, 0), shift=False):
        self._pixel = QPoint(*pixel)
        self._angle = QPoint(*angle)
        self._mods = Qt.KeyboardModifier.ShiftModifier if shift else Qt.KeyboardModifier.NoModifier

    def pixelDelta(self):
        return self._pixel

    def angleDelta(self):
        return self._angle

    def modifiers(self):
        return self._mods


def test_axis_projection():
    assert VERTICAL.project_wheel(30, -12) == -12
    assert HORIZONTAL.project_wheel(30, -12) == 30
    assert HORIZONTAL.project_wheel(0, -12) == 0
    assert HORIZONTAL.project_wheel(0, -12, shift=True) == -12
    assert VERTICAL.project_point(5, 9) == 9
    assert HORIZONTAL.project_point(5, 9) == 5
    assert strategy_for("horizontal") is HORIZONTAL
    assert strategy_for(Axis.VERTICAL) is VERTICAL


def test_wheel_delta_prefers_pixel_delta_and_flips_sign():
    dx, dy, shift = wheel_delta_from_event(FakeWheelEvent(pixel=(0, -30), angle=(0, -120)))
    assert (dx, dy, shift) == (0.0, 30.0, False)


def test_wheel_delta_falls_back_to_angle_delta():
    dx, dy, _ = wheel_delta_from_event(FakeWheelEvent(angle=(0, 120)))
    # 위로 한 칸 = 이전 방향
    assert dy == -40.0
    assert dx == 0.0


def test_wheel_delta_reports_shift():
    _, _, shift = wheel_delta_from_event(FakeWheelEvent(angle=(0, -120), shift=True))
    assert shift is True


def test_wheel_noise_is_consumed_without_classifying(make_controller):
    nav = make_controller(total=3)
    wheel = WheelAdapter(nav, VERTICAL)
    assert wheel.handle(0, 3) is True
    assert wheel.last_kind is None
    assert nav.current_index == 0


def test_wheel_off_axis_not_consumed(make_controller):
    nav = make_controller(total=3)
    wheel = WheelAdapter(nav, HORIZONTAL)
    assert wheel.handle(0, 50) is False
    assert nav.current_index == 0


def test_horizontal_wheel_with_shift_steps(make_controller):
    nav = make_controller(total=3)
    wheel = WheelAdapter(nav, HORIZONTAL)
    assert wheel.handle(0, 50, shift=True) is True
    assert wheel.last_kind is GestureKind.INTENTIONAL
    assert nav.current_item == 1


def test_wheel_backwards(make_controller):
    nav = make_controller(total=3, initial_index=2)
    wheel = WheelAdapter(nav, VERTICAL)
    wheel.handle(0, -60)
    assert nav.current_index == 1


def test_wheel_handle_event(make_controller):
    nav = make_controller(total=3)
    wheel = WheelAdapter(nav, VERTICAL)
    assert wheel.handle_event(FakeWheelEvent(pixel=(0, -25))) is True
    assert nav.current_index == 1


@pytest.fixture
def touch(make_controller):
    nav = make_controller(total=4)
    return TouchAdapter(nav, VERTICAL)


def test_swipe_up_moves_forward(touch, clock):
    assert touch.begin(100, 400) is True
    clock.advance(200)
    assert touch.end(100, 300) is True
    assert touch.controller.current_index == 1
    assert touch.is_active is False


def test_swipe_down_moves_back(make_controller, clock):
    nav = make_controller(total=4, initial_index=2)
    touch = TouchAdapter(nav, VERTICAL)
    touch.begin(0, 100)
    clock.advance(100)
    touch.end(0, 260)
    assert nav.current_index == 1


def test_short_swipe_discarded(touch, clock):
    touch.begin(0, 300)
    clock.advance(100)
    assert touch.end(0, 251) is False
    assert touch.controller.current_index == 0


def test_slow_swipe_discarded(touch, clock):
    touch.begin(0, 300)
    clock.advance(801)
    assert touch.end(0, 100) is False
    assert touch.controller.current_index == 0


def test_touch_start_ignored_during_transition(touch):
    touch.controller.jump_to(2)
    assert touch.begin(0, 300) is False
    assert touch.is_active is False
    assert touch.move(0, 280) is False
    assert touch.end(0, 100) is False


def test_touch_move_suppresses_default_while_active(touch):
    touch.begin(0, 300)
    assert touch.move(0, 280) is True


def test_touch_cancel_clears_active(touch):
    touch.begin(0, 300)
    touch.cancel()
    assert touch.is_active is False
    assert touch.end(0, 0) is False


def test_touch_uses_normal_throttle(touch, clock):
    nav = touch.controller
    touch.begin(0, 300)
    clock.advance(100)
    touch.end(0, 200)
    nav.confirm_arrived()
    clock.set(650)
    touch.begin(0, 300)
    clock.set(700)
    assert touch.end(0, 200) is True
    assert nav.current_index == 2


def test_horizontal_swipe_left_moves_forward(make_controller, clock):
    nav = make_controller(total=3)
    touch = TouchAdapter(nav, HORIZONTAL, min_swipe_px=30)
    touch.begin(200, 50)
    clock.advance(50)
    touch.end(160, 400)
    assert nav.current_item == 1


class FakeFilteredWheel(FakeWheelEvent):
    def type(self):
        return QEvent.Type.Wheel


class FakeTouchPoint:
    def __init__(self, x, y):
        self._pos = QPointF(x, y)

    def position(self):
        return self._pos


class FakeTouchEvent:
    def __init__(self, kind, x=0.0, y=0.0):
        self._kind = kind
        self._points = [FakeTouchPoint(x, y)]
        self.accepted = False

    def type(self):
        return self._kind

    def points(self):
        return self._points

    def accept(self):
        self.accepted = True


def _nested(make_controller):
    outer_nav = make_controller(total=5)
    inner_nav = make_controller(total=5)
    outer = GestureEventFilter(WheelAdapter(outer_nav, VERTICAL), TouchAdapter(outer_nav, VERTICAL))
    inner = GestureEventFilter(WheelAdapter(inner_nav, HORIZONTAL), TouchAdapter(inner_nav, HORIZONTAL))
    inner.forward_to(outer)
    return outer_nav, inner_nav, outer, inner


def test_nested_filter_feeds_jittered_wheel_to_both_axes(make_controller):
    outer_nav, inner_nav, outer, inner = _nested(make_controller)
    # 트랙패드 세로 스와이프에 섞인 가로 흔들림
    assert inner.eventFilter(None, FakeFilteredWheel(pixel=(-6, -60))) is True
    assert outer_nav.current_index == 1
    assert inner_nav.current_index == 1


def test_nested_filter_vertical_wheel_reaches_outer_only(make_controller):
    outer_nav, inner_nav, outer, inner = _nested(make_controller)
    assert inner.eventFilter(None, FakeFilteredWheel(pixel=(0, -60))) is True
    assert outer_nav.current_index == 1
    assert inner_nav.current_index == 0


def test_nested_filter_vertical_swipe_moves_outer(make_controller, clock):
    outer_nav, inner_nav, outer, inner = _nested(make_controller)
    begin = FakeTouchEvent(QEvent.Type.TouchBegin, 100, 200)
    assert inner.eventFilter(None, begin) is True
    assert begin.accepted
    clock.advance(120)
    inner.eventFilter(None, FakeTouchEvent(QEvent.Type.TouchUpdate, 101, 140))
    inner.eventFilter(None, FakeTouchEvent(QEvent.Type.TouchEnd, 102, 80))
    assert outer_nav.current_index == 1
    assert inner_nav.current_index == 0


def test_disabled_outer_filter_is_skipped(make_controller):
    outer_nav, inner_nav, outer, inner = _nested(make_controller)
    outer.enabled = False
    inner.eventFilter(None, FakeFilteredWheel(pixel=(-6, -60)))
    assert outer_nav.current_index == 0
    assert inner_nav.current_index == 1
    with pytest.raises(ValueError):
        inner.forward_to(inner)
