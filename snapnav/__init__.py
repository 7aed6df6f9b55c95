# core
from .core.config import NavigationSettings, DEFAULT_SETTINGS  # noqa: F401
from .core.gesture_classifier import (  # noqa: F401
    GestureClassifier,
    GestureKind,
    GestureSample,
    ClassifierState,
    classify_sample,
    is_significant,
)
from .core.throttle import AdaptiveThrottle, ThrottleState, ThrottleStatus  # noqa: F401
from .core.navigation import NavigationController, JumpCause, MotionStyle  # noqa: F401
from .core.state import NavigationState, NavigationSnapshot  # noqa: F401
# input
from .input.axis import Axis, AxisStrategy, VERTICAL, HORIZONTAL  # noqa: F401
from .input.wheel_adapter import WheelAdapter, wheel_delta_from_event  # noqa: F401
from .input.touch_adapter import TouchAdapter, TouchGestureState  # noqa: F401
# storage
from .storage.settings_store import load_settings, save_settings  # noqa: F401
# utils
from .utils.logging_setup import setup_logging, get_logger  # noqa: F401

__version__ = "0.1.0"
