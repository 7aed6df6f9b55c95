"""트랙패드 관성(momentum) 판별기.

관성 이벤트는 세 가지 특징을 동시에 가진다.
1. 빠른 간격: 직전 이벤트와의 간격이 min_time_gap 미만
2. 같은 방향: 직전 이벤트와 진행 방향이 같음
3. 감소하는 크기: 물리 시뮬레이션이 감속하므로 델타가 커지지 않음(정체 허용)

셋 모두 참일 때만 관성으로 보고, 하나라도 깨지면 사용자의 의도적 입력으로 본다.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..utils.logging_setup import get_logger

_log = get_logger("core.classifier")


class GestureKind(str, Enum):
    INTENTIONAL = "intentional"
    MOMENTUM = "momentum"


def sign(value: float) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


@dataclass(frozen=True)
class GestureSample:
    magnitude: float
    direction: int  # -1 | 0 | +1
    timestamp_ms: int

    @staticmethod
    def from_delta(delta: float, t_ms: int) -> "GestureSample":
        return GestureSample(abs(float(delta)), sign(delta), int(t_ms))


@dataclass
class ClassifierState:
    """입력 스트림 하나의 직전 샘플 기억. classify_sample만 변경한다."""
    last_magnitude: float = 0.0
    last_direction: int = 0
    last_timestamp: int = 0


def is_significant(magnitude: float, min_delta: float) -> bool:
    return abs(magnitude) >= min_delta


def classify_sample(state: ClassifierState, sample: GestureSample, min_time_gap_ms: int) -> GestureKind:
    elapsed = sample.timestamp_ms - state.last_timestamp
    too_quick = elapsed < min_time_gap_ms
    same_direction = state.last_direction != 0 and sample.direction == state.last_direction
    not_increasing = sample.magnitude <= state.last_magnitude

    kind = GestureKind.MOMENTUM if (too_quick and same_direction and not_increasing) else GestureKind.INTENTIONAL

    # 판정 결과와 무관하게 다음 비교를 위해 항상 갱신
    state.last_magnitude = sample.magnitude
    state.last_direction = sample.direction
    state.last_timestamp = sample.timestamp_ms
    return kind


class GestureClassifier:
    def __init__(self, min_delta: float = 4.0, min_time_gap_ms: int = 1500, debug: bool = False):
        self.min_delta = float(min_delta)
        self.min_time_gap_ms = int(min_time_gap_ms)
        self.debug = bool(debug)
        self._state = ClassifierState()

    @classmethod
    def from_settings(cls, settings) -> "GestureClassifier":
        return cls(settings.min_delta, settings.min_time_gap_ms, settings.debug)

    def is_significant(self, magnitude: float) -> bool:
        return is_significant(magnitude, self.min_delta)

    def classify(self, sample: GestureSample) -> GestureKind:
        prev_t = self._state.last_timestamp
        prev_m = self._state.last_magnitude
        kind = classify_sample(self._state, sample, self.min_time_gap_ms)
        if self.debug:
            _log.debug(
                "classify | kind=%s | mag=%.1f | prev_mag=%.1f | dir=%d | dt=%d",
                kind.value, sample.magnitude, prev_m, sample.direction, sample.timestamp_ms - prev_t,
            )
        return kind

    def is_momentum(self, sample: GestureSample) -> bool:
        return self.classify(sample) is GestureKind.MOMENTUM

    def reset(self) -> None:
        self._state = ClassifierState()
