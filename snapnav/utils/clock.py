from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], int]


def monotonic_ms() -> int:
    """단조 증가 밀리초 시계. 벽시계 보정의 영향을 받지 않는다."""
    return int(time.monotonic() * 1000)


class ManualClock:
    """수동으로 진행시키는 시계. 재생(replay)과 테스트에서 사용."""

    def __init__(self, start_ms: int = 0):
        self.now_ms = int(start_ms)

    def __call__(self) -> int:
        return self.now_ms

    def set(self, t_ms: int) -> None:
        self.now_ms = int(t_ms)

    def advance(self, dt_ms: int) -> int:
        self.now_ms += int(dt_ms)
        return self.now_ms
