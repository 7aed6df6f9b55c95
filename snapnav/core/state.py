from __future__ import annotations

from dataclasses import dataclass


@dataclass
class NavigationState:
    current_index: int
    total: int
    in_transition: bool = False
    transition_started_at: int = 0
    target_index: int = -1
    transition_id: int = 0  # 전환이 시작될 때마다 증가, 지연된 타이머 식별용


@dataclass(frozen=True)
class NavigationSnapshot:
    current_index: int
    total: int
    in_transition: bool
    target_index: int
    transition_age_ms: int

    @staticmethod
    def of(state: NavigationState, now_ms: int) -> "NavigationSnapshot":
        age = (now_ms - state.transition_started_at) if state.in_transition else 0
        return NavigationSnapshot(
            current_index=int(state.current_index),
            total=int(state.total),
            in_transition=bool(state.in_transition),
            target_index=int(state.target_index),
            transition_age_ms=int(age),
        )

    def describe(self) -> str:
        busy = f"busy {self.transition_age_ms}ms -> {self.target_index + 1}" if self.in_transition else "idle"
        return f"{self.current_index + 1} / {self.total} ({busy})"
