from __future__ import annotations

APP_NAME = "SnapNav"


def update_window_title(window, section_title: str | None = None) -> None:
    if section_title:
        window.setWindowTitle(f"{section_title} - {APP_NAME}")
    else:
        window.setWindowTitle(APP_NAME)


def format_indicator(index: int, total: int) -> str:
    if total <= 0:
        return "0 / 0"
    idx_disp = index + 1 if 0 <= index < total else 0
    return f"{idx_disp} / {total}"


def update_status_left(window) -> None:
    c = window.container
    window.status_left_label.setText(format_indicator(c.current_index, c.section_count()))


def update_status_right(window) -> None:
    # 디버그 모드에서만 전환 상태를 표시
    if not bool(getattr(window.settings, "debug", False)):
        window.status_right_label.setText("")
        return
    try:
        snap = window.container.controller.snapshot()
        status = window.container.controller.throttle.status(False)
        window.status_right_label.setText(
            f"{'busy' if snap.in_transition else 'idle'} | throttle {status.remaining_ms}ms | {window.history.current_hash}"
        )
    except Exception:
        window.status_right_label.setText("")
