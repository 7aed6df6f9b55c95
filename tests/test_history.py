from snapnav.ui.history import SectionHistory, normalize_hash

IDS = ["home", "about", "services", "portfolio", "contact"]


def test_index_for_hash():
    h = SectionHistory(IDS)
    assert h.index_for_hash("#services") == 2
    assert h.index_for_hash("contact") == 4
    assert h.index_for_hash("#missing") == -1
    assert h.index_for_hash("") == -1
    assert normalize_hash(" #about ") == "about"


def test_push_and_back_forward(qtbot):
    h = SectionHistory(IDS)
    h.replace(0)
    h.push(1)
    h.push(3)
    assert h.current_hash == "#portfolio"
    with qtbot.waitSignal(h.popState, timeout=500) as blocker:
        assert h.back() is True
    assert blocker.args == [1]
    assert h.current_hash == "#about"
    with qtbot.waitSignal(h.popState, timeout=500) as blocker:
        assert h.forward() is True
    assert blocker.args == [3]
    assert h.can_forward() is False


def test_push_truncates_forward_entries():
    h = SectionHistory(IDS)
    h.replace(0)
    h.push(1)
    h.push(2)
    h.back()
    h.push(4)
    assert h.can_forward() is False
    h.back()
    assert h.current_hash == "#about"


def test_duplicate_push_ignored():
    h = SectionHistory(IDS)
    h.push(1)
    h.push(1)
    assert h.can_back() is False


def test_back_at_start_is_noop():
    h = SectionHistory(IDS)
    assert h.back() is False
    h.replace(2)
    assert h.back() is False
    assert h.current_hash == "#services"
