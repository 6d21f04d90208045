from __future__ import annotations

from bufmarks.marks import (
    NO_TARGET,
    WRAPPED_BACKWARD,
    WRAPPED_FORWARD,
    Navigation,
    find_next,
    find_previous,
)

POSITIONS = (5, 10, 20)


def test_next_returns_first_bookmark_after_cursor() -> None:
    assert find_next(POSITIONS, 7) == Navigation(line=10)
    assert find_next(POSITIONS, 1) == Navigation(line=5)


def test_next_wraps_to_top_from_last_bookmark() -> None:
    navigation = find_next(POSITIONS, 20)

    assert navigation.line == 5
    assert navigation.notice == WRAPPED_FORWARD
    assert navigation.wrapped is True


def test_next_wraps_from_below_last_bookmark() -> None:
    assert find_next(POSITIONS, 35) == Navigation(line=5, notice=WRAPPED_FORWARD)


def test_previous_returns_last_bookmark_before_cursor() -> None:
    assert find_previous(POSITIONS, 12) == Navigation(line=10)
    assert find_previous(POSITIONS, 99) == Navigation(line=20)


def test_previous_wraps_to_bottom_from_first_bookmark() -> None:
    navigation = find_previous(POSITIONS, 5)

    assert navigation.line == 20
    assert navigation.notice == WRAPPED_BACKWARD


def test_empty_positions_have_no_target() -> None:
    assert find_next((), 3) == NO_TARGET
    assert find_previous((), 3) == NO_TARGET
    assert NO_TARGET.wrapped is False


def test_cursor_bookmark_is_never_selected() -> None:
    candidates = [(4,), (4, 9), (1, 4, 9), (2, 3, 4)]
    for positions in candidates:
        for cursor_line in positions:
            assert find_next(positions, cursor_line).line != cursor_line
            assert find_previous(positions, cursor_line).line != cursor_line


def test_single_bookmark_on_cursor_line_has_no_target() -> None:
    assert find_next((4,), 4) == NO_TARGET
    assert find_previous((4,), 4) == NO_TARGET


def test_repeated_next_cycles_through_all_bookmarks() -> None:
    cursor_line = 1
    visited: list[int] = []
    for _ in range(4):
        navigation = find_next(POSITIONS, cursor_line)
        assert navigation.line is not None
        visited.append(navigation.line)
        cursor_line = navigation.line

    assert visited == [5, 10, 20, 5]
