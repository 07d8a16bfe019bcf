import pytest

from csstictactoe.enumerator import enumerate_states
from csstictactoe.game_basics import legal_moves, normalize_state, occupied_cells
from csstictactoe.opponent import RULES, explain_computer_move, get_computer_move
from csstictactoe.variants import ONE_PLAYER


def test_rule_order():
    assert [name for name, _ in RULES] == [
        'respond-open', 'fork-block', 'take-win', 'block-win', 'fallback',
    ]


@pytest.mark.parametrize("opening", [1, 2, 3, 4, 6, 7, 8, 9])
def test_first_reply_is_center(opening: int):
    assert explain_computer_move(f"r{opening}") == (5, 'respond-open')


def test_first_reply_to_center_is_corner():
    assert explain_computer_move("r5") == (9, 'respond-open')


@pytest.mark.parametrize("state", ["g5 r1 r9", "g5 r3 r7"])
def test_opposite_corners_get_an_edge(state: str):
    assert explain_computer_move(state) == (2, 'fork-block')


def test_center_and_corner_against_corner_reply():
    assert explain_computer_move("g9 r1 r5") == (3, 'fork-block')


def test_take_win_before_block():
    # Both sides threaten; the computer completes 3-5-7 instead of blocking 1-2-3
    cell, rule = explain_computer_move("g5 g7 r1 r2 r9")
    assert (cell, rule) == (3, 'take-win')


def test_block_human_line():
    assert explain_computer_move("g5 r2 r8 r9 g1") == (7, 'block-win')


def test_fallback_prefers_center_then_corners():
    # No threats: g at 5, r at 2 and 6 -> nothing to win or block
    assert explain_computer_move("g5 r2 r6") == (1, 'fallback')


def test_no_move_once_game_is_over():
    assert get_computer_move("g4 g5 r1 r2 r3") is None
    assert get_computer_move("g2 g5 g6 g7 r1 r3 r4 r8 r9") is None


def test_never_plays_an_occupied_cell_on_reachable_states():
    space = enumerate_states(ONE_PLAYER)
    for state in [''] + space.states:
        for cell in legal_moves(state):
            after_human = normalize_state(f"{state} r{cell}")
            reply = get_computer_move(after_human)
            if reply is not None:
                assert reply not in occupied_cells(after_human)
