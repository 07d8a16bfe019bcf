import json
from pathlib import Path

import pytest

from csstictactoe.build import outcome_split
from csstictactoe.enumerator import DepthLimitExceeded, enumerate_states, next_state, transitions
from csstictactoe.game_basics import get_winner, legal_moves, normalize_state
from csstictactoe.variants import ONE_PLAYER, TWO_PLAYER, VARIANTS

BASELINES = json.loads((Path(__file__).parent / 'data' / 'baselines.json').read_text())


@pytest.fixture(scope="module")
def spaces():
    return {name: enumerate_states(v) for name, v in VARIANTS.items()}


@pytest.mark.parametrize("name", list(VARIANTS))
def test_reachable_counts_snapshot(spaces, name: str):
    space = spaces[name]
    assert {
        'states': len(space),
        'level_sizes': space.level_sizes,
        'outcomes': outcome_split(space),
    } == BASELINES[name]


def test_two_player_matches_known_board_count(spaces):
    # 5478 reachable boards, minus the empty one rendered as the start board
    assert len(spaces['two-player']) == 5477


@pytest.mark.parametrize("name", list(VARIANTS))
def test_states_are_canonical_and_unique(spaces, name: str):
    space = spaces[name]
    d = space.variant.delimiter
    assert len(set(space.states)) == len(space.states)
    assert '' not in space
    for s in space.states:
        assert normalize_state(s, d) == s
        assert space.states[space.index[s]] == s


@pytest.mark.parametrize("name", list(VARIANTS))
def test_closed_under_transitions(spaces, name: str):
    space = spaces[name]
    for s in [''] + space.states:
        for target in transitions(s, space.variant):
            assert target == normalize_state(s, space.variant.delimiter) or target in space


def test_one_player_transition_includes_reply():
    assert next_state('', 1, ONE_PLAYER) == 'g5 r1'
    assert next_state('', 5, ONE_PLAYER) == 'g9 r5'
    assert next_state('g5 r1', 9, ONE_PLAYER) == 'g2 g5 r1 r9'


def test_one_player_winning_move_gets_no_reply():
    # Human completes 1-2-3
    assert next_state('g5 g9 r1 r2', 3, ONE_PLAYER) == 'g5 g9 r1 r2 r3'


def test_two_player_alternates_by_parity():
    assert next_state('', 5, TWO_PLAYER) == 'r5'
    assert next_state('r5', 1, TWO_PLAYER) == 'g1-r5'
    assert next_state('g1-r5', 9, TWO_PLAYER) == 'g1-r5-r9'


def test_terminal_state_transitions_self_loop():
    s = 'g4-g5-r1-r2-r3'
    assert get_winner(s) == 'r'
    assert legal_moves(s) == []
    assert transitions(s, TWO_PLAYER) == [s] * 9


def test_occupied_cells_self_loop():
    targets = transitions('g5 r1', ONE_PLAYER)
    assert targets[0] == 'g5 r1'
    assert targets[4] == 'g5 r1'
    assert targets[8] == 'g2 g5 r1 r9'


def test_depths_follow_levels(spaces):
    space = spaces['two-player']
    for s in space.states:
        assert space.depth_of(s) == len(s.split('-'))


def test_depth_limit_exceeded():
    with pytest.raises(DepthLimitExceeded) as exc:
        enumerate_states(TWO_PLAYER, max_depth=3)
    assert exc.value.max_depth == 3
    assert exc.value.pending == 756


def test_depth_limit_at_exact_depth_is_fine():
    space = enumerate_states(ONE_PLAYER, max_depth=5)
    assert len(space) == BASELINES['one-player']['states']
