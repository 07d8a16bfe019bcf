import re

from csstictactoe.enumerator import enumerate_states
from csstictactoe.render import board_classes, render_fragment, render_page, render_stylesheet
from csstictactoe.variants import ONE_PLAYER, TWO_PLAYER

LABEL = re.compile(r'<label for="([^"]*)"></label>')


def test_fragment_binds_state_to_nine_targets():
    html = render_fragment('r1 g5', ONE_PLAYER)
    assert '<input type="radio" name="game-state" id="g5 r1">' in html
    assert '<div class="game g5 r1">' in html
    targets = LABEL.findall(html)
    assert len(targets) == 9
    assert targets[0] == 'g5 r1'
    assert targets[8] == 'g2 g5 r1 r9'


def test_terminal_fragment_self_loops_and_marks_winner():
    s = 'g4-g5-r1-r2-r3'
    html = render_fragment(s, TWO_PLAYER)
    assert 'winner-r' in html
    assert LABEL.findall(html) == [s] * 9


def test_draw_class():
    assert board_classes('g2 g5 g6 g7 r1 r3 r4 r8 r9')[-1] == 'winner-d'
    assert board_classes('') == ['game']


def test_start_board_links_to_first_round():
    html = render_fragment('', ONE_PLAYER, element_id='start', checked=True)
    assert 'id="start" checked' in html
    assert LABEL.findall(html) == [
        'g5 r1', 'g5 r2', 'g5 r3', 'g5 r4', 'g9 r5', 'g5 r6', 'g5 r7', 'g5 r8', 'g5 r9',
    ]


def test_fragment_is_pure():
    assert render_fragment('g5 r1', ONE_PLAYER) == render_fragment('r1 g5', ONE_PLAYER)


def test_page_contains_every_state_once():
    space = enumerate_states(ONE_PLAYER)
    html = render_page(space)
    assert html.startswith('<!DOCTYPE html>')
    assert html.count('name="game-state"') == len(space) + 1
    ids = re.findall(r'name="game-state" id="([^"]*)"', html)
    assert ids[0] == 'start'
    assert sorted(ids[1:]) == sorted(space.states)
    # Every link targets a rendered input
    assert set(LABEL.findall(html)) <= set(ids)
    assert '<label for="start" id="resetButton">Reset</label>' in html
    assert 'href="styles.css"' in html


def test_two_player_page_links_back():
    space = enumerate_states(TWO_PLAYER, max_depth=9)
    html = render_page(space)
    assert 'href="../styles.css"' in html
    assert '<div class="app two-player">' in html


def test_stylesheet_covers_every_cell_and_outcome():
    css = render_stylesheet()
    for cell in range(1, 10):
        assert f'.game.r{cell} label:nth-of-type({cell})' in css
        assert f'.game.g{cell} label:nth-of-type({cell})' in css
    assert 'input[name="game-state"]:checked + .game' in css
    assert '.one-player .game.winner-g::after' in css
    assert '.two-player .game.winner-d::after' in css
    assert "It's a draw!" in css
