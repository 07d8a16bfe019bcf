"""csstictactoe package.

State enumeration, the heuristic opponent, HTML/CSS rendering and a small
CLI for building the CSS-only tic-tac-toe pages.

Convenience imports are exposed for common workflows.
"""

from .build import BuildArgs, run_build
from .enumerator import DepthLimitExceeded, StateSpace, enumerate_states, next_state, transitions
from .game_basics import get_winner, legal_moves, normalize_state
from .opponent import explain_computer_move, get_computer_move
from .render import render_fragment, render_page, render_stylesheet
from .variants import ONE_PLAYER, TWO_PLAYER, VARIANTS, Variant, get_variant

__all__ = [
    "normalize_state",
    "get_winner",
    "legal_moves",
    "get_computer_move",
    "explain_computer_move",
    "enumerate_states",
    "next_state",
    "transitions",
    "StateSpace",
    "DepthLimitExceeded",
    "render_fragment",
    "render_page",
    "render_stylesheet",
    "run_build",
    "BuildArgs",
    "Variant",
    "VARIANTS",
    "ONE_PLAYER",
    "TWO_PLAYER",
    "get_variant",
]
