"""
HTML/CSS rendering of an enumerated state space.

Every state becomes a radio input plus the board right after it. Each of the
board's 9 labels points at the input of the state that clicking the cell
leads to, so the stylesheet only has to show the board following the checked
input.
"""
from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape

from .enumerator import StateSpace, transitions
from .game_basics import CELLS, COMPUTER, HUMAN, get_winner, normalize_state, split_tokens
from .variants import VARIANTS, Variant

START_ID = "start"


@lru_cache(maxsize=None)
def template_env() -> Environment:
    return Environment(
        loader=PackageLoader("csstictactoe", "templates"),
        autoescape=select_autoescape(enabled_extensions=("html.j2",), default_for_string=False),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


def board_classes(state: str) -> List[str]:
    classes = ["game"] + sorted(split_tokens(state))
    winner = get_winner(state)
    if winner is not None:
        classes.append(f"winner-{winner}")
    return classes


def render_fragment(
    state: str,
    variant: Variant,
    element_id: Optional[str] = None,
    checked: bool = False,
) -> str:
    here = normalize_state(state, variant.delimiter)
    return template_env().get_template("fragment.html.j2").render(
        element_id=element_id if element_id is not None else here,
        checked=checked,
        classes=board_classes(here),
        targets=transitions(here, variant),
    )


def render_page(space: StateSpace) -> str:
    variant = space.variant
    start_board = render_fragment("", variant, element_id=START_ID, checked=True)
    fragments = [render_fragment(s, variant) for s in space.states]
    return template_env().get_template("page.html.j2").render(
        variant=variant,
        start_board=start_board,
        fragments=fragments,
    )


def render_stylesheet() -> str:
    banners = [
        (variant.name, outcome, message)
        for variant in VARIANTS.values()
        for outcome, message in variant.outcome_messages
    ]
    return template_env().get_template("styles.css.j2").render(
        cells=CELLS,
        human=HUMAN,
        computer=COMPUTER,
        human_colour="#e74c3c",
        computer_colour="#2ecc71",
        banners=banners,
    )
