"""Per-page settings for the one-player and two-player builds."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Dict, Tuple


@dataclass(frozen=True)
class Variant:
    name: str
    delimiter: str
    vs_computer: bool
    output_path: PurePosixPath
    stylesheet_href: str
    title: str
    heading: str
    other_href: str
    other_blurb: str
    outcome_messages: Tuple[Tuple[str, str], ...]


ONE_PLAYER = Variant(
    name="one-player",
    delimiter=" ",
    vs_computer=True,
    output_path=PurePosixPath("index.html"),
    stylesheet_href="styles.css",
    title="CSS Tic Tac Toe AI",
    heading="CSS Tic Tac Toe AI",
    other_href="./2/",
    other_blurb="if you would like a 2-player version!",
    outcome_messages=(("r", "You win!"), ("g", "The computer wins!"), ("d", "It's a draw!")),
)

TWO_PLAYER = Variant(
    name="two-player",
    delimiter="-",
    vs_computer=False,
    output_path=PurePosixPath("2/index.html"),
    stylesheet_href="../styles.css",
    title="CSS Tic Tac Toe",
    heading="2 Player CSS Tic Tac Toe",
    other_href="../",
    other_blurb="to play against a computer!",
    outcome_messages=(("r", "Red wins!"), ("g", "Green wins!"), ("d", "It's a draw!")),
)

VARIANTS: Dict[str, Variant] = {v.name: v for v in (ONE_PLAYER, TWO_PLAYER)}


def get_variant(name: str) -> Variant:
    try:
        return VARIANTS[name]
    except KeyError:
        raise ValueError(f"Unknown variant: {name} (choose from {', '.join(VARIANTS)})") from None
