"""
Heuristic computer opponent for the one-player page.
Teaching notes:
- No search: a short ordered list of rules, first one to answer wins.
- Every rule sees (human cells, computer cells, occupied cells) and returns a
  cell 1-9 or None to pass to the next rule.
"""
from typing import Callable, List, Optional, Sequence, Set, Tuple

from .game_basics import CELLS, WINNING_SETS, extract_players_moves, get_winner

CENTER = 5
OPPOSITE_CORNERS = [(1, 9), (3, 7)]
PREFERENCE_ORDER = (5, 1, 3, 7, 9, 2, 4, 6, 8)

Rule = Callable[[List[int], List[int], Set[int]], Optional[int]]


def respond_open(human: List[int], computer: List[int], occupied: Set[int]) -> Optional[int]:
    # Center, unless the human opened there; then an arbitrary corner.
    if len(human) != 1:
        return None
    return 9 if human[0] == CENTER else CENTER


def fork_block(human: List[int], computer: List[int], occupied: Set[int]) -> Optional[int]:
    if len(human) != 2:
        return None
    if CENTER in computer:
        # Opposite corners: a corner reply walks into a fork, an edge does not.
        for a, b in OPPOSITE_CORNERS:
            if a in human and b in human:
                return 2
    if 9 in computer and CENTER in human and 1 in human:
        # Two in a row for us on 3-6-9 forces the human's reply.
        return 3
    return None


def _completing_cell(mine: Sequence[int], theirs: Sequence[int]) -> Optional[int]:
    for triple in WINNING_SETS:
        still_need = [c for c in triple if c not in mine]
        if len(still_need) == 1 and not any(c in theirs for c in triple):
            return still_need[0]
    return None


def take_win(human: List[int], computer: List[int], occupied: Set[int]) -> Optional[int]:
    return _completing_cell(computer, human)


def block_win(human: List[int], computer: List[int], occupied: Set[int]) -> Optional[int]:
    return _completing_cell(human, computer)


def fallback(human: List[int], computer: List[int], occupied: Set[int]) -> Optional[int]:
    for cell in PREFERENCE_ORDER:
        if cell not in occupied:
            return cell
    return None


RULES: List[Tuple[str, Rule]] = [
    ('respond-open', respond_open),
    ('fork-block', fork_block),
    ('take-win', take_win),
    ('block-win', block_win),
    ('fallback', fallback),
]


def explain_computer_move(state: str) -> Tuple[Optional[int], Optional[str]]:
    """Return (cell, rule name); (None, None) when the game is already over."""
    if get_winner(state) is not None:
        return None, None
    human, computer = extract_players_moves(state)
    occupied = set(human) | set(computer)
    for name, rule in RULES:
        cell = rule(human, computer, occupied)
        if cell is not None:
            if cell in occupied or cell not in CELLS:
                raise RuntimeError(f"rule {name} picked unavailable cell {cell} for {state!r}")
            return cell, name
    return None, None


def get_computer_move(state: str) -> Optional[int]:
    return explain_computer_move(state)[0]
