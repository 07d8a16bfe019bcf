"""
Game basics: move tokens, state normalization, winner/draw checks.

- A token is a player tag plus a cell index 1-9, e.g. "r5". "r" is the human
  (player one), "g" the computer (player two).
- A state is a set of tokens. Its canonical form is the sorted tokens joined
  by a delimiter, so move orders reaching the same board collapse to one key.
- Cells are numbered row by row:

      1 2 3
      4 5 6
      7 8 9
"""
import re
from typing import List, Optional, Tuple

HUMAN = 'r'
COMPUTER = 'g'
DRAW = 'd'

CELLS = (1, 2, 3, 4, 5, 6, 7, 8, 9)

WINNING_SETS = [
    [1, 2, 3], [4, 5, 6], [7, 8, 9],  # rows
    [1, 4, 7], [2, 5, 8], [3, 6, 9],  # columns
    [1, 5, 9], [7, 5, 3],             # diagonals
]

_SPLIT = re.compile(r'[\s\-]+')
_HUMAN_TOKEN = re.compile(r'r([1-9])')
_COMPUTER_TOKEN = re.compile(r'g([1-9])')
_VALID_TOKEN = re.compile(r'^[rg][1-9]$')


class InvalidStateError(ValueError):
    """Raised when a user-supplied state string is malformed."""


def split_tokens(state: str) -> List[str]:
    return [t for t in _SPLIT.split(state) if t]


def normalize_state(state: str, delimiter: str = ' ') -> str:
    return delimiter.join(sorted(split_tokens(state)))


def token(player: str, cell: int) -> str:
    return f"{player}{cell}"


def extract_players_moves(state: str) -> Tuple[List[int], List[int]]:
    """Return (human_cells, computer_cells) in the order they appear."""
    human = [int(m) for m in _HUMAN_TOKEN.findall(state)]
    computer = [int(m) for m in _COMPUTER_TOKEN.findall(state)]
    return human, computer


def occupied_cells(state: str) -> List[int]:
    human, computer = extract_players_moves(state)
    return sorted(human + computer)


def current_player(state: str) -> str:
    return HUMAN if len(split_tokens(state)) % 2 == 0 else COMPUTER


def get_winner(state: str) -> Optional[str]:
    """Outcome of a state: HUMAN, COMPUTER, DRAW or None while in play."""
    human, computer = extract_players_moves(state)
    if len(human) + len(computer) < 5:
        return None
    for triple in WINNING_SETS:
        if all(c in human for c in triple):
            return HUMAN
        if all(c in computer for c in triple):
            return COMPUTER
    if len(human) + len(computer) == len(CELLS):
        return DRAW
    return None


def legal_moves(state: str) -> List[int]:
    if get_winner(state) is not None:
        return []
    taken = set(occupied_cells(state))
    return [c for c in CELLS if c not in taken]


def parse_state(raw: str, delimiter: str = ' ', after_human: bool = False) -> str:
    """Validate a user-supplied state and return its canonical form.

    With after_human=True the state must be one the computer has to answer:
    the human, who always moves first, holds exactly one more cell.
    Internally generated states never pass through here.
    """
    tokens = split_tokens(raw)
    seen = set()
    for t in tokens:
        if not _VALID_TOKEN.match(t):
            raise InvalidStateError(f"Invalid move token {t!r}; expected r1-r9 or g1-g9")
        cell = int(t[1])
        if cell in seen:
            raise InvalidStateError(f"Cell {cell} is played more than once in {raw!r}")
        seen.add(cell)
    if after_human:
        human, computer = extract_players_moves(raw)
        if len(human) != len(computer) + 1:
            raise InvalidStateError(
                f"Not the computer's turn in {raw!r}: {len(human)} human moves, {len(computer)} computer moves"
            )
    return delimiter.join(sorted(tokens))
