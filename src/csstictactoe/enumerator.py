"""
Breadth-first enumeration of every state a page can reach.
Teaching notes:
- States are canonical strings, so transpositions are visited once.
- Each level is the set of states first seen at that depth; a level that adds
  nothing new ends the search. Occupied cells only grow, so it always ends.
- In the one-player variant a "move" is the human's token plus the computer's
  immediate reply, so a level is one full round.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .game_basics import CELLS, COMPUTER, HUMAN, current_player, legal_moves, normalize_state, token
from .opponent import get_computer_move
from .variants import Variant


class DepthLimitExceeded(RuntimeError):
    """Raised when enumeration needs more levels than the caller allowed."""

    def __init__(self, max_depth: int, pending: int):
        super().__init__(f"Depth limit {max_depth} exceeded with {pending} states still pending")
        self.max_depth = max_depth
        self.pending = pending


@dataclass
class StateSpace:
    variant: Variant
    states: List[str] = field(default_factory=list)
    index: Dict[str, int] = field(default_factory=dict)
    depths: List[int] = field(default_factory=list)
    level_sizes: List[int] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.states)

    def __contains__(self, state: object) -> bool:
        return state in self.index

    def add(self, state: str, depth: int) -> None:
        self.index[state] = len(self.states)
        self.states.append(state)
        self.depths.append(depth)

    def depth_of(self, state: str) -> int:
        return self.depths[self.index[state]]


def next_state(state: str, cell: int, variant: Variant) -> str:
    """Canonical state after `cell` is played (plus the computer's reply, if any)."""
    d = variant.delimiter
    if not variant.vs_computer:
        return normalize_state(f"{state}{d}{token(current_player(state), cell)}", d)
    after_human = normalize_state(f"{state}{d}{token(HUMAN, cell)}", d)
    reply = get_computer_move(after_human)
    if reply is None:
        return after_human
    return normalize_state(f"{after_human}{d}{token(COMPUTER, reply)}", d)


def transitions(state: str, variant: Variant) -> List[str]:
    """Target state for each of the 9 cells; illegal cells loop back to `state`."""
    here = normalize_state(state, variant.delimiter)
    legal = set(legal_moves(state))
    return [next_state(here, cell, variant) if cell in legal else here for cell in CELLS]


def enumerate_states(variant: Variant, max_depth: Optional[int] = None) -> StateSpace:
    """Discover every canonical state reachable from the empty board.

    The empty board itself is not included. Raises DepthLimitExceeded if a
    level deeper than `max_depth` turns out to be non-empty.
    """
    t0 = time.perf_counter()
    space = StateSpace(variant=variant)
    frontier = ['']
    depth = 0
    while True:
        logging.debug("depth=%d, states=%d", depth, len(space))
        discovered = set()
        for state in frontier:
            for cell in legal_moves(state):
                child = next_state(state, cell, variant)
                if child not in space:
                    discovered.add(child)
        if not discovered:
            break
        depth += 1
        if max_depth is not None and depth > max_depth:
            raise DepthLimitExceeded(max_depth, len(discovered))
        frontier = sorted(discovered)
        for state in frontier:
            space.add(state, depth)
        space.level_sizes.append(len(frontier))
    elapsed_ms = (time.perf_counter() - t0) * 1000.0
    logging.info("Found %d %s states in %.1f ms", len(space), variant.name, elapsed_ms)
    return space
