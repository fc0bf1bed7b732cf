"""Perft: exhaustive legal-move tree counting for move-generator validation."""

from __future__ import annotations

import logging
import time

from casey.core.errors import MoveError
from casey.core.position import Position

_LOGGER = logging.getLogger(__name__)


def perft(position: Position, depth: int) -> int:
    """Number of leaf nodes of the legal-move tree *depth* plies deep.

    Every generated move is replayed through :meth:`Position.make_move`
    on a copy, so generator and applier are cross-checked: a generated
    move the applier rejects is logged and the :class:`MoveError`
    propagates.
    """
    if depth <= 0:
        return 1
    moves = position.legal_moves()
    if depth == 1:
        return len(moves)
    nodes = 0
    for move in moves:
        child = position.copy()
        try:
            child.make_move(move)
        except MoveError:
            _LOGGER.error(
                "Generated move %s rejected by the applier:\n%r", move, position
            )
            raise
        nodes += perft(child, depth - 1)
    return nodes


def divide(position: Position, depth: int) -> dict[str, int]:
    """Per-root-move node counts (keys are long algebraic moves)."""
    result: dict[str, int] = {}
    for move in position.legal_moves():
        child = position.copy()
        child.make_move(move)
        result[move.uci] = perft(child, depth - 1)
    return result


def timed_perft(position: Position, max_depth: int) -> list[tuple[int, int, float]]:
    """Run perft for every depth up to *max_depth*; ``(depth, nodes, seconds)``."""
    rows: list[tuple[int, int, float]] = []
    for depth in range(1, max_depth + 1):
        start = time.perf_counter()
        nodes = perft(position, depth)
        elapsed = time.perf_counter() - start
        _LOGGER.info("Depth: %d, %d nodes in %.0fms", depth, nodes, elapsed * 1000)
        rows.append((depth, nodes, elapsed))
    return rows
