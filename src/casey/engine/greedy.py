"""One-ply material-greedy engine."""

from __future__ import annotations

import logging
from time import perf_counter

from casey.core.evaluation import evaluate_move
from casey.core.move import Move
from casey.core.position import Position
from casey.engine.search import (
    CancelCheck,
    IEngine,
    ProgressCallback,
    SearchLimits,
    SearchResult,
    never_cancelled,
)

_LOGGER = logging.getLogger(__name__)


class GreedyEngine(IEngine):
    """Plays the legal move that leaves the best material balance.

    Each candidate is applied to a copy of the position and scored with
    :func:`evaluate_move` from the mover's side.  Ties keep the move that
    was generated first.  Cancellation or an expired time limit returns
    the best move found so far.
    """

    __slots__ = ()

    def search(
        self,
        position: Position,
        limits: SearchLimits | None = None,
        is_cancelled: CancelCheck | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> SearchResult:
        cancelled = is_cancelled or never_cancelled
        deadline: float | None = None
        if limits is not None and limits.time_limit_ms is not None:
            deadline = perf_counter() + max(limits.time_limit_ms, 1) / 1000.0

        best_move: Move | None = None
        best_score = 0
        nodes = 0
        for move in position.legal_moves():
            if best_move is not None and (
                cancelled() or (deadline is not None and perf_counter() >= deadline)
            ):
                _LOGGER.debug("Search interrupted after %d nodes", nodes)
                break
            score = evaluate_move(position, move)
            nodes += 1
            if best_move is None or score > best_score:
                best_move, best_score = move, score
                if on_progress is not None:
                    on_progress(move, score)

        _LOGGER.debug(
            "Greedy search: best=%s score=%d nodes=%d", best_move, best_score, nodes
        )
        return SearchResult(best_move, best_score, nodes)
