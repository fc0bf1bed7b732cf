"""Engine that plays a uniformly random legal move."""

from __future__ import annotations

import random

from casey.core.enums import Color
from casey.core.evaluation import basic_material_sum
from casey.core.position import Position
from casey.engine.search import (
    CancelCheck,
    IEngine,
    ProgressCallback,
    SearchLimits,
    SearchResult,
)


class RandomEngine(IEngine):
    """Uniform choice among the legal moves; pass *rng* for reproducibility."""

    __slots__ = ("_rng",)

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()

    def search(
        self,
        position: Position,
        limits: SearchLimits | None = None,
        is_cancelled: CancelCheck | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> SearchResult:
        moves = position.legal_moves()
        score = basic_material_sum(position)
        if position.side_to_move == Color.BLACK:
            score = -score
        if not moves:
            return SearchResult(None, score, 0)
        move = self._rng.choice(moves)
        if on_progress is not None:
            on_progress(move, score)
        return SearchResult(move, score, len(moves))
