"""Static material evaluation in centipawns."""

from __future__ import annotations

from casey.core.enums import Color
from casey.core.move import Move
from casey.core.position import Position


def basic_material_sum(position: Position) -> int:
    """White material minus black material (positive favours White)."""
    score = 0
    for _, piece in position.board.occupied():
        if piece.color == Color.WHITE:
            score += piece.centipawns
        else:
            score -= piece.centipawns
    return score


def evaluate_move(position: Position, move: Move) -> int:
    """Material balance after *move*, seen from the mover's side.

    The move is played on a copy; :class:`MoveError` propagates if it is
    rejected.
    """
    mover = position.side_to_move
    after = position.copy()
    after.make_move(move)
    score = basic_material_sum(after)
    return score if mover == Color.WHITE else -score
