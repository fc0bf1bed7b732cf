"""High-level chess rules: check, checkmate, stalemate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from casey.core.enums import Color, GameResult
from casey.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from casey.core.position import Position


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    # Draws by rule (fifty moves, repetition, insufficient material) are
    # not detected; a game only ends when the side to move has no moves.

    @staticmethod
    def is_in_check(position: Position) -> bool:
        return position.king_in_check()

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        if not Rules.is_in_check(position):
            return False
        return len(position.legal_moves()) == 0

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        if Rules.is_in_check(position):
            return False
        return len(position.legal_moves()) == 0

    @staticmethod
    def game_result(position: Position) -> GameResult:
        """Determine the current game result."""
        gen = MoveGenerator(position)
        if gen.generate_legal_moves():
            return GameResult.IN_PROGRESS

        if gen.is_in_check(position.side_to_move):
            return (
                GameResult.BLACK_WINS
                if position.side_to_move == Color.WHITE
                else GameResult.WHITE_WINS
            )
        return GameResult.DRAW  # stalemate
