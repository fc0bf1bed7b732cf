"""Game: a position plus the moves each side has played."""

from __future__ import annotations

import logging

from casey.core.enums import Color, GameResult
from casey.core.move import Move
from casey.core.notation.fen import position_from_fen
from casey.core.position import Position
from casey.core.rules import Rules
from casey.engine.search import IEngine, SearchLimits

_LOGGER = logging.getLogger(__name__)


class Game:
    """Tracks a game in progress.

    Moves go through :meth:`Position.make_move`, so a rejected move raises
    :class:`MoveError` and leaves both the position and the histories
    unchanged.
    """

    __slots__ = ("position", "white_history", "black_history")

    def __init__(self, position: Position | None = None) -> None:
        self.position = position if position is not None else Position.starting()
        self.white_history: list[Move] = []
        self.black_history: list[Move] = []

    @classmethod
    def from_fen(cls, fen: str) -> Game:
        return cls(position_from_fen(fen))

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def result(self) -> GameResult:
        return Rules.game_result(self.position)

    @property
    def is_over(self) -> bool:
        return self.result != GameResult.IN_PROGRESS

    def legal_moves(self) -> list[Move]:
        return self.position.legal_moves()

    def history(self, color: Color) -> list[Move]:
        return self.white_history if color == Color.WHITE else self.black_history

    # ── Mutation ─────────────────────────────────────────────────────────

    def make_move(self, move: Move) -> None:
        mover = self.position.side_to_move
        self.position.make_move(move)
        self.history(mover).append(move)

    def engine_move(
        self, engine: IEngine, limits: SearchLimits | None = None
    ) -> Move | None:
        """Let *engine* choose a move for the side to move and play it.

        Returns ``None`` (and changes nothing) when there is no legal move.
        """
        result = engine.search(self.position, limits)
        if result.best_move is None:
            return None
        self.make_move(result.best_move)
        _LOGGER.debug(
            "Engine played %s (score %d, %d nodes)",
            result.best_move,
            result.score_cp,
            result.nodes,
        )
        return result.best_move
