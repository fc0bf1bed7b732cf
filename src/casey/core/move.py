"""Move value object (long-algebraic representation)."""

from __future__ import annotations

from dataclasses import dataclass

from casey.core.enums import PieceType
from casey.core.types import Square, square_name

PROMOTION_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}

NULL_MOVE = "0000"


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    Carries no reference to a board: the moving piece type is recorded so
    the position can validate it, and *promotion* is ``None`` unless the
    caller asked for a specific piece (the position defaults to a queen).
    """

    from_sq: Square
    to_sq: Square
    piece_type: PieceType
    promotion: PieceType | None = None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += PROMOTION_CHARS.get(self.promotion, "")
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation, e.g. ``e7e8q``."""
        return str(self)
