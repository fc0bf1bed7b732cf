"""Error taxonomy for the chess core.

Two families exist:

* **Parse errors** (:class:`ParseError`): malformed FEN, square or move
  text.  Raised before any core state is touched.
* **Move errors** (:class:`MoveError`): a well-formed move that the
  position rejects.  Any tentative mutation is rolled back before the
  error propagates, so the position is unchanged.

Both families derive from :class:`ValueError` so callers that only care
about "bad input" can catch that.
"""

from __future__ import annotations

from enum import Enum


class ChessError(Exception):
    """Root of every error raised by the chess core."""


# ── Parse errors ─────────────────────────────────────────────────────────────


class ParseError(ChessError, ValueError):
    """Text input could not be parsed."""


class InvalidFenError(ParseError):
    """A FEN string is malformed."""


class InvalidSquareError(ParseError):
    """A square name is not ``[a-h][1-8]``."""


class InvalidAlgebraicError(ParseError):
    """Move text matches neither long nor short algebraic notation."""


# ── Move errors ──────────────────────────────────────────────────────────────


class MoveErrorKind(Enum):
    """Machine-readable reason a move was rejected."""

    NO_PIECE_ON_SOURCE_SQUARE = "The source square is empty"
    MUST_MOVE_PIECE = "The piece must move to a different square"
    PIECE_WRONG_COLOR = "The piece belongs to the other side"
    ILLEGAL_MOVE = "Illegal move"
    MOVE_BLOCKED = "The move is blocked by another piece"
    CANNOT_CAPTURE_OWN_PIECE = "Cannot capture own piece"
    KING_IN_CHECK = "The move leaves the king in check"
    AMBIGUOUS_MOVE = "More than one piece can make this move"

    @property
    def message(self) -> str:
        return self.value


class MoveError(ChessError, ValueError):
    """A move was rejected by the position.

    Attributes:
        kind: Why the move was rejected.
        detail: Optional extra context (e.g. the move text).
    """

    def __init__(self, kind: MoveErrorKind, detail: str = "") -> None:
        self.kind = kind
        self.detail = detail
        text = kind.message if not detail else f"{kind.message}: {detail}"
        super().__init__(text)
