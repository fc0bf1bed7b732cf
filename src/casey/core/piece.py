"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from casey.core.enums import Color, MoveKind, PieceType
from casey.core.types import Square, file_of, rank_of

# FEN character ↔ (Color, PieceType)
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "P": (Color.WHITE, PieceType.PAWN),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "B": (Color.WHITE, PieceType.BISHOP),
    "R": (Color.WHITE, PieceType.ROOK),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "K": (Color.WHITE, PieceType.KING),
    "p": (Color.BLACK, PieceType.PAWN),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "b": (Color.BLACK, PieceType.BISHOP),
    "r": (Color.BLACK, PieceType.ROOK),
    "q": (Color.BLACK, PieceType.QUEEN),
    "k": (Color.BLACK, PieceType.KING),
}

_FEN_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}

PIECE_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "P",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}

CENTIPAWNS: dict[PieceType, int] = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 300,
    PieceType.BISHOP: 300,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: 0,
}

_PAWN_START_RANK: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: 6}
_KING_HOME: dict[Color, Square] = {Color.WHITE: 4, Color.BLACK: 60}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece."""

    color: Color
    piece_type: PieceType

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.piece_type)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype)

    @property
    def centipawns(self) -> int:
        """Material value of the piece type (king counts as 0)."""
        return CENTIPAWNS[self.piece_type]

    # ── Movement geometry ────────────────────────────────────────────────

    def classify(self, from_sq: Square, to_sq: Square) -> MoveKind:
        """Could this piece theoretically travel from *from_sq* to *to_sq*?

        Only the piece's own movement pattern is considered: blockers,
        captures and king safety are the caller's concern.
        """
        df = file_of(to_sq) - file_of(from_sq)
        dr = rank_of(to_sq) - rank_of(from_sq)
        if df == 0 and dr == 0:
            return MoveKind.ILLEGAL

        ptype = self.piece_type
        if ptype == PieceType.PAWN:
            step = self.color.pawn_direction
            if df == 0:
                if dr == step:
                    return MoveKind.PAWN_SINGLE
                if dr == 2 * step and rank_of(from_sq) == _PAWN_START_RANK[self.color]:
                    return MoveKind.PAWN_DOUBLE
            elif abs(df) == 1 and dr == step:
                return MoveKind.PAWN_CAPTURE
            return MoveKind.ILLEGAL

        if ptype == PieceType.KNIGHT:
            if (abs(df), abs(dr)) in ((1, 2), (2, 1)):
                return MoveKind.KNIGHT
            return MoveKind.ILLEGAL

        straight = df == 0 or dr == 0
        diagonal = abs(df) == abs(dr)

        if ptype == PieceType.ROOK:
            return MoveKind.ROOK if straight else MoveKind.ILLEGAL
        if ptype == PieceType.BISHOP:
            return MoveKind.BISHOP if diagonal else MoveKind.ILLEGAL
        if ptype == PieceType.QUEEN:
            return MoveKind.QUEEN if straight or diagonal else MoveKind.ILLEGAL

        # King
        if abs(df) <= 1 and abs(dr) <= 1:
            return MoveKind.KING_NORMAL
        if from_sq == _KING_HOME[self.color] and dr == 0:
            if df == 2:
                return MoveKind.KING_CASTLE_KINGSIDE
            if df == -2:
                return MoveKind.KING_CASTLE_QUEENSIDE
        return MoveKind.ILLEGAL
