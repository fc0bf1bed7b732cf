"""Castling geometry and the legality predicate shared by generation and application."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from casey.core.attacks import is_square_attacked
from casey.core.enums import CastlingRights, Color, MoveKind, PieceType
from casey.core.types import Square, make_square

if TYPE_CHECKING:
    from casey.core.position import Position


@dataclass(frozen=True, slots=True)
class CastleRule:
    """Squares involved in one castling move."""

    right: CastlingRights
    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square
    # Strictly between king and rook.
    empty: tuple[Square, ...]
    # King start, transit and destination.
    safe: tuple[Square, ...]


def _rule(color: Color, kind: MoveKind) -> CastleRule:
    r = 0 if color == Color.WHITE else 7
    if kind == MoveKind.KING_CASTLE_KINGSIDE:
        right = (
            CastlingRights.WHITE_KINGSIDE
            if color == Color.WHITE
            else CastlingRights.BLACK_KINGSIDE
        )
        return CastleRule(
            right=right,
            king_from=make_square(4, r),
            king_to=make_square(6, r),
            rook_from=make_square(7, r),
            rook_to=make_square(5, r),
            empty=(make_square(5, r), make_square(6, r)),
            safe=(make_square(4, r), make_square(5, r), make_square(6, r)),
        )
    right = (
        CastlingRights.WHITE_QUEENSIDE
        if color == Color.WHITE
        else CastlingRights.BLACK_QUEENSIDE
    )
    return CastleRule(
        right=right,
        king_from=make_square(4, r),
        king_to=make_square(2, r),
        rook_from=make_square(0, r),
        rook_to=make_square(3, r),
        empty=(make_square(3, r), make_square(2, r), make_square(1, r)),
        safe=(make_square(4, r), make_square(3, r), make_square(2, r)),
    )


CASTLES: dict[tuple[Color, MoveKind], CastleRule] = {
    (color, kind): _rule(color, kind)
    for color in Color
    for kind in (MoveKind.KING_CASTLE_KINGSIDE, MoveKind.KING_CASTLE_QUEENSIDE)
}

# Rook home square -> the right it guards.
ROOK_HOMES: dict[Square, CastlingRights] = {
    rule.rook_from: rule.right for rule in CASTLES.values()
}


def can_castle(position: Position, color: Color, kind: MoveKind) -> bool:
    """Full castling legality check for *color* on the wing given by *kind*.

    1. the castling right is still set;
    2. king start, transit and destination squares are not attacked;
    3. every square strictly between king and rook is empty;
    4. the king and the right-colored rook stand on their home squares.
    """
    rule = CASTLES[(color, kind)]
    if not position.castling & rule.right:
        return False

    board = position.board
    king = board[rule.king_from]
    if king is None or king.color != color or king.piece_type != PieceType.KING:
        return False
    rook = board[rule.rook_from]
    if rook is None or rook.color != color or rook.piece_type != PieceType.ROOK:
        return False

    if any(not board.is_empty(sq) for sq in rule.empty):
        return False

    opponent = color.opposite
    return not any(is_square_attacked(board, sq, opponent) for sq in rule.safe)
