"""Reading moves typed by humans and GUIs.

Two notations are understood:

* long algebraic, as spoken by UCI: ``e2e4``, ``e7e8q``;
* short algebraic (SAN): ``Nf3``, ``exd6``, ``e8=Q``, ``Rad1``, ``O-O``.

Parsing only resolves *which* move is meant.  Whether it is legal is
decided by :meth:`Position.make_move`, except where legality is needed
to tell several candidate pieces apart.
"""

from __future__ import annotations

import logging
import re

from casey.core.castling import CASTLES
from casey.core.enums import MoveKind, PieceType
from casey.core.errors import InvalidAlgebraicError, MoveError, MoveErrorKind
from casey.core.move import Move
from casey.core.piece import PIECE_LETTERS, Piece
from casey.core.position import Position
from casey.core.types import (
    FILES,
    RANKS,
    Square,
    file_of,
    make_square,
    on_board,
    parse_square,
    rank_of,
)

_LOGGER = logging.getLogger(__name__)

_LONG_RE = re.compile(
    r"^(?P<from>[a-h][1-8])(?P<to>[a-h][1-8])(?P<promo>[qrbnQRBN])?$"
)

_SAN_RE = re.compile(
    r"^(?P<piece>[KQRBN])?"
    r"(?P<file>[a-h])?(?P<rank>[1-8])?"
    r"(?P<capture>x)?"
    r"(?P<to>[a-h][1-8])"
    r"(?:=?(?P<promo>[QRBN]))?"
    r"[+#]?[!?]*$"
)

_CASTLE_TEXT: dict[str, MoveKind] = {
    "O-O": MoveKind.KING_CASTLE_KINGSIDE,
    "0-0": MoveKind.KING_CASTLE_KINGSIDE,
    "O-O-O": MoveKind.KING_CASTLE_QUEENSIDE,
    "0-0-0": MoveKind.KING_CASTLE_QUEENSIDE,
}

_LETTER_TO_TYPE: dict[str, PieceType] = {v: k for k, v in PIECE_LETTERS.items()}

# Rank a pawn lands on after its double step.
_DOUBLE_STEP_RANK = {1: 3, -1: 4}


def square_to_coords(text: str) -> tuple[int, int]:
    """``"e4"`` → ``(4, 3)``; raises :class:`InvalidSquareError`."""
    sq = parse_square(text)
    return file_of(sq), rank_of(sq)


def coords_to_square(file: int, rank: int) -> str:
    """``(4, 3)`` → ``"e4"``."""
    return FILES[file] + RANKS[rank]


def move_to_long_algebraic(move: Move) -> str:
    return str(move)


def parse_long_algebraic(text: str, position: Position) -> Move:
    """Parse ``e2e4`` / ``e7e8q``; the piece type is read from the board."""
    m = _LONG_RE.match(text.strip())
    if m is None:
        raise InvalidAlgebraicError(f"Not a long-algebraic move: {text!r}")
    from_sq = parse_square(m.group("from"))
    to_sq = parse_square(m.group("to"))
    piece = position.board[from_sq]
    if piece is None:
        raise MoveError(MoveErrorKind.NO_PIECE_ON_SOURCE_SQUARE, text)
    promo = m.group("promo")
    promotion = _LETTER_TO_TYPE[promo.upper()] if promo else None
    return Move(from_sq, to_sq, piece.piece_type, promotion)


def parse_algebraic(text: str, position: Position) -> Move:
    """Resolve long or short algebraic *text* against *position*.

    Raises:
        InvalidAlgebraicError: the text is not algebraic notation at all.
        MoveError: ``ILLEGAL_MOVE`` when no piece of the side to move can
            make the move, ``AMBIGUOUS_MOVE`` when several can and the
            text does not say which.
    """
    clean = text.strip()
    if _LONG_RE.match(clean):
        return parse_long_algebraic(clean, position)

    castle = _CASTLE_TEXT.get(clean.rstrip("+#"))
    if castle is not None:
        rule = CASTLES[(position.side_to_move, castle)]
        return Move(rule.king_from, rule.king_to, PieceType.KING)

    m = _SAN_RE.match(clean)
    if m is None:
        _LOGGER.debug("Unparseable move text %r", text)
        raise InvalidAlgebraicError(f"Not an algebraic move: {text!r}")

    to_sq = parse_square(m.group("to"))
    promo = m.group("promo")
    promotion = _LETTER_TO_TYPE[promo] if promo else None
    file_hint = FILES.index(m.group("file")) if m.group("file") else None
    rank_hint = RANKS.index(m.group("rank")) if m.group("rank") else None

    letter = m.group("piece")
    if letter is None:
        if rank_hint is not None:
            raise InvalidAlgebraicError(f"Pawn moves take no rank hint: {text!r}")
        return _pawn_move(
            clean, position, to_sq, file_hint, bool(m.group("capture")), promotion
        )
    if promotion is not None:
        raise InvalidAlgebraicError(f"Only pawns promote: {text!r}")
    return _piece_move(
        clean, position, _LETTER_TO_TYPE[letter], to_sq, file_hint, rank_hint
    )


def _pawn_move(
    text: str,
    position: Position,
    to_sq: Square,
    file_hint: int | None,
    capture: bool,
    promotion: PieceType | None,
) -> Move:
    color = position.side_to_move
    step = color.pawn_direction
    pawn = Piece(color, PieceType.PAWN)
    board = position.board
    from_rank = rank_of(to_sq) - step

    if not on_board(file_of(to_sq), from_rank):
        raise MoveError(MoveErrorKind.ILLEGAL_MOVE, text)

    if capture or (file_hint is not None and file_hint != file_of(to_sq)):
        if file_hint is None or abs(file_hint - file_of(to_sq)) != 1:
            raise MoveError(MoveErrorKind.ILLEGAL_MOVE, text)
        from_sq = make_square(file_hint, from_rank)
        if board[from_sq] != pawn:
            raise MoveError(MoveErrorKind.ILLEGAL_MOVE, text)
        return Move(from_sq, to_sq, PieceType.PAWN, promotion)

    from_sq = make_square(file_of(to_sq), from_rank)
    if board[from_sq] == pawn:
        return Move(from_sq, to_sq, PieceType.PAWN, promotion)
    if board.is_empty(from_sq) and rank_of(to_sq) == _DOUBLE_STEP_RANK[step]:
        double_sq = make_square(file_of(to_sq), from_rank - step)
        if board[double_sq] == pawn:
            return Move(double_sq, to_sq, PieceType.PAWN)
    raise MoveError(MoveErrorKind.ILLEGAL_MOVE, text)


def _piece_move(
    text: str,
    position: Position,
    piece_type: PieceType,
    to_sq: Square,
    file_hint: int | None,
    rank_hint: int | None,
) -> Move:
    mover = Piece(position.side_to_move, piece_type)
    candidates = [
        Move(sq, to_sq, piece_type)
        for sq in position.board.pieces(mover.color, piece_type)
        if mover.classify(sq, to_sq) != MoveKind.ILLEGAL
        and (file_hint is None or file_of(sq) == file_hint)
        and (rank_hint is None or rank_of(sq) == rank_hint)
    ]
    if len(candidates) == 1:
        return candidates[0]
    if candidates:
        legal = set(position.legal_moves())
        candidates = [move for move in candidates if move in legal]
        if len(candidates) == 1:
            return candidates[0]
        if candidates:
            raise MoveError(MoveErrorKind.AMBIGUOUS_MOVE, text)
    raise MoveError(MoveErrorKind.ILLEGAL_MOVE, text)
