"""SAN (Standard Algebraic Notation) formatting."""

from __future__ import annotations

from casey.core.enums import MoveKind, PieceType
from casey.core.move import Move
from casey.core.piece import PIECE_LETTERS
from casey.core.position import Position
from casey.core.types import file_of, rank_of, square_name


def move_to_san(position: Position, move: Move) -> str:
    """Convert a legal *move* to SAN given the *position* before the move.

    *position* is left untouched; the check suffix is computed on a copy.
    """
    board = position.board
    piece = board[move.from_sq]
    assert piece is not None

    kind = piece.classify(move.from_sq, move.to_sq)
    if kind == MoveKind.KING_CASTLE_KINGSIDE:
        san = "O-O"
    elif kind == MoveKind.KING_CASTLE_QUEENSIDE:
        san = "O-O-O"
    else:
        san = ""
        is_capture = board[move.to_sq] is not None or kind == MoveKind.PAWN_CAPTURE

        if piece.piece_type == PieceType.PAWN:
            if is_capture:
                san += chr(ord("a") + file_of(move.from_sq))
        else:
            san += PIECE_LETTERS[piece.piece_type]

            # Disambiguation
            ambiguous = [
                m
                for m in position.legal_moves()
                if m.to_sq == move.to_sq
                and m.from_sq != move.from_sq
                and m.piece_type == piece.piece_type
            ]
            if ambiguous:
                same_file = any(
                    file_of(m.from_sq) == file_of(move.from_sq) for m in ambiguous
                )
                same_rank = any(
                    rank_of(m.from_sq) == rank_of(move.from_sq) for m in ambiguous
                )
                if not same_file:
                    san += chr(ord("a") + file_of(move.from_sq))
                elif not same_rank:
                    san += str(rank_of(move.from_sq) + 1)
                else:
                    san += square_name(move.from_sq)

        if is_capture:
            san += "x"

        san += square_name(move.to_sq)

        if piece.piece_type == PieceType.PAWN and rank_of(move.to_sq) in (0, 7):
            san += "=" + PIECE_LETTERS[move.promotion or PieceType.QUEEN]

    # Check / checkmate suffix
    after = position.copy()
    after.make_move(move)
    if after.king_in_check():
        san += "#" if not after.legal_moves() else "+"

    return san
