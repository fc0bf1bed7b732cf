"""Legal and pseudo-legal move generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from casey.core.attacks import (
    BISHOP_RAYS,
    KING_TARGETS,
    KNIGHT_TARGETS,
    QUEEN_RAYS,
    ROOK_RAYS,
    is_in_check,
    is_square_attacked,
)
from casey.core.castling import CASTLES, can_castle
from casey.core.enums import Color, MoveKind, PieceType
from casey.core.move import Move
from casey.core.piece import Piece
from casey.core.types import Square, file_of, make_square, on_board, rank_of

if TYPE_CHECKING:
    from casey.core.position import Position


PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
)

_PAWN_START_RANK: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: 6}
_PAWN_LAST_RANK: dict[Color, int] = {Color.WHITE: 7, Color.BLACK: 0}

_SLIDER_RAYS = {
    PieceType.ROOK: ROOK_RAYS,
    PieceType.BISHOP: BISHOP_RAYS,
    PieceType.QUEEN: QUEEN_RAYS,
}


class MoveGenerator:
    """Generates moves for the side to move of a given :class:`Position`.

    The authoritative position is never mutated: the king-safety filter
    runs against a private copy made once per :meth:`generate_legal_moves`
    call.  Move order is board order (a1 → h8), then per-piece direction
    order; it is not part of any contract.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self) -> list[Move]:
        """All strictly legal moves for the side to move."""
        probe = self._pos.copy()
        return [
            move
            for move in self.generate_pseudo_legal_moves()
            if not probe.leaves_king_in_check(move)
        ]

    def generate_pseudo_legal_moves(self) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check)."""
        moves: list[Move] = []
        color = self._pos.side_to_move
        for sq, piece in self._board.occupied():
            if piece.color == color:
                self._gen_piece(sq, piece, moves)
        return moves

    def piece_moves(self, sq: Square) -> list[Move]:
        """Pseudo-legal moves of whatever piece stands on *sq*."""
        piece = self._board[sq]
        moves: list[Move] = []
        if piece is not None:
            self._gen_piece(sq, piece, moves)
        return moves

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        return is_in_check(self._board, color)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        return is_square_attacked(self._board, sq, by_color)

    # -- Piece-specific generators (private) -------------------------------

    def _gen_piece(self, sq: Square, piece: Piece, moves: list[Move]) -> None:
        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            self._gen_pawn(sq, piece.color, moves)
        elif ptype == PieceType.KNIGHT:
            self._gen_steps(sq, piece, KNIGHT_TARGETS[sq], moves)
        elif ptype == PieceType.KING:
            self._gen_steps(sq, piece, KING_TARGETS[sq], moves)
            self._gen_castling(sq, piece.color, moves)
        else:
            self._gen_sliding(sq, piece, _SLIDER_RAYS[ptype][sq], moves)

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        step = color.pawn_direction
        file_idx = file_of(sq)
        rank_idx = rank_of(sq)
        next_rank = rank_idx + step
        if not on_board(file_idx, next_rank):
            return

        one_step = make_square(file_idx, next_rank)
        if board.is_empty(one_step):
            self._add_pawn_move(sq, one_step, color, moves)
            if rank_idx == _PAWN_START_RANK[color]:
                two_step = make_square(file_idx, rank_idx + 2 * step)
                if board.is_empty(two_step):
                    moves.append(Move(sq, two_step, PieceType.PAWN))

        for df in (-1, 1):
            if not on_board(file_idx + df, next_rank):
                continue
            cap_sq = make_square(file_idx + df, next_rank)
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    self._add_pawn_move(sq, cap_sq, color, moves)
            elif cap_sq == self._pos.en_passant:
                victim = board[make_square(file_idx + df, rank_idx)]
                if (
                    victim is not None
                    and victim.color != color
                    and victim.piece_type == PieceType.PAWN
                ):
                    moves.append(Move(sq, cap_sq, PieceType.PAWN))

    @staticmethod
    def _add_pawn_move(
        from_sq: Square, to_sq: Square, color: Color, moves: list[Move]
    ) -> None:
        if rank_of(to_sq) == _PAWN_LAST_RANK[color]:
            for pt in PROMOTION_TYPES:
                moves.append(Move(from_sq, to_sq, PieceType.PAWN, pt))
        else:
            moves.append(Move(from_sq, to_sq, PieceType.PAWN))

    def _gen_steps(
        self,
        sq: Square,
        piece: Piece,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None or target.color != piece.color:
                moves.append(Move(sq, to_sq, piece.piece_type))

    def _gen_sliding(
        self,
        sq: Square,
        piece: Piece,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq, piece.piece_type))
                    continue
                if target.color != piece.color:
                    moves.append(Move(sq, to_sq, piece.piece_type))
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        for kind in (MoveKind.KING_CASTLE_KINGSIDE, MoveKind.KING_CASTLE_QUEENSIDE):
            rule = CASTLES[(color, kind)]
            if king_sq == rule.king_from and can_castle(self._pos, color, kind):
                moves.append(Move(king_sq, rule.king_to, PieceType.KING))
