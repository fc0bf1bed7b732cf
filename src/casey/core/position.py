"""Position: complete game state (board + metadata) and the move applier."""

from __future__ import annotations

import logging

from casey.core.attacks import is_in_check, is_square_attacked
from casey.core.board import Board
from casey.core.castling import CASTLES, ROOK_HOMES, can_castle
from casey.core.enums import CastlingRights, Color, MoveKind, PieceType
from casey.core.errors import MoveError, MoveErrorKind
from casey.core.move import Move
from casey.core.move_generator import MoveGenerator
from casey.core.piece import Piece
from casey.core.types import Square, file_of, make_square, rank_of

_LOGGER = logging.getLogger(__name__)

# (square, piece that stood there before the write)
UndoLog = list[tuple[Square, Piece | None]]

_PROMOTABLE = frozenset(
    (PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT)
)


def _is_last_rank(sq: Square) -> bool:
    return rank_of(sq) in (0, 7)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _squares_between(from_sq: Square, to_sq: Square) -> list[Square]:
    """Squares strictly between two squares on a shared line or diagonal."""
    df = _sign(file_of(to_sq) - file_of(from_sq))
    dr = _sign(rank_of(to_sq) - rank_of(from_sq))
    squares: list[Square] = []
    f = file_of(from_sq) + df
    r = rank_of(from_sq) + dr
    while make_square(f, r) != to_sq:
        squares.append(make_square(f, r))
        f += df
        r += dr
    return squares


class Position:
    """Full chess position: board + side to move + castling + en passant + clocks.

    :meth:`make_move` is the only way the game advances.  It validates the
    move in stages, mutates the grid tentatively while recording an undo
    log, and either commits the bookkeeping (clocks, rights, en passant,
    side to move) or replays the log and raises :class:`MoveError`.  A
    rejected move therefore leaves the position exactly as it was.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castling",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number

    @classmethod
    def starting(cls) -> Position:
        """Standard starting position."""
        return cls()

    @classmethod
    def empty(cls) -> Position:
        """Empty board, white to move, no castling rights."""
        return cls(Board(), castling=CastlingRights.NONE)

    # ── Queries ──────────────────────────────────────────────────────────

    def king_square(self, color: Color) -> Square | None:
        return self.board.king_square(color)

    def king_in_check(self) -> bool:
        """Is the side to move in check?"""
        return is_in_check(self.board, self.side_to_move)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        return is_square_attacked(self.board, sq, by_color)

    def legal_moves(self) -> list[Move]:
        """All strictly legal moves for the side to move."""
        return MoveGenerator(self).generate_legal_moves()

    # ── Move application ─────────────────────────────────────────────────

    def make_move(self, move: Move) -> None:
        """Validate and apply *move*, raising :class:`MoveError` on rejection."""
        if not (0 <= move.from_sq < 64 and 0 <= move.to_sq < 64):
            detail = f"off-board square {move.from_sq} -> {move.to_sq}"
            _LOGGER.debug("Rejected move: %s", detail)
            raise MoveError(MoveErrorKind.ILLEGAL_MOVE, detail)
        piece = self.board[move.from_sq]
        if piece is None:
            raise self._reject(move, MoveErrorKind.NO_PIECE_ON_SOURCE_SQUARE)
        if move.from_sq == move.to_sq:
            raise self._reject(move, MoveErrorKind.MUST_MOVE_PIECE)
        if piece.color != self.side_to_move:
            raise self._reject(move, MoveErrorKind.PIECE_WRONG_COLOR)
        if piece.piece_type != move.piece_type:
            raise self._reject(move, MoveErrorKind.ILLEGAL_MOVE)

        kind = piece.classify(move.from_sq, move.to_sq)
        if kind == MoveKind.ILLEGAL:
            raise self._reject(move, MoveErrorKind.ILLEGAL_MOVE)

        self._validate_promotion(move, piece)
        self._validate_path(move, piece, kind)

        undo, captured = self._apply_grid(move, piece, kind)
        if is_in_check(self.board, piece.color):
            self._restore(undo)
            raise self._reject(move, MoveErrorKind.KING_IN_CHECK)

        self._commit(move, piece, kind, captured)

    def leaves_king_in_check(self, move: Move) -> bool:
        """Would *move* leave the mover's own king attacked?

        Only the grid effects are applied (including en-passant removal
        and the castling rook), then undone; clocks and rights are never
        touched.  *move* is assumed to be pseudo-legal.
        """
        piece = self.board[move.from_sq]
        if piece is None:
            return False
        kind = piece.classify(move.from_sq, move.to_sq)
        undo, _ = self._apply_grid(move, piece, kind)
        try:
            return is_in_check(self.board, piece.color)
        finally:
            self._restore(undo)

    # ── Validation stages ────────────────────────────────────────────────

    def _validate_promotion(self, move: Move, piece: Piece) -> None:
        if move.promotion is None:
            return
        promoting = piece.piece_type == PieceType.PAWN and _is_last_rank(move.to_sq)
        if not promoting or move.promotion not in _PROMOTABLE:
            raise self._reject(move, MoveErrorKind.ILLEGAL_MOVE)

    def _validate_path(self, move: Move, piece: Piece, kind: MoveKind) -> None:
        board = self.board
        target = board[move.to_sq]

        if kind == MoveKind.PAWN_SINGLE:
            if target is not None:
                raise self._reject(move, MoveErrorKind.MOVE_BLOCKED)
            return

        if kind == MoveKind.PAWN_DOUBLE:
            middle = make_square(
                file_of(move.from_sq),
                (rank_of(move.from_sq) + rank_of(move.to_sq)) // 2,
            )
            if target is not None or not board.is_empty(middle):
                raise self._reject(move, MoveErrorKind.MOVE_BLOCKED)
            return

        if kind == MoveKind.PAWN_CAPTURE:
            if target is None:
                if move.to_sq != self.en_passant:
                    raise self._reject(move, MoveErrorKind.ILLEGAL_MOVE)
                victim = board[make_square(file_of(move.to_sq), rank_of(move.from_sq))]
                if (
                    victim is None
                    or victim.color == piece.color
                    or victim.piece_type != PieceType.PAWN
                ):
                    raise self._reject(move, MoveErrorKind.ILLEGAL_MOVE)
            elif target.color == piece.color:
                raise self._reject(move, MoveErrorKind.CANNOT_CAPTURE_OWN_PIECE)
            return

        if kind.is_castle:
            if not can_castle(self, piece.color, kind):
                raise self._reject(move, MoveErrorKind.ILLEGAL_MOVE)
            return

        if kind.is_sliding:
            for sq in _squares_between(move.from_sq, move.to_sq):
                if not board.is_empty(sq):
                    raise self._reject(move, MoveErrorKind.MOVE_BLOCKED)

        if target is not None and target.color == piece.color:
            raise self._reject(move, MoveErrorKind.CANNOT_CAPTURE_OWN_PIECE)

    # ── Grid mutation / rollback ─────────────────────────────────────────

    def _apply_grid(
        self, move: Move, piece: Piece, kind: MoveKind
    ) -> tuple[UndoLog, Piece | None]:
        """Apply the board effects of *move*; return the undo log and the capture."""
        board = self.board
        undo: UndoLog = []

        def put(sq: Square, new_piece: Piece | None) -> None:
            undo.append((sq, board[sq]))
            board[sq] = new_piece

        captured = board[move.to_sq]
        if kind == MoveKind.PAWN_CAPTURE and captured is None:
            # En passant: the captured pawn sits beside the mover, not on to_sq.
            victim_sq = make_square(file_of(move.to_sq), rank_of(move.from_sq))
            captured = board[victim_sq]
            put(victim_sq, None)

        placed = piece
        if piece.piece_type == PieceType.PAWN and _is_last_rank(move.to_sq):
            placed = Piece(piece.color, move.promotion or PieceType.QUEEN)

        put(move.from_sq, None)
        put(move.to_sq, placed)

        if kind.is_castle:
            rule = CASTLES[(piece.color, kind)]
            put(rule.rook_to, board[rule.rook_from])
            put(rule.rook_from, None)

        return undo, captured

    def _restore(self, undo: UndoLog) -> None:
        for sq, piece in reversed(undo):
            self.board[sq] = piece

    # ── Commit ───────────────────────────────────────────────────────────

    def _commit(
        self, move: Move, piece: Piece, kind: MoveKind, captured: Piece | None
    ) -> None:
        if kind == MoveKind.PAWN_DOUBLE:
            self.en_passant = make_square(
                file_of(move.from_sq),
                (rank_of(move.from_sq) + rank_of(move.to_sq)) // 2,
            )
        else:
            self.en_passant = None

        if piece.piece_type == PieceType.PAWN or captured is not None:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1

        self._update_castling(move, piece)

        if piece.color == Color.BLACK:
            self.fullmove_number += 1
        self.side_to_move = piece.color.opposite

    def _update_castling(self, move: Move, piece: Piece) -> None:
        if piece.piece_type == PieceType.KING:
            if piece.color == Color.WHITE:
                self.castling &= ~CastlingRights.WHITE_BOTH
            else:
                self.castling &= ~CastlingRights.BLACK_BOTH

        # A rook leaving its corner, or being captured there.
        for sq in (move.from_sq, move.to_sq):
            right = ROOK_HOMES.get(sq)
            if right is not None:
                self.castling &= ~right

    def _reject(self, move: Move, kind: MoveErrorKind) -> MoveError:
        _LOGGER.debug("Rejected move %s: %s", move, kind.message)
        return MoveError(kind, str(move))

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        """Deep copy."""
        return Position(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            castling=self.castling,
            en_passant=self.en_passant,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.board == other.board
            and self.side_to_move == other.side_to_move
            and self.castling == other.castling
            and self.en_passant == other.en_passant
            and self.halfmove_clock == other.halfmove_clock
            and self.fullmove_number == other.fullmove_number
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"{self.board!r}\n"
            f"{self.side_to_move} to move, castling={self.castling!r}, "
            f"ep={self.en_passant}, halfmove={self.halfmove_clock}, "
            f"fullmove={self.fullmove_number}"
        )
