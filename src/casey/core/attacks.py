"""Attack detection and the precomputed geometry it shares with move generation."""

from __future__ import annotations

from casey.core.board import Board
from casey.core.enums import Color, PieceType
from casey.core.types import Square, file_of, make_square, on_board, rank_of

Offset = tuple[int, int]

KNIGHT_OFFSETS: tuple[Offset, ...] = (
    (1, 2),
    (2, 1),
    (-1, 2),
    (-2, 1),
    (1, -2),
    (2, -1),
    (-1, -2),
    (-2, -1),
)

KING_OFFSETS: tuple[Offset, ...] = (
    (1, 0),
    (-1, 0),
    (0, 1),
    (0, -1),
    (1, 1),
    (-1, 1),
    (1, -1),
    (-1, -1),
)

ROOK_DIRS: tuple[Offset, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))
BISHOP_DIRS: tuple[Offset, ...] = ((1, 1), (-1, 1), (1, -1), (-1, -1))
QUEEN_DIRS: tuple[Offset, ...] = ROOK_DIRS + BISHOP_DIRS

_LINE_ATTACKERS = frozenset((PieceType.ROOK, PieceType.QUEEN))
_DIAGONAL_ATTACKERS = frozenset((PieceType.BISHOP, PieceType.QUEEN))


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(offsets: tuple[Offset, ...]) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        f, r = file_of(sq), rank_of(sq)
        targets.append(
            tuple(
                make_square(f + df, r + dr)
                for df, dr in offsets
                if on_board(f + df, r + dr)
            )
        )
    return tuple(targets)


def _build_rays(
    directions: tuple[Offset, ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    """[square][direction] -> squares walked from *square*, nearest first."""
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            f = file_of(sq) + df
            r = rank_of(sq) + dr
            ray: list[Square] = []
            while on_board(f, r):
                ray.append(make_square(f, r))
                f += df
                r += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
KING_TARGETS = _build_targets(KING_OFFSETS)
ROOK_RAYS = _build_rays(ROOK_DIRS)
BISHOP_RAYS = _build_rays(BISHOP_DIRS)
QUEEN_RAYS = _build_rays(QUEEN_DIRS)


# -- Attack detection --------------------------------------------------------


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?

    Sliders are found by walking each ray to its first occupied square.
    Pawns only ever attack one diagonal step, so they are matched on the
    first square of the two diagonals that point back towards
    *by_color*'s side of the board, never further along the ray.
    """
    for ray in ROOK_RAYS[sq]:
        for to_sq in ray:
            piece = board[to_sq]
            if piece is None:
                continue
            if piece.color == by_color and piece.piece_type in _LINE_ATTACKERS:
                return True
            break

    # A pawn of by_color attacks sq from one rank "behind" it.
    pawn_rank_step = -by_color.pawn_direction
    for (_, dr), ray in zip(BISHOP_DIRS, BISHOP_RAYS[sq]):
        for distance, to_sq in enumerate(ray, start=1):
            piece = board[to_sq]
            if piece is None:
                continue
            if piece.color == by_color:
                if piece.piece_type in _DIAGONAL_ATTACKERS:
                    return True
                if (
                    piece.piece_type == PieceType.PAWN
                    and distance == 1
                    and dr == pawn_rank_step
                ):
                    return True
            break

    for to_sq in KNIGHT_TARGETS[sq]:
        piece = board[to_sq]
        if (
            piece is not None
            and piece.color == by_color
            and piece.piece_type == PieceType.KNIGHT
        ):
            return True

    for to_sq in KING_TARGETS[sq]:
        piece = board[to_sq]
        if (
            piece is not None
            and piece.color == by_color
            and piece.piece_type == PieceType.KING
        ):
            return True

    return False


def is_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked by the opponent? ``False`` without a king."""
    king_sq = board.king_square(color)
    if king_sq is None:
        return False
    return is_square_attacked(board, king_sq, color.opposite)
