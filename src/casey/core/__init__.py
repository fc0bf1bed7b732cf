"""Core domain layer: pure chess logic with zero external dependencies.

Quick start::

    from casey.core import Position, parse_algebraic, position_from_fen, STARTING_FEN

    pos = position_from_fen(STARTING_FEN)
    pos.make_move(parse_algebraic("e4", pos))
    for move in pos.legal_moves():
        print(move)
"""

from casey.core.board import Board
from casey.core.enums import CastlingRights, Color, GameResult, MoveKind, PieceType
from casey.core.errors import (
    ChessError,
    InvalidAlgebraicError,
    InvalidFenError,
    InvalidSquareError,
    MoveError,
    MoveErrorKind,
    ParseError,
)
from casey.core.evaluation import basic_material_sum, evaluate_move
from casey.core.move import NULL_MOVE, Move
from casey.core.move_generator import MoveGenerator
from casey.core.notation import (
    STARTING_FEN,
    coords_to_square,
    move_to_long_algebraic,
    move_to_san,
    parse_algebraic,
    parse_long_algebraic,
    position_from_fen,
    position_to_fen,
    square_to_coords,
)
from casey.core.perft import divide, perft
from casey.core.piece import Piece
from casey.core.position import Position
from casey.core.rules import Rules
from casey.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "MoveKind",
    "PieceType",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Errors
    "ChessError",
    "ParseError",
    "InvalidFenError",
    "InvalidSquareError",
    "InvalidAlgebraicError",
    "MoveError",
    "MoveErrorKind",
    # Domain objects
    "Board",
    "Move",
    "NULL_MOVE",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    # Evaluation / perft
    "basic_material_sum",
    "evaluate_move",
    "perft",
    "divide",
    # Notation
    "STARTING_FEN",
    "coords_to_square",
    "move_to_long_algebraic",
    "move_to_san",
    "parse_algebraic",
    "parse_long_algebraic",
    "position_from_fen",
    "position_to_fen",
    "square_to_coords",
]
