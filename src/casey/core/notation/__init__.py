"""Notation package: FEN, long algebraic and SAN parsing and serialization."""

from casey.core.notation.algebraic import (
    coords_to_square,
    move_to_long_algebraic,
    parse_algebraic,
    parse_long_algebraic,
    square_to_coords,
)
from casey.core.notation.fen import STARTING_FEN, position_from_fen, position_to_fen
from casey.core.notation.san import move_to_san

__all__ = [
    "STARTING_FEN",
    "position_from_fen",
    "position_to_fen",
    "parse_algebraic",
    "parse_long_algebraic",
    "move_to_long_algebraic",
    "square_to_coords",
    "coords_to_square",
    "move_to_san",
]
