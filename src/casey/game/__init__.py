"""Game management layer: position plus per-side move history."""

from casey.game.game import Game

__all__ = ["Game"]
