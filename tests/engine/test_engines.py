"""Tests for the greedy and random engines."""

import random

import pytest

from casey.core.enums import PieceType
from casey.core.move import Move
from casey.core.notation import STARTING_FEN, position_from_fen
from casey.core.types import D5, E4, F2, H2
from casey.engine import (
    GreedyEngine,
    RandomEngine,
    SearchLimits,
    create_engine,
)

HANGING_PAWN = "rnbqkbnr/ppp1pppp/8/3p4/4P3/8/PPPP1PPP/RNBQKBNR w KQkq d6 0 2"
PAWN_GRABS_FOR_BLACK = (
    "rnb1kbnr/pppp1ppp/8/4p3/4P2q/5N2/PPPP1PPP/RNBQKB1R b KQkq - 3 3"
)
STALEMATE = "7k/5Q2/6K1/8/8/8/8/8 b - - 0 1"


class TestGreedyEngine:
    def test_takes_material(self) -> None:
        pos = position_from_fen(HANGING_PAWN)
        result = GreedyEngine().search(pos)
        assert result.best_move == Move(E4, D5, PieceType.PAWN)
        assert result.score_cp == 100
        assert result.nodes == len(pos.legal_moves())

    def test_scores_for_black(self) -> None:
        pos = position_from_fen(PAWN_GRABS_FOR_BLACK)
        result = GreedyEngine().search(pos)
        # Three pawn grabs score +100; recaptures are not looked at.
        assert result.best_move is not None
        assert result.best_move.to_sq in (E4, F2, H2)
        assert result.score_cp == 100

    def test_tie_keeps_first_generated(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        result = GreedyEngine().search(pos)
        assert result.best_move == pos.legal_moves()[0]
        assert result.score_cp == 0

    def test_no_moves(self) -> None:
        result = GreedyEngine().search(position_from_fen(STALEMATE))
        assert result.best_move is None
        assert result.nodes == 0

    def test_search_does_not_mutate(self) -> None:
        pos = position_from_fen(HANGING_PAWN)
        before = pos.copy()
        GreedyEngine().search(pos)
        assert pos == before

    def test_progress_reported(self) -> None:
        seen: list[tuple[Move, int]] = []
        GreedyEngine().search(
            position_from_fen(HANGING_PAWN),
            on_progress=lambda move, score: seen.append((move, score)),
        )
        assert seen[-1] == (Move(E4, D5, PieceType.PAWN), 100)

    def test_cancel_returns_first_move(self) -> None:
        pos = position_from_fen(HANGING_PAWN)
        result = GreedyEngine().search(pos, is_cancelled=lambda: True)
        assert result.best_move == pos.legal_moves()[0]
        assert result.nodes == 1

    def test_time_limit_still_yields_a_move(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        result = GreedyEngine().search(pos, SearchLimits(time_limit_ms=1))
        assert result.best_move in pos.legal_moves()


class TestRandomEngine:
    def test_seeded_choice_is_reproducible(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        first = RandomEngine(random.Random(7)).search(pos).best_move
        second = RandomEngine(random.Random(7)).search(pos).best_move
        assert first == second
        assert first in pos.legal_moves()

    def test_no_moves(self) -> None:
        assert RandomEngine().search(position_from_fen(STALEMATE)).best_move is None


class TestRegistry:
    def test_create(self) -> None:
        assert isinstance(create_engine("greedy"), GreedyEngine)
        assert isinstance(create_engine("random", seed=1), RandomEngine)

    def test_unknown(self) -> None:
        with pytest.raises(ValueError):
            create_engine("stockfish")

    def test_engines_are_usable_interchangeably(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        for engine in (create_engine("greedy"), create_engine("random", seed=3)):
            move = engine.search(pos).best_move
            assert move is not None
            assert move in pos.legal_moves()
