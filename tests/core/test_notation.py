"""Tests for FEN, algebraic parsing and SAN formatting."""

import pytest

from casey.core.enums import CastlingRights, Color, PieceType
from casey.core.errors import (
    InvalidAlgebraicError,
    InvalidFenError,
    InvalidSquareError,
    MoveError,
    MoveErrorKind,
)
from casey.core.move import Move
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
from casey.core.position import Position
from casey.core.types import (
    A1, A2, C1, D1, D3, D6, D8, E1, E2, E3, E4, E5, E7, E8, F1, F3, G1, G8, H1, H4,
    H5,
)

EP_FEN = "rnbqkbnr/ppp1pppp/8/3pP3/8/8/PPPP1PPP/RNBQKBNR w KQkq d6 0 3"
PROMO_FEN = "8/4P3/8/8/8/8/8/k3K3 w - - 0 1"
CASTLE_FEN = "r3k2r/pppppppp/8/8/8/8/PPPPPPPP/R3K2R w KQkq - 0 1"
TWO_ROOKS_FILE = "1k6/8/8/8/8/8/4K3/R6R w - - 0 1"
TWO_ROOKS_RANK = "1k6/8/8/8/R7/8/4K3/R7 w - - 0 1"


# ── FEN ──────────────────────────────────────────────────────────────────────


class TestFenParsing:
    def test_starting_position(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert pos.side_to_move == Color.WHITE
        assert pos.castling == CastlingRights.ALL
        assert pos.en_passant is None
        assert pos.halfmove_clock == 0
        assert pos.fullmove_number == 1
        assert pos == Position.starting()

    def test_round_trip(self) -> None:
        for fen in (STARTING_FEN, EP_FEN, CASTLE_FEN, PROMO_FEN):
            assert position_to_fen(position_from_fen(fen)) == fen

    def test_clocks_optional(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4K3 b - -")
        assert pos.side_to_move == Color.BLACK
        assert pos.halfmove_clock == 0
        assert pos.fullmove_number == 1
        assert position_to_fen(pos) == "4k3/8/8/8/8/8/8/4K3 b - - 0 1"

    def test_halfmove_only(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4K3 w - - 12")
        assert pos.halfmove_clock == 12
        assert pos.fullmove_number == 1

    def test_en_passant_square(self) -> None:
        assert position_from_fen(EP_FEN).en_passant == D6

    def test_king_squares_cached(self) -> None:
        pos = position_from_fen(CASTLE_FEN)
        assert pos.king_square(Color.WHITE) == E1
        assert pos.king_square(Color.BLACK) == E8

    @pytest.mark.parametrize(
        "fen",
        [
            "",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP w",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP w KQkq - 0 1",
            "rnbqkbnr/pppppppp/9/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/pppppppp/0/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/ppppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/ppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnx/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR x KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KKkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQxq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e4 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e3 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq z9 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - -1 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 0",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - x 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1 extra",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBN\u00b2 w KQkq - 0 1",
            "rnbqkbnr/pppppppp/\u0668/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - \u0661 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 \u00b9",
        ],
    )
    def test_invalid(self, fen: str) -> None:
        with pytest.raises(InvalidFenError):
            position_from_fen(fen)

    def test_invalid_fen_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            position_from_fen("not a fen")


# ── Squares ──────────────────────────────────────────────────────────────────


class TestSquareCoords:
    @pytest.mark.parametrize(
        ("text", "coords"), [("a1", (0, 0)), ("e4", (4, 3)), ("h8", (7, 7))]
    )
    def test_valid(self, text: str, coords: tuple[int, int]) -> None:
        assert square_to_coords(text) == coords
        assert coords_to_square(*coords) == text

    @pytest.mark.parametrize("text", ["", "e", "e44", "i1", "a9", "a0", "E4"])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(InvalidSquareError):
            square_to_coords(text)


# ── Algebraic parsing ────────────────────────────────────────────────────────


class TestLongAlgebraic:
    def test_reads_piece_type(self, start: Position) -> None:
        assert parse_long_algebraic("g1f3", start) == Move(G1, F3, PieceType.KNIGHT)

    def test_promotion(self) -> None:
        pos = position_from_fen(PROMO_FEN)
        assert parse_long_algebraic("e7e8n", pos) == Move(
            E7, E8, PieceType.PAWN, PieceType.KNIGHT
        )

    def test_empty_source(self, start: Position) -> None:
        with pytest.raises(MoveError) as info:
            parse_long_algebraic("e3e4", start)
        assert info.value.kind == MoveErrorKind.NO_PIECE_ON_SOURCE_SQUARE

    def test_malformed(self, start: Position) -> None:
        with pytest.raises(InvalidAlgebraicError):
            parse_long_algebraic("e2-e4", start)

    def test_format(self) -> None:
        move = Move(E7, E8, PieceType.PAWN, PieceType.QUEEN)
        assert move_to_long_algebraic(move) == "e7e8q"
        assert move.uci == "e7e8q"


class TestParseAlgebraic:
    def test_long_form_first(self, start: Position) -> None:
        assert parse_algebraic("e2e4", start) == Move(E2, E4, PieceType.PAWN)

    def test_pawn_pushes(self, start: Position) -> None:
        assert parse_algebraic("e4", start) == Move(E2, E4, PieceType.PAWN)
        assert parse_algebraic("e3", start) == Move(E2, E3, PieceType.PAWN)

    def test_black_pawn_push(self, start: Position) -> None:
        start.make_move(Move(E2, E4, PieceType.PAWN))
        assert parse_algebraic("e5", start) == Move(E7, E5, PieceType.PAWN)

    def test_double_push_blocked(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/4n3/4P3/4K3 w - - 0 1")
        with pytest.raises(MoveError) as info:
            parse_algebraic("e4", pos)
        assert info.value.kind == MoveErrorKind.ILLEGAL_MOVE

    def test_pawn_capture(self) -> None:
        pos = position_from_fen(EP_FEN)
        assert parse_algebraic("exd6", pos) == Move(E5, D6, PieceType.PAWN)

    def test_pawn_capture_without_pawn(self, start: Position) -> None:
        with pytest.raises(MoveError):
            parse_algebraic("exd5", start)

    @pytest.mark.parametrize(
        ("text", "promotion"),
        [
            ("e8=Q", PieceType.QUEEN),
            ("e8Q", PieceType.QUEEN),
            ("e8=N", PieceType.KNIGHT),
            ("e8", None),
        ],
    )
    def test_promotion(self, text: str, promotion: PieceType | None) -> None:
        pos = position_from_fen(PROMO_FEN)
        assert parse_algebraic(text, pos) == Move(E7, E8, PieceType.PAWN, promotion)

    def test_piece_moves(self, start: Position) -> None:
        assert parse_algebraic("Nf3", start) == Move(G1, F3, PieceType.KNIGHT)
        assert parse_algebraic("Nf3+", start) == Move(G1, F3, PieceType.KNIGHT)
        assert parse_algebraic("Qh5", start) == Move(D1, H5, PieceType.QUEEN)

    def test_single_candidate_left_to_applier(self, start: Position) -> None:
        move = parse_algebraic("Ke2", start)
        assert move == Move(E1, E2, PieceType.KING)
        with pytest.raises(MoveError) as info:
            start.make_move(move)
        assert info.value.kind == MoveErrorKind.CANNOT_CAPTURE_OWN_PIECE

    def test_unreachable(self, start: Position) -> None:
        with pytest.raises(MoveError) as info:
            parse_algebraic("Nd4", start)
        assert info.value.kind == MoveErrorKind.ILLEGAL_MOVE

    def test_narrowed_by_legality(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/R3K2R w - - 0 1")
        assert parse_algebraic("Rf1", pos) == Move(H1, F1, PieceType.ROOK)

    def test_ambiguous(self) -> None:
        pos = position_from_fen(TWO_ROOKS_FILE)
        with pytest.raises(MoveError) as info:
            parse_algebraic("Rd1", pos)
        assert info.value.kind == MoveErrorKind.AMBIGUOUS_MOVE

    def test_file_hint(self) -> None:
        pos = position_from_fen(TWO_ROOKS_FILE)
        assert parse_algebraic("Rad1", pos) == Move(A1, D1, PieceType.ROOK)
        assert parse_algebraic("Rhd1", pos) == Move(H1, D1, PieceType.ROOK)

    def test_rank_hint(self) -> None:
        pos = position_from_fen(TWO_ROOKS_RANK)
        with pytest.raises(MoveError):
            parse_algebraic("Ra2", pos)
        assert parse_algebraic("R1a2", pos) == Move(A1, A2, PieceType.ROOK)

    def test_castling(self) -> None:
        pos = position_from_fen(CASTLE_FEN)
        assert parse_algebraic("O-O", pos) == Move(E1, G1, PieceType.KING)
        assert parse_algebraic("0-0-0", pos) == Move(E1, C1, PieceType.KING)

    def test_castling_for_black(self) -> None:
        pos = position_from_fen(CASTLE_FEN.replace(" w ", " b "))
        assert parse_algebraic("O-O", pos) == Move(E8, G8, PieceType.KING)

    @pytest.mark.parametrize(
        "text", ["", "hello", "Zf3", "Nf9", "e2-e4", "Nf3=Q", "5e4", "e2xd3"]
    )
    def test_malformed(self, start: Position, text: str) -> None:
        with pytest.raises(InvalidAlgebraicError):
            parse_algebraic(text, start)

    def test_parse_does_not_mutate(self, start: Position) -> None:
        parse_algebraic("Nf3", start)
        assert start == Position.starting()


# ── SAN formatting ───────────────────────────────────────────────────────────


class TestMoveToSan:
    def test_simple(self, start: Position) -> None:
        assert move_to_san(start, Move(G1, F3, PieceType.KNIGHT)) == "Nf3"
        assert move_to_san(start, Move(E2, E4, PieceType.PAWN)) == "e4"
        assert start == Position.starting()

    def test_castling(self) -> None:
        pos = position_from_fen(CASTLE_FEN)
        assert move_to_san(pos, Move(E1, G1, PieceType.KING)) == "O-O"
        assert move_to_san(pos, Move(E1, C1, PieceType.KING)) == "O-O-O"

    def test_en_passant_capture(self) -> None:
        pos = position_from_fen(EP_FEN)
        assert move_to_san(pos, Move(E5, D6, PieceType.PAWN)) == "exd6"

    def test_promotion(self) -> None:
        pos = position_from_fen(PROMO_FEN)
        assert move_to_san(pos, Move(E7, E8, PieceType.PAWN)) == "e8=Q"
        assert (
            move_to_san(pos, Move(E7, E8, PieceType.PAWN, PieceType.KNIGHT)) == "e8=N"
        )

    def test_check(self) -> None:
        pos = position_from_fen(
            "rnbqkbnr/ppppp1pp/8/5p2/4P3/8/PPPP1PPP/RNBQKBNR w KQkq f6 0 2"
        )
        assert move_to_san(pos, Move(D1, H5, PieceType.QUEEN)) == "Qh5+"

    def test_mate(self) -> None:
        pos = position_from_fen(
            "rnbqkbnr/pppp1ppp/8/4p3/6P1/5P2/PPPPP2P/RNBQKBNR b KQkq g3 0 2"
        )
        assert move_to_san(pos, Move(D8, H4, PieceType.QUEEN)) == "Qh4#"

    def test_disambiguation(self) -> None:
        by_file = position_from_fen(TWO_ROOKS_FILE)
        assert move_to_san(by_file, Move(A1, D1, PieceType.ROOK)) == "Rad1"
        by_rank = position_from_fen(TWO_ROOKS_RANK)
        assert move_to_san(by_rank, Move(A1, A2, PieceType.ROOK)) == "R1a2"

    def test_san_parses_back(self) -> None:
        pos = position_from_fen(TWO_ROOKS_FILE)
        move = Move(H1, D1, PieceType.ROOK)
        assert parse_algebraic(move_to_san(pos, move), pos) == move

    def test_pawn_capture(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/3p4/4P3/4K3 w - - 0 1")
        assert move_to_san(pos, Move(E2, D3, PieceType.PAWN)) == "exd3"

