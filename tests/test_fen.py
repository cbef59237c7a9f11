"""
Tests for FEN import and export.
"""

import chess
import pytest

from chessrules.board import Color, PieceType, Position
from chessrules.fen import from_fen, from_square, to_fen, to_square
from chessrules.rules import apply_move
from chessrules.state import CastlingRights, GameStatus, initial_state


STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


def sq(name: str) -> Position:
    return Position.from_algebraic(name)


class TestSquareMapping:
    """Tests for row/col <-> python-chess square conversion."""

    @pytest.mark.parametrize('name,square', [
        pytest.param("a1", chess.A1, id="a1"),
        pytest.param("h8", chess.H8, id="h8"),
        pytest.param("e4", chess.E4, id="e4"),
        pytest.param("c6", chess.C6, id="c6"),
    ])
    def test_valid_mapping_both_ways(self, name: str, square: int) -> None:
        assert to_square(sq(name)) == square
        assert from_square(square) == sq(name)


class TestFromFen:
    """Tests for from_fen()."""

    def test_valid_starting_position_matches_initial_state(self) -> None:
        loaded = from_fen(STARTING_FEN)
        expected = initial_state()
        assert loaded.board == expected.board
        assert loaded.current_player is Color.WHITE
        assert loaded.castling_rights == CastlingRights()
        assert loaded.king_positions == expected.king_positions
        assert loaded.move_count == 0
        assert loaded.status is GameStatus.PLAYING

    def test_valid_counters_and_side_to_move(self) -> None:
        state = from_fen("rnbqkbnr/pppp1ppp/8/4p3/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 7 3")
        assert state.current_player is Color.BLACK
        assert state.move_count == 5
        assert state.fifty_move_rule == 7
        assert state.en_passant_target == sq("e3")
        assert state.move_history == []

    def test_valid_castling_rights_loaded(self) -> None:
        state = from_fen("r3k2r/8/8/8/8/8/8/R3K2R w Kq - 0 1")
        assert state.castling_rights == CastlingRights(
            white_king_side=True,
            white_queen_side=False,
            black_king_side=False,
            black_queen_side=True,
        )

    def test_valid_has_moved_inferred(self) -> None:
        state = from_fen("r3k2r/8/8/8/4P3/8/8/R3K2R w Kq - 0 1")
        assert state.board.get(sq("e4")).has_moved
        assert not state.board.get(sq("h1")).has_moved
        assert state.board.get(sq("a1")).has_moved
        assert not state.board.get(sq("e1")).has_moved
        assert not state.board.get(sq("a8")).has_moved
        assert state.board.get(sq("h8")).has_moved

    def test_valid_status_evaluated_on_load(self) -> None:
        state = from_fen("rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3")
        assert state.status is GameStatus.CHECKMATE
        assert state.winner is Color.BLACK

    @pytest.mark.parametrize('fen', [
        pytest.param("not a fen", id="garbage"),
        pytest.param("8/8/8/8/8/8/8/K7 w - - 0 1", id="missing_black_king"),
        pytest.param("kk6/8/8/8/8/8/8/K7 w - - 0 1", id="two_black_kings"),
        pytest.param("4k3/8/8/8/8/8/8/K3R3 w - - 0 1", id="side_not_to_move_in_check"),
    ])
    def test_error_invalid_fen(self, fen: str) -> None:
        with pytest.raises(ValueError):
            from_fen(fen)

    def test_error_king_capturable_on_load(self) -> None:
        """A position where the mover could take the enemy king is refused."""
        with pytest.raises(ValueError, match="not to move is in check"):
            from_fen("4k3/8/8/8/8/8/8/K3R3 w - - 0 1")

    def test_valid_side_to_move_in_check_accepted(self) -> None:
        state = from_fen("4k3/8/8/8/8/8/8/K3r3 w - - 0 1")
        assert state.status is GameStatus.CHECK


class TestToFen:
    """Tests for to_fen()."""

    def test_valid_initial_state(self) -> None:
        assert to_fen(initial_state()) == STARTING_FEN

    def test_valid_after_double_push_includes_target(self) -> None:
        state = apply_move(initial_state(), sq("e2"), sq("e4")).state
        assert to_fen(state) == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"

    def test_valid_fullmove_number_advances_after_black(self) -> None:
        state = apply_move(initial_state(), sq("g1"), sq("f3")).state
        state = apply_move(state, sq("g8"), sq("f6")).state
        assert to_fen(state) == "rnbqkb1r/pppppppp/5n2/8/8/5N2/PPPPPPPP/RNBQKB1R w KQkq - 2 2"

    def test_valid_lost_castling_rights_written(self) -> None:
        state = from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        state = apply_move(state, sq("e1"), sq("e2")).state
        assert to_fen(state).split(" ")[2] == "kq"

    @pytest.mark.parametrize('fen', [
        pytest.param(STARTING_FEN, id="start"),
        pytest.param("r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4", id="italian"),
        pytest.param("rnbqkbnr/pp2pppp/8/2ppP3/8/8/PPPP1PPP/RNBQKBNR w KQkq d6 0 3", id="en_passant"),
        pytest.param("8/8/4k3/8/8/4K3/4P3/8 w - - 0 1", id="king_pawn_endgame"),
        pytest.param("8/8/8/8/2q5/8/8/K6k b - - 12 57", id="black_to_move"),
    ])
    def test_valid_roundtrip(self, fen: str) -> None:
        assert to_fen(from_fen(fen)) == fen

    def test_edge_fen_uses_ascii_only(self) -> None:
        assert all(ord(c) < 128 for c in to_fen(initial_state()))

    def test_valid_promoted_piece_exported(self) -> None:
        state = from_fen("8/P7/8/8/8/8/8/K6k w - - 0 1")
        state = apply_move(state, sq("a7"), sq("a8"), promotion=PieceType.ROOK).state
        assert to_fen(state).startswith("R7/")
