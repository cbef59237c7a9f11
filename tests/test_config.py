"""
Tests for rule configuration.
"""

import pytest

from chessrules.board import PieceType
from chessrules.config import RulesConfig, load_config


class TestRulesConfig:
    """Tests for RulesConfig validation."""

    def test_valid_defaults(self) -> None:
        config = RulesConfig()
        assert config.fifty_move_limit == 50
        assert config.default_promotion is PieceType.QUEEN

    @pytest.mark.parametrize('limit', [
        pytest.param(0, id="zero"),
        pytest.param(-5, id="negative"),
    ])
    def test_error_non_positive_limit(self, limit: int) -> None:
        with pytest.raises(ValueError):
            RulesConfig(fifty_move_limit=limit)

    @pytest.mark.parametrize('piece_type', [
        pytest.param(PieceType.KING, id="king"),
        pytest.param(PieceType.PAWN, id="pawn"),
    ])
    def test_error_invalid_promotion(self, piece_type: PieceType) -> None:
        with pytest.raises(ValueError, match="Cannot promote"):
            RulesConfig(default_promotion=piece_type)


class TestLoadConfig:
    """Tests for environment overrides."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("CHESSRULES_FIFTY_MOVE_LIMIT", raising=False)
        monkeypatch.delenv("CHESSRULES_DEFAULT_PROMOTION", raising=False)

    def test_valid_no_overrides(self) -> None:
        assert load_config() == RulesConfig()

    def test_valid_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CHESSRULES_FIFTY_MOVE_LIMIT", "75")
        monkeypatch.setenv("CHESSRULES_DEFAULT_PROMOTION", "rook")
        config = load_config()
        assert config.fifty_move_limit == 75
        assert config.default_promotion is PieceType.ROOK

    @pytest.mark.parametrize('value,expected', [
        pytest.param("n", PieceType.KNIGHT, id="letter"),
        pytest.param("B", PieceType.BISHOP, id="upper_letter"),
        pytest.param(" queen ", PieceType.QUEEN, id="padded_name"),
    ])
    def test_valid_promotion_spellings(
        self, monkeypatch: pytest.MonkeyPatch, value: str, expected: PieceType
    ) -> None:
        monkeypatch.setenv("CHESSRULES_DEFAULT_PROMOTION", value)
        assert load_config().default_promotion is expected

    def test_edge_empty_value_uses_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CHESSRULES_FIFTY_MOVE_LIMIT", "")
        assert load_config().fifty_move_limit == 50

    @pytest.mark.parametrize('name,value', [
        pytest.param("CHESSRULES_FIFTY_MOVE_LIMIT", "many", id="limit_not_int"),
        pytest.param("CHESSRULES_FIFTY_MOVE_LIMIT", "0", id="limit_zero"),
        pytest.param("CHESSRULES_DEFAULT_PROMOTION", "king", id="promote_king"),
        pytest.param("CHESSRULES_DEFAULT_PROMOTION", "x", id="unknown_piece"),
    ])
    def test_error_invalid_override(self, monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
        monkeypatch.setenv(name, value)
        with pytest.raises(ValueError):
            load_config()
