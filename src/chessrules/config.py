"""
Rule configuration.

Defaults match standard play as implemented here: a draw after 50
half-moves without a capture or pawn move, and promotion to a queen when
no piece is requested. Environment variables override the defaults when
load_config() is used:

- CHESSRULES_FIFTY_MOVE_LIMIT: positive integer
- CHESSRULES_DEFAULT_PROMOTION: queen, rook, bishop or knight
"""

import os
from dataclasses import dataclass
from typing import Any, Callable

from chessrules.board import PROMOTION_TYPES, PieceType


ENV_PREFIX = "CHESSRULES_"


def _positive_int(value: Any) -> int:
    number = int(value)
    if number <= 0:
        raise ValueError(f"Expected a positive integer, got {value!r}")
    return number


def _promotion_type(value: Any) -> PieceType:
    if isinstance(value, PieceType):
        piece_type = value
    else:
        text = str(value).strip().lower()
        by_letter = {t.letter.lower(): t for t in PROMOTION_TYPES}
        piece_type = by_letter.get(text) or PieceType(text)
    if piece_type not in PROMOTION_TYPES:
        raise ValueError(f"Cannot promote to {piece_type.value}")
    return piece_type


@dataclass(frozen=True)
class RulesConfig:
    fifty_move_limit: int = 50
    default_promotion: PieceType = PieceType.QUEEN

    def __post_init__(self) -> None:
        _positive_int(self.fifty_move_limit)
        _promotion_type(self.default_promotion)


def _get(name: str, default: Any, cast: Callable[[Any], Any] | None = None) -> Any:
    env = os.environ.get(ENV_PREFIX + name)
    if env is None or env == "":
        return default
    return cast(env) if cast else env


def load_config() -> RulesConfig:
    """
    Build a RulesConfig from the environment.

    Raises:
        ValueError: If an override is present but invalid.
    """
    return RulesConfig(
        fifty_move_limit=_get("FIFTY_MOVE_LIMIT", 50, _positive_int),
        default_promotion=_get("DEFAULT_PROMOTION", PieceType.QUEEN, _promotion_type),
    )


DEFAULT_CONFIG = RulesConfig()
