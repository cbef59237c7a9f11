"""
chessrules - chess rules engine.

Board representation, legal move generation, check detection and game
status classification, with a ChessGame facade for stateful callers.
"""

from chessrules.board import Board, Color, Piece, PieceType, Position
from chessrules.chess_game import ChessGame
from chessrules.config import RulesConfig, load_config
from chessrules.movegen import Move
from chessrules.rules import (
    Applied,
    MoveResult,
    Rejected,
    RejectReason,
    all_legal_moves,
    apply_move,
    evaluate_status,
    is_valid_move,
    legal_moves,
    validate_move,
)
from chessrules.state import CastlingRights, GameState, GameStatus, initial_state

__all__ = [
    "Applied",
    "Board",
    "CastlingRights",
    "ChessGame",
    "Color",
    "GameState",
    "GameStatus",
    "Move",
    "MoveResult",
    "Piece",
    "PieceType",
    "Position",
    "Rejected",
    "RejectReason",
    "RulesConfig",
    "all_legal_moves",
    "apply_move",
    "evaluate_status",
    "initial_state",
    "is_valid_move",
    "legal_moves",
    "load_config",
    "validate_move",
]
