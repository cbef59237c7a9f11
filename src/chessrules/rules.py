"""
Game state machine.

Pure functions over GameState: move validation, legal move enumeration,
move application and status evaluation. apply_move() never mutates its
input; it returns Applied with the successor state or Rejected with the
reason the move was refused.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from chessrules.attacks import is_king_attacked
from chessrules.board import PROMOTION_TYPES, Color, PieceType, Position
from chessrules.config import DEFAULT_CONFIG, RulesConfig
from chessrules.legality import has_any_legal_move, leaves_king_safe, legal_destinations
from chessrules.movegen import Move, piece_destinations
from chessrules.notation import move_notation
from chessrules.special_moves import execute
from chessrules.state import GameState, GameStatus

log = logging.getLogger("chessrules.rules")


class RejectReason(Enum):
    OUT_OF_BOUNDS = "position is off the board"
    SAME_SQUARE = "source and destination are the same square"
    NO_PIECE = "no piece at source position"
    WRONG_TURN = "piece does not belong to the side to move"
    OWN_PIECE = "destination holds a piece of the same color"
    ILLEGAL_MOVEMENT = "piece cannot move that way"
    KING_EXPOSED = "move would leave own king in check"
    GAME_OVER = "game is already over"
    INVALID_PROMOTION = "pawns promote to queen, rook, bishop or knight"


@dataclass(frozen=True)
class Applied:
    state: GameState
    status: GameStatus
    notation: str

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    reason: RejectReason

    def __bool__(self) -> bool:
        return False


MoveResult = Applied | Rejected


def validate_move(state: GameState, from_pos: Position, to_pos: Position) -> RejectReason | None:
    """
    Decide whether moving from from_pos to to_pos is legal for the side to move.

    Returns:
        None if the move is legal, otherwise the first reason it is not.
    """
    if state.status.is_terminal:
        return RejectReason.GAME_OVER
    if not from_pos.in_bounds() or not to_pos.in_bounds():
        return RejectReason.OUT_OF_BOUNDS
    if from_pos == to_pos:
        return RejectReason.SAME_SQUARE
    piece = state.board.get(from_pos)
    if piece is None:
        return RejectReason.NO_PIECE
    if piece.color is not state.current_player:
        return RejectReason.WRONG_TURN
    target = state.board.get(to_pos)
    if target is not None and target.color is piece.color:
        return RejectReason.OWN_PIECE
    if to_pos not in piece_destinations(state.board, from_pos, piece, state.en_passant_target):
        return RejectReason.ILLEGAL_MOVEMENT
    if not leaves_king_safe(state, Move(from_pos, to_pos)):
        return RejectReason.KING_EXPOSED
    return None


def is_valid_move(state: GameState, from_pos: Position, to_pos: Position) -> bool:
    return validate_move(state, from_pos, to_pos) is None


def legal_moves(state: GameState, origin: Position) -> list[Position]:
    """
    Legal destinations for the piece on origin, in row-major order.

    Empty if the square is empty, off the board, holds a piece of the side
    not on move, or the game is over.
    """
    if state.status.is_terminal or not origin.in_bounds():
        return []
    piece = state.board.get(origin)
    if piece is None or piece.color is not state.current_player:
        return []
    return sorted(legal_destinations(state, origin), key=lambda pos: (pos.row, pos.col))


def all_legal_moves(state: GameState, color: Color | None = None) -> list[Move]:
    """
    Every legal move for color (default: side to move).

    Ordered by source square, then destination, both row-major. A color
    that is not on move has no legal moves.
    """
    color = color or state.current_player
    if color is not state.current_player:
        return []
    moves = []
    for origin, _ in state.board.pieces(color):
        moves.extend(Move(origin, target) for target in legal_moves(state, origin))
    return moves


def evaluate_status(state: GameState, config: RulesConfig = DEFAULT_CONFIG) -> tuple[GameStatus, Color | None]:
    """
    Classify the position for the side to move.

    Returns:
        (status, winner). Winner is set only on checkmate.
    """
    color = state.current_player
    in_check = is_king_attacked(state.board, state.king_positions.get(color), color)
    if not has_any_legal_move(state, color):
        if in_check:
            return GameStatus.CHECKMATE, color.opponent
        return GameStatus.STALEMATE, None
    if state.fifty_move_rule >= config.fifty_move_limit:
        return GameStatus.DRAW, None
    if in_check:
        return GameStatus.CHECK, None
    return GameStatus.PLAYING, None


def apply_move(
    state: GameState,
    from_pos: Position,
    to_pos: Position,
    promotion: PieceType | None = None,
    config: RulesConfig = DEFAULT_CONFIG,
) -> MoveResult:
    """
    Play a move and return the resulting state.

    Args:
        state: Position to move from. Not modified.
        from_pos: Square of the piece to move.
        to_pos: Destination square.
        promotion: Piece a pawn reaching the last rank becomes. Defaults to
            config.default_promotion.
        config: Rule configuration.

    Returns:
        Applied(state, status, notation) on success, Rejected(reason) otherwise.
    """
    reason = validate_move(state, from_pos, to_pos)
    if reason is None and promotion is not None and promotion not in PROMOTION_TYPES:
        reason = RejectReason.INVALID_PROMOTION
    if reason is not None:
        log.debug("Rejected %s-%s: %s", from_pos, to_pos, reason.value)
        return Rejected(reason)

    move = Move(from_pos, to_pos)
    successor = state.copy()
    mover, captured = execute(successor, move, promotion or config.default_promotion)

    notation = move_notation(mover, move, captured is not None)
    successor.move_history.append(notation)
    successor.move_count += 1
    successor.current_player = state.current_player.opponent
    successor.status, successor.winner = evaluate_status(successor, config)

    log.debug("Applied %s, %s to move", notation, successor.current_player.value)
    if successor.status.is_terminal:
        log.info(
            "Game over after %d moves: %s%s",
            successor.move_count,
            successor.status.value,
            f", {successor.winner.value} wins" if successor.winner else "",
        )
    return Applied(successor, successor.status, notation)
