"""
Array encodings of positions and moves for bot and learning consumers.

Moves are encoded as from_square * 64 + to_square with squares numbered
row * 8 + col (a8 = 0, h1 = 63). Promotion choice is not part of the
index; it is supplied when the move is applied.
"""

import numpy as np

from chessrules.attacks import attacked_squares
from chessrules.board import BOARD_SIZE, Color, PieceType, Position
from chessrules.movegen import Move
from chessrules.rules import all_legal_moves, is_valid_move
from chessrules.state import GameState


POLICY_SIZE = 4096  # 64 * 64 from-to pairs
NUM_PLANES = 14

PIECE_PLANES = {
    PieceType.PAWN: 0,
    PieceType.KNIGHT: 1,
    PieceType.BISHOP: 2,
    PieceType.ROOK: 3,
    PieceType.QUEEN: 4,
    PieceType.KING: 5,
}
OPPONENT_OFFSET = 6
EN_PASSANT_PLANE = 12
ATTACKED_PLANE = 13


def square_index(pos: Position) -> int:
    return pos.row * BOARD_SIZE + pos.col


def index_square(index: int) -> Position:
    return Position(index // BOARD_SIZE, index % BOARD_SIZE)


def move_index(state: GameState, move: Move) -> int:
    """
    Convert a move to its policy index.

    Raises:
        ValueError: If the move is not legal in state.
    """
    if not is_valid_move(state, move.from_pos, move.to_pos):
        raise ValueError(f"Illegal move: {move}")
    return square_index(move.from_pos) * 64 + square_index(move.to_pos)


def move_from_index(state: GameState, index: int) -> Move:
    """
    Convert a policy index back to a move.

    Raises:
        ValueError: If index is out of range or the move is not legal.
    """
    if index < 0 or index >= POLICY_SIZE:
        raise ValueError(f"Index {index} out of range [0, {POLICY_SIZE})")
    move = Move(index_square(index // 64), index_square(index % 64))
    if not is_valid_move(state, move.from_pos, move.to_pos):
        raise ValueError(f"No legal move found for index {index}")
    return move


def legal_moves_mask(state: GameState) -> np.ndarray:
    """
    Boolean mask over the policy indices.

    Returns:
        Array of shape (4096,) where True marks a legal move.
    """
    mask = np.zeros(POLICY_SIZE, dtype=bool)
    for move in all_legal_moves(state):
        mask[square_index(move.from_pos) * 64 + square_index(move.to_pos)] = True
    return mask


def canonical_board(state: GameState) -> np.ndarray:
    """
    Board planes from the perspective of the side to move.

    When black is to move the board is rotated 180 degrees so the side to
    move always sits at the bottom (high row indices).

    Returns:
        Array of shape (8, 8, 14) with dtype float32.
        - Planes 0-5: Side to move's pieces (P, N, B, R, Q, K)
        - Planes 6-11: Opponent's pieces (P, N, B, R, Q, K)
        - Plane 12: En passant target
        - Plane 13: Squares attacked by the opponent
    """
    planes = np.zeros((BOARD_SIZE, BOARD_SIZE, NUM_PLANES), dtype=np.float32)
    me = state.current_player
    flip = me is Color.BLACK

    def coords(pos: Position) -> tuple[int, int]:
        if flip:
            return BOARD_SIZE - 1 - pos.row, BOARD_SIZE - 1 - pos.col
        return pos.row, pos.col

    for pos, piece in state.board.pieces():
        plane = PIECE_PLANES[piece.type] + (0 if piece.color is me else OPPONENT_OFFSET)
        row, col = coords(pos)
        planes[row, col, plane] = 1.0

    if state.en_passant_target is not None:
        row, col = coords(state.en_passant_target)
        planes[row, col, EN_PASSANT_PLANE] = 1.0

    for pos in attacked_squares(state.board, me.opponent):
        row, col = coords(pos)
        planes[row, col, ATTACKED_PLANE] = 1.0

    return planes
