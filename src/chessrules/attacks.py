"""Attack and check detection."""

from chessrules.board import Board, Color, Position
from chessrules.movegen import attack_squares


def is_attacked(board: Board, position: Position, by_color: Color) -> bool:
    """
    Check whether any piece of by_color attacks position.

    Works on any board snapshot, live or scratch. Turn order is ignored.
    """
    for origin, piece in board.pieces(by_color):
        if position in attack_squares(board, origin, piece):
            return True
    return False


def attacked_squares(board: Board, by_color: Color) -> set[Position]:
    """Union of every square attacked by by_color."""
    squares: set[Position] = set()
    for origin, piece in board.pieces(by_color):
        squares.update(attack_squares(board, origin, piece))
    return squares


def is_king_attacked(board: Board, king_position: Position | None, color: Color) -> bool:
    """True if the king of color, standing on king_position, is attacked."""
    if king_position is None:
        return False
    return is_attacked(board, king_position, color.opponent)
