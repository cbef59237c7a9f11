"""Move notation and result messages."""

from chessrules.board import Piece, PieceType
from chessrules.movegen import Move
from chessrules.state import GameState, GameStatus


def move_notation(piece: Piece, move: Move, is_capture: bool) -> str:
    """
    Long-form notation such as 'Ng1f3', 'e2e4' or 'Bc4xf7'.

    Pawns omit the piece letter. 'x' separates the squares on a capture.
    Knights are written N, so histories from clients that write K for both
    king and knight will not match.
    """
    prefix = "" if piece.type is PieceType.PAWN else piece.type.letter
    separator = "x" if is_capture else ""
    return f"{prefix}{move.from_pos.algebraic()}{separator}{move.to_pos.algebraic()}"


def result_message(state: GameState) -> str:
    if state.status is GameStatus.CHECKMATE and state.winner is not None:
        return f"{state.winner.value.capitalize()} wins by checkmate!"
    if state.status is GameStatus.STALEMATE:
        return "Game ended in stalemate!"
    if state.status is GameStatus.DRAW:
        return "Game ended in a draw!"
    return "Game in progress"
