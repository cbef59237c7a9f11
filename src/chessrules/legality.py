"""
Legality filter.

A candidate move is legal when, played on a throwaway copy of the board,
it does not leave the mover's own king attacked. The live board is never
touched.
"""

from chessrules.attacks import is_king_attacked
from chessrules.board import Color, PieceType, Position
from chessrules.movegen import Move, piece_destinations
from chessrules.special_moves import play_on
from chessrules.state import GameState


def leaves_king_safe(state: GameState, move: Move) -> bool:
    """Simulate move on a scratch board and test the mover's king."""
    mover = state.board.get(move.from_pos)
    if mover is None:
        return False
    scratch = state.board.copy()
    play_on(scratch, move, state.en_passant_target)
    if mover.type is PieceType.KING:
        king_position = move.to_pos
    else:
        king_position = state.king_positions.get(mover.color)
    return not is_king_attacked(scratch, king_position, mover.color)


def legal_destinations(state: GameState, origin: Position) -> list[Position]:
    """
    Destinations for the piece on origin that keep its king safe.

    Turn order is not checked here; see chessrules.rules for that.
    """
    piece = state.board.get(origin)
    if piece is None:
        return []
    candidates = piece_destinations(state.board, origin, piece, state.en_passant_target)
    return [
        target for target in candidates
        if leaves_king_safe(state, Move(origin, target))
    ]


def has_any_legal_move(state: GameState, color: Color) -> bool:
    for origin, _ in state.board.pieces(color):
        if legal_destinations(state, origin):
            return True
    return False
