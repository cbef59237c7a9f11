"""
Special-move handling applied after a move has passed the legality filter.

Covers en passant captures, the en passant target square, promotion,
castling-rights bookkeeping, the fifty-move counter and the king cache.
"""

from chessrules.board import Board, Color, Piece, PieceType, Position
from chessrules.movegen import Move, promotion_row
from chessrules.state import GameState


# Original rook squares keyed by (color, king_side)
ROOK_HOMES = {
    (Color.WHITE, True): Position(7, 7),
    (Color.WHITE, False): Position(7, 0),
    (Color.BLACK, True): Position(0, 7),
    (Color.BLACK, False): Position(0, 0),
}


def en_passant_victim(move: Move, mover: Piece, en_passant_target: Position | None) -> Position | None:
    """Square of the pawn captured en passant by this move, if any."""
    if mover.type is not PieceType.PAWN or en_passant_target is None:
        return None
    if move.to_pos != en_passant_target or move.from_pos.col == move.to_pos.col:
        return None
    return move.to_pos.offset(-mover.color.forward, 0)


def play_on(board: Board, move: Move, en_passant_target: Position | None = None) -> Piece | None:
    """
    Relocate the moving piece on board in place.

    Removes a pawn captured en passant. Promotion is not handled here.

    Returns:
        The captured piece, or None.

    Raises:
        ValueError: If there is no piece on move.from_pos.
    """
    mover = board.get(move.from_pos)
    if mover is None:
        raise ValueError(f"No piece at {move.from_pos}")
    captured = board.get(move.to_pos)
    victim = en_passant_victim(move, mover, en_passant_target)
    if victim is not None:
        captured = board.get(victim)
        board.set(victim, None)
    board.set(move.to_pos, mover.moved())
    board.set(move.from_pos, None)
    return captured


def next_en_passant_target(move: Move, mover: Piece) -> Position | None:
    """Square passed over by a two-square pawn advance, else None."""
    if mover.type is PieceType.PAWN and abs(move.to_pos.row - move.from_pos.row) == 2:
        return Position((move.from_pos.row + move.to_pos.row) // 2, move.to_pos.col)
    return None


def promote(board: Board, move: Move, mover: Piece, promotion: PieceType) -> bool:
    """
    Replace a pawn that reached the last rank.

    Returns:
        True if a promotion happened.
    """
    if mover.type is not PieceType.PAWN or move.to_pos.row != promotion_row(mover.color):
        return False
    board.set(move.to_pos, Piece(promotion, mover.color, has_moved=True))
    return True


def update_castling_rights(state: GameState, move: Move, mover: Piece) -> None:
    """Clear rights lost by a king move, a rook move, or a rook being captured at home."""
    rights = state.castling_rights
    if mover.type is PieceType.KING:
        rights = rights.without(mover.color, king_side=True, queen_side=True)
    for (color, king_side), home in ROOK_HOMES.items():
        if move.from_pos == home or move.to_pos == home:
            rights = rights.without(color, king_side=king_side, queen_side=not king_side)
    state.castling_rights = rights


def update_fifty_move_counter(state: GameState, mover: Piece, captured: Piece | None) -> None:
    if mover.type is PieceType.PAWN or captured is not None:
        state.fifty_move_rule = 0
    else:
        state.fifty_move_rule += 1


def update_king_cache(state: GameState, move: Move, mover: Piece) -> None:
    if mover.type is PieceType.KING:
        state.king_positions[mover.color] = move.to_pos


def execute(state: GameState, move: Move, promotion: PieceType = PieceType.QUEEN) -> tuple[Piece, Piece | None]:
    """
    Play move on state in place, including every side effect above.

    Callers pass a state they own (a copy), never a shared one.

    Returns:
        (mover, captured) where mover is the piece as it stood before moving.
    """
    mover = state.board.get(move.from_pos)
    if mover is None:
        raise ValueError(f"No piece at {move.from_pos}")
    captured = play_on(state.board, move, state.en_passant_target)
    promote(state.board, move, mover, promotion)
    state.en_passant_target = next_en_passant_target(move, mover)
    update_castling_rights(state, move, mover)
    update_fifty_move_counter(state, mover, captured)
    update_king_cache(state, move, mover)
    return mover, captured
