"""
FEN import and export.

python-chess does the FEN parsing and serialisation; this module only maps
between its square numbering (a1 = 0, h8 = 63) and our (row, col) grid,
where row 0 is rank 8.
"""

import chess

from chessrules.board import BACK_RANK_ORDER, Board, Color, Piece, PieceType, Position
from chessrules.config import DEFAULT_CONFIG, RulesConfig
from chessrules.movegen import pawn_start_row
from chessrules.rules import evaluate_status
from chessrules.special_moves import ROOK_HOMES
from chessrules.state import CastlingRights, GameState


PIECE_TYPES = {
    chess.PAWN: PieceType.PAWN,
    chess.KNIGHT: PieceType.KNIGHT,
    chess.BISHOP: PieceType.BISHOP,
    chess.ROOK: PieceType.ROOK,
    chess.QUEEN: PieceType.QUEEN,
    chess.KING: PieceType.KING,
}
CHESS_PIECE_TYPES = {ours: theirs for theirs, ours in PIECE_TYPES.items()}


def to_square(pos: Position) -> chess.Square:
    """Convert a position to a python-chess square index."""
    return chess.square(pos.col, 7 - pos.row)


def from_square(square: chess.Square) -> Position:
    """Convert a python-chess square index to a position."""
    return Position(7 - chess.square_rank(square), chess.square_file(square))


def _color(chess_color: chess.Color) -> Color:
    return Color.WHITE if chess_color == chess.WHITE else Color.BLACK


def _infer_has_moved(piece_type: PieceType, color: Color, pos: Position, rights: CastlingRights) -> bool:
    """Best guess at whether a piece loaded from FEN has moved."""
    if piece_type is PieceType.PAWN:
        return pos.row != pawn_start_row(color)
    if piece_type is PieceType.KING:
        return not (rights.king_side(color) or rights.queen_side(color))
    if piece_type is PieceType.ROOK:
        for king_side in (True, False):
            if pos == ROOK_HOMES[(color, king_side)]:
                allowed = rights.king_side(color) if king_side else rights.queen_side(color)
                return not allowed
        return True
    home_row = 7 if color is Color.WHITE else 0
    return not (pos.row == home_row and BACK_RANK_ORDER[pos.col] is piece_type)


def from_fen(fen: str, config: RulesConfig = DEFAULT_CONFIG) -> GameState:
    """
    Build a GameState from a FEN string.

    The move history starts empty. move_count is derived from the fullmove
    number and side to move, and the status is evaluated for the loaded
    position.

    Args:
        fen: Full FEN string.
        config: Rule configuration used to evaluate the status.

    Returns:
        The loaded GameState.

    Raises:
        ValueError: If the FEN is malformed, does not have exactly one
            king per side, or leaves the side not to move in check.
    """
    parsed = chess.Board(fen)
    for chess_color in chess.COLORS:
        if len(parsed.pieces(chess.KING, chess_color)) != 1:
            raise ValueError(f"FEN must have exactly one king per side: {fen!r}")
    if parsed.was_into_check():
        raise ValueError(f"Side not to move is in check: {fen!r}")

    rights = CastlingRights(
        white_king_side=parsed.has_kingside_castling_rights(chess.WHITE),
        white_queen_side=parsed.has_queenside_castling_rights(chess.WHITE),
        black_king_side=parsed.has_kingside_castling_rights(chess.BLACK),
        black_queen_side=parsed.has_queenside_castling_rights(chess.BLACK),
    )

    board = Board()
    for square, chess_piece in parsed.piece_map().items():
        pos = from_square(square)
        color = _color(chess_piece.color)
        piece_type = PIECE_TYPES[chess_piece.piece_type]
        board.set(pos, Piece(piece_type, color, _infer_has_moved(piece_type, color, pos, rights)))

    current_player = _color(parsed.turn)
    state = GameState(
        board=board,
        current_player=current_player,
        en_passant_target=from_square(parsed.ep_square) if parsed.ep_square is not None else None,
        castling_rights=rights,
        fifty_move_rule=parsed.halfmove_clock,
        move_count=(parsed.fullmove_number - 1) * 2 + (1 if current_player is Color.BLACK else 0),
    )
    state.status, state.winner = evaluate_status(state, config)
    return state


def to_fen(state: GameState) -> str:
    """
    Serialise a GameState as FEN.

    The en passant field is written whenever a target square is set, even
    if no pawn can capture onto it.
    """
    board = chess.Board(None)
    for pos, piece in state.board.pieces():
        board.set_piece_at(
            to_square(pos),
            chess.Piece(CHESS_PIECE_TYPES[piece.type], piece.color is Color.WHITE),
        )
    board.turn = state.current_player is Color.WHITE
    board.set_castling_fen(state.castling_rights.fen())
    board.ep_square = to_square(state.en_passant_target) if state.en_passant_target else None
    board.halfmove_clock = state.fifty_move_rule
    board.fullmove_number = state.fullmove_number
    return board.fen(en_passant="fen")
