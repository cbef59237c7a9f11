"""
Piece movement generator.

Geometric move enumeration per piece type, ignoring king safety. The same
geometry drives "attack mode", which reports the squares a piece would
capture on, and is what check detection is built on.
"""

from collections.abc import Iterator
from dataclasses import dataclass

from chessrules.board import Board, Color, Piece, PieceType, Position


KNIGHT_OFFSETS = (
    (-2, -1), (-2, 1), (-1, -2), (-1, 2),
    (1, -2), (1, 2), (2, -1), (2, 1),
)
KING_OFFSETS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1), (0, 1),
    (1, -1), (1, 0), (1, 1),
)
ROOK_DIRECTIONS = ((0, 1), (0, -1), (1, 0), (-1, 0))
BISHOP_DIRECTIONS = ((1, 1), (1, -1), (-1, 1), (-1, -1))
QUEEN_DIRECTIONS = ROOK_DIRECTIONS + BISHOP_DIRECTIONS

SLIDING_DIRECTIONS = {
    PieceType.BISHOP: BISHOP_DIRECTIONS,
    PieceType.ROOK: ROOK_DIRECTIONS,
    PieceType.QUEEN: QUEEN_DIRECTIONS,
}


@dataclass(frozen=True)
class Move:
    """A from/to pair. Promotion choice is passed separately when applying."""

    from_pos: Position
    to_pos: Position

    def uci(self) -> str:
        return self.from_pos.algebraic() + self.to_pos.algebraic()

    @staticmethod
    def from_uci(uci: str) -> "Move":
        """
        Parse a four-character long algebraic move such as 'e2e4'.

        A trailing promotion letter ('e7e8q') is accepted and ignored.

        Raises:
            ValueError: If either square is malformed.
        """
        if len(uci) not in (4, 5):
            raise ValueError(f"Invalid move string: {uci!r}")
        return Move(Position.from_algebraic(uci[:2]), Position.from_algebraic(uci[2:4]))

    def __str__(self) -> str:
        return self.uci()


def pawn_start_row(color: Color) -> int:
    return 6 if color is Color.WHITE else 1


def promotion_row(color: Color) -> int:
    return 0 if color is Color.WHITE else 7


def _slide(
    board: Board,
    origin: Position,
    color: Color,
    directions: tuple[tuple[int, int], ...],
    attack: bool,
) -> Iterator[Position]:
    for d_row, d_col in directions:
        target = origin.offset(d_row, d_col)
        while target.in_bounds():
            occupant = board.get(target)
            if occupant is None:
                yield target
            else:
                if attack or occupant.color is not color:
                    yield target
                break
            target = target.offset(d_row, d_col)


def _leap(
    board: Board,
    origin: Position,
    color: Color,
    offsets: tuple[tuple[int, int], ...],
    attack: bool,
) -> Iterator[Position]:
    for d_row, d_col in offsets:
        target = origin.offset(d_row, d_col)
        if not target.in_bounds():
            continue
        occupant = board.get(target)
        if attack or occupant is None or occupant.color is not color:
            yield target


def _pawn_moves(
    board: Board,
    origin: Position,
    color: Color,
    en_passant_target: Position | None,
) -> Iterator[Position]:
    step = color.forward
    one_forward = origin.offset(step, 0)
    if one_forward.in_bounds() and board.is_empty(one_forward):
        yield one_forward
        two_forward = origin.offset(2 * step, 0)
        if origin.row == pawn_start_row(color) and board.is_empty(two_forward):
            yield two_forward

    for d_col in (-1, 1):
        target = origin.offset(step, d_col)
        if not target.in_bounds():
            continue
        occupant = board.get(target)
        if occupant is not None and occupant.color is not color:
            yield target
        elif occupant is None and target == en_passant_target:
            victim = board.get(target.offset(-step, 0))
            if victim is not None and victim.type is PieceType.PAWN and victim.color is not color:
                yield target


def _pawn_attacks(origin: Position, color: Color) -> Iterator[Position]:
    for d_col in (-1, 1):
        target = origin.offset(color.forward, d_col)
        if target.in_bounds():
            yield target


def piece_destinations(
    board: Board,
    origin: Position,
    piece: Piece,
    en_passant_target: Position | None = None,
) -> list[Position]:
    """
    Destinations reachable by the piece's geometry, ignoring check.

    Args:
        board: Board to read.
        origin: Square the piece stands on.
        piece: The piece itself (normally board.get(origin)).
        en_passant_target: Square a pawn may capture onto en passant.

    Returns:
        Destinations in generation order. Never includes a square holding a
        friendly piece.
    """
    if piece.type is PieceType.PAWN:
        return list(_pawn_moves(board, origin, piece.color, en_passant_target))
    if piece.type is PieceType.KNIGHT:
        return list(_leap(board, origin, piece.color, KNIGHT_OFFSETS, attack=False))
    if piece.type is PieceType.KING:
        return list(_leap(board, origin, piece.color, KING_OFFSETS, attack=False))
    return list(_slide(board, origin, piece.color, SLIDING_DIRECTIONS[piece.type], attack=False))


def attack_squares(board: Board, origin: Position, piece: Piece) -> list[Position]:
    """
    Squares the piece attacks (capture-only semantics).

    Pawns attack both forward diagonals whether occupied or not. Other
    pieces reach the first occupied square on each line regardless of
    its color, so defended pieces count as attacked.
    """
    if piece.type is PieceType.PAWN:
        return list(_pawn_attacks(origin, piece.color))
    if piece.type is PieceType.KNIGHT:
        return list(_leap(board, origin, piece.color, KNIGHT_OFFSETS, attack=True))
    if piece.type is PieceType.KING:
        return list(_leap(board, origin, piece.color, KING_OFFSETS, attack=True))
    return list(_slide(board, origin, piece.color, SLIDING_DIRECTIONS[piece.type], attack=True))


def pseudo_legal_moves(
    board: Board,
    color: Color,
    en_passant_target: Position | None = None,
) -> list[Move]:
    """All geometric moves for one color, before the king-safety filter."""
    moves = []
    for origin, piece in board.pieces(color):
        for target in piece_destinations(board, origin, piece, en_passant_target):
            moves.append(Move(origin, target))
    return moves
