"""
Board representation - pieces, squares and the 8x8 grid.

Row 0 is black's back rank (rank 8), row 7 is white's back rank (rank 1).
Columns run a-h from left to right.
"""

from collections.abc import Iterator
from dataclasses import dataclass, replace
from enum import Enum


BOARD_SIZE = 8
FILES = "abcdefgh"


class Color(Enum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def forward(self) -> int:
        """Row delta of a pawn advance for this color."""
        return -1 if self is Color.WHITE else 1


class PieceType(Enum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"

    @property
    def letter(self) -> str:
        """Upper-case notation letter (N for knight)."""
        return "N" if self is PieceType.KNIGHT else self.value[0].upper()


PROMOTION_TYPES = (PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT)

BACK_RANK_ORDER = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


@dataclass(frozen=True)
class Position:
    """A square on the board. May be off-board; check in_bounds()."""

    row: int
    col: int

    def in_bounds(self) -> bool:
        return 0 <= self.row < BOARD_SIZE and 0 <= self.col < BOARD_SIZE

    def offset(self, d_row: int, d_col: int) -> "Position":
        return Position(self.row + d_row, self.col + d_col)

    def algebraic(self) -> str:
        """
        Square name such as 'e4'.

        Raises:
            ValueError: If the position is off the board.
        """
        if not self.in_bounds():
            raise ValueError(f"Position off board: ({self.row}, {self.col})")
        return f"{FILES[self.col]}{BOARD_SIZE - self.row}"

    @staticmethod
    def from_algebraic(name: str) -> "Position":
        """
        Parse a square name such as 'e4'.

        Raises:
            ValueError: If the name is not a valid square.
        """
        if len(name) != 2 or name[0].lower() not in FILES or name[1] not in "12345678":
            raise ValueError(f"Invalid square: {name!r}")
        return Position(BOARD_SIZE - int(name[1]), FILES.index(name[0].lower()))

    def __str__(self) -> str:
        if self.in_bounds():
            return self.algebraic()
        return f"({self.row}, {self.col})"


@dataclass(frozen=True)
class Piece:
    type: PieceType
    color: Color
    has_moved: bool = False

    def moved(self) -> "Piece":
        """Copy of this piece flagged as having moved."""
        return self if self.has_moved else replace(self, has_moved=True)

    @property
    def symbol(self) -> str:
        """FEN-style symbol, upper case for white."""
        letter = self.type.letter
        return letter if self.color is Color.WHITE else letter.lower()


class Board:
    """
    8x8 grid of optional pieces.

    Pure data: no move rules live here, only bounds checking, lookup and
    copying. Pieces are immutable so copy() only duplicates the rows.
    """

    def __init__(self, squares: list[list[Piece | None]] | None = None):
        """
        Create a board.

        Args:
            squares: Optional 8x8 nested list. If None, the board is empty.
        """
        if squares is None:
            squares = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        if len(squares) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in squares):
            raise ValueError("Board must be 8x8")
        self.squares = [list(row) for row in squares]

    @classmethod
    def initial(cls) -> "Board":
        """Standard chess starting position."""
        board = cls()
        for col, piece_type in enumerate(BACK_RANK_ORDER):
            board.squares[0][col] = Piece(piece_type, Color.BLACK)
            board.squares[7][col] = Piece(piece_type, Color.WHITE)
            board.squares[1][col] = Piece(PieceType.PAWN, Color.BLACK)
            board.squares[6][col] = Piece(PieceType.PAWN, Color.WHITE)
        return board

    def copy(self) -> "Board":
        return Board(self.squares)

    def get(self, pos: Position) -> Piece | None:
        """Piece at pos, or None for empty or off-board squares."""
        if not pos.in_bounds():
            return None
        return self.squares[pos.row][pos.col]

    def set(self, pos: Position, piece: Piece | None) -> None:
        if not pos.in_bounds():
            raise ValueError(f"Position off board: {pos}")
        self.squares[pos.row][pos.col] = piece

    def is_empty(self, pos: Position) -> bool:
        return self.get(pos) is None

    def pieces(self, color: Color | None = None) -> Iterator[tuple[Position, Piece]]:
        """Yield (position, piece) in row-major order, optionally for one color."""
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                piece = self.squares[row][col]
                if piece is not None and (color is None or piece.color is color):
                    yield Position(row, col), piece

    def find_king(self, color: Color) -> Position | None:
        for pos, piece in self.pieces(color):
            if piece.type is PieceType.KING:
                return pos
        return None

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Board) and self.squares == other.squares

    def __str__(self) -> str:
        lines = []
        for row in self.squares:
            lines.append(" ".join(p.symbol if p else "." for p in row))
        return "\n".join(lines)
