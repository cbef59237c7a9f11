"""
Game state container.

GameState is plain data. Rule functions in chessrules.rules never mutate a
state they are given; they copy it and return the successor.
"""

from dataclasses import dataclass, field, replace
from enum import Enum

from chessrules.board import Board, Color, Position


class GameStatus(Enum):
    PLAYING = "playing"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW = "draw"

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.CHECKMATE, GameStatus.STALEMATE, GameStatus.DRAW)


@dataclass(frozen=True)
class CastlingRights:
    white_king_side: bool = True
    white_queen_side: bool = True
    black_king_side: bool = True
    black_queen_side: bool = True

    @classmethod
    def none(cls) -> "CastlingRights":
        return cls(False, False, False, False)

    def king_side(self, color: Color) -> bool:
        return self.white_king_side if color is Color.WHITE else self.black_king_side

    def queen_side(self, color: Color) -> bool:
        return self.white_queen_side if color is Color.WHITE else self.black_queen_side

    def without(self, color: Color, king_side: bool = False, queen_side: bool = False) -> "CastlingRights":
        """Copy with the named rights of color cleared."""
        if color is Color.WHITE:
            return replace(
                self,
                white_king_side=self.white_king_side and not king_side,
                white_queen_side=self.white_queen_side and not queen_side,
            )
        return replace(
            self,
            black_king_side=self.black_king_side and not king_side,
            black_queen_side=self.black_queen_side and not queen_side,
        )

    def fen(self) -> str:
        """FEN castling field, '-' when no rights remain."""
        flags = (
            ("K", self.white_king_side),
            ("Q", self.white_queen_side),
            ("k", self.black_king_side),
            ("q", self.black_queen_side),
        )
        return "".join(letter for letter, allowed in flags if allowed) or "-"


@dataclass
class GameState:
    """
    Everything needed to continue a game from this position.

    Attributes:
        board: Piece placement.
        current_player: Side to move.
        status: Status from the point of view of current_player.
        winner: Set only on checkmate.
        move_history: Notation of every applied move, oldest first.
        king_positions: Cached square of each king.
        en_passant_target: Square skipped by the last two-square pawn advance.
        castling_rights: Tracked flags; castling itself is not playable.
        fifty_move_rule: Half-moves since the last capture or pawn move.
        move_count: Half-moves applied since the game started.
    """

    board: Board
    current_player: Color = Color.WHITE
    status: GameStatus = GameStatus.PLAYING
    winner: Color | None = None
    move_history: list[str] = field(default_factory=list)
    king_positions: dict[Color, Position] = field(default_factory=dict)
    en_passant_target: Position | None = None
    castling_rights: CastlingRights = field(default_factory=CastlingRights)
    fifty_move_rule: int = 0
    move_count: int = 0

    def __post_init__(self) -> None:
        if not self.king_positions:
            for color in Color:
                king = self.board.find_king(color)
                if king is not None:
                    self.king_positions[color] = king

    def copy(self) -> "GameState":
        """Independent copy; board, history and king cache are duplicated."""
        return replace(
            self,
            board=self.board.copy(),
            move_history=list(self.move_history),
            king_positions=dict(self.king_positions),
        )

    @property
    def fullmove_number(self) -> int:
        return self.move_count // 2 + 1


def initial_state() -> GameState:
    """Standard starting position, white to move."""
    return GameState(board=Board.initial())
