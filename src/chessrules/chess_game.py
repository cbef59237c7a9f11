"""
ChessGame class - stateful facade over the rules engine.

Owns a single GameState and exposes the interface consumed by UI, bot and
persistence layers. All rule logic lives in chessrules.rules; this class
only swaps in successor states and hands out copies.
"""

import numpy as np

from chessrules import encoding
from chessrules.attacks import is_king_attacked
from chessrules.board import Board, Color, Piece, PieceType, Position
from chessrules.config import RulesConfig, load_config
from chessrules.fen import from_fen, to_fen
from chessrules.movegen import Move
from chessrules.notation import result_message
from chessrules.rules import Applied, MoveResult, all_legal_moves, apply_move, is_valid_move, legal_moves
from chessrules.state import GameState, GameStatus, initial_state


class ChessGame:
    """
    Chess game session.

    This class provides a thin wrapper around the pure rule functions that
    handles:
    - Game state ownership (one writer, many readers)
    - Move validation and execution
    - Status queries (check, checkmate, stalemate, draw)
    - FEN import/export and array encodings for bots

    Getters return copies so callers cannot mutate the live state.
    make_move() is atomic: the state changes only when the move is applied.
    """

    POLICY_SIZE = encoding.POLICY_SIZE

    def __init__(self, fen: str | None = None, config: RulesConfig | None = None):
        """
        Initialize chess game.

        Args:
            fen: FEN string for initial position. If None, uses standard
                starting position.
            config: Rule configuration. If None, read from the environment.

        Raises:
            ValueError: If fen is malformed or config overrides are invalid.
        """
        self.config = config or load_config()
        self._fen = fen
        self.state = self._new_state()

    def _new_state(self) -> GameState:
        if self._fen is None:
            return initial_state()
        return from_fen(self._fen, self.config)

    def clone(self) -> "ChessGame":
        """
        Create independent copy of game state.

        Modifications to the clone will not affect the original.

        Returns:
            New ChessGame instance with identical state.
        """
        clone = ChessGame.__new__(ChessGame)
        clone.config = self.config
        clone._fen = self._fen
        clone.state = self.state.copy()
        return clone

    def reset(self) -> None:
        """Return to the position the game was created with."""
        self.state = self._new_state()

    # -------------------------------------------------------------------------
    # Read-only accessors
    # -------------------------------------------------------------------------

    def get_board(self) -> Board:
        return self.state.board.copy()

    def get_piece(self, pos: Position) -> Piece | None:
        return self.state.board.get(pos)

    def get_current_player(self) -> Color:
        return self.state.current_player

    def get_game_status(self) -> GameStatus:
        return self.state.status

    def get_winner(self) -> Color | None:
        return self.state.winner

    def get_game_state(self) -> GameState:
        return self.state.copy()

    def get_move_count(self) -> int:
        return self.state.move_count

    def get_move_history(self) -> list[str]:
        return list(self.state.move_history)

    def get_fen(self) -> str:
        """
        Get current game state as FEN string.

        Returns:
            FEN string representing current position, including turn,
            castling rights, en passant square, and move counters.
        """
        return to_fen(self.state)

    # -------------------------------------------------------------------------
    # Moves
    # -------------------------------------------------------------------------

    def is_valid_move(self, from_pos: Position, to_pos: Position) -> bool:
        return is_valid_move(self.state, from_pos, to_pos)

    def get_valid_moves(self, pos: Position) -> list[Position]:
        """
        Get legal destinations for the piece on pos.

        Returns:
            Destinations in row-major order; empty if pos holds no piece of
            the side to move.
        """
        return legal_moves(self.state, pos)

    def get_all_valid_moves(self, color: Color | None = None) -> list[Move]:
        """
        Get all legal moves for a color.

        Args:
            color: Side to enumerate. Defaults to the side to move. The side
                not on move has no legal moves.

        Returns:
            List of Move ordered by source then destination square.
        """
        return all_legal_moves(self.state, color)

    def try_move(
        self,
        from_pos: Position,
        to_pos: Position,
        promotion: PieceType | None = None,
    ) -> MoveResult:
        """
        Attempt a move and report the outcome.

        Args:
            from_pos: Square of the piece to move.
            to_pos: Destination square.
            promotion: Piece to promote to. Defaults to the configured
                promotion piece (queen).

        Returns:
            Applied with the new state, or Rejected with the reason. On
            rejection the game is unchanged.
        """
        result = apply_move(self.state, from_pos, to_pos, promotion, self.config)
        if isinstance(result, Applied):
            self.state = result.state
        return result

    def make_move(
        self,
        from_pos: Position,
        to_pos: Position,
        promotion: PieceType | None = None,
    ) -> bool:
        """
        Execute a move on the board.

        Returns:
            True if the move was applied, False if it was rejected.
        """
        return isinstance(self.try_move(from_pos, to_pos, promotion), Applied)

    # -------------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------------

    def is_in_check(self, color: Color | None = None) -> bool:
        color = color or self.state.current_player
        return is_king_attacked(self.state.board, self.state.king_positions.get(color), color)

    def is_game_over(self) -> bool:
        """
        Check if game has ended.

        Game is over on checkmate, stalemate, or a fifty-move draw.
        """
        return self.state.status.is_terminal

    def is_draw(self) -> bool:
        """
        Check if position is drawn.

        Stalemate and the fifty-move rule are the only draws recognised.
        """
        return self.state.status in (GameStatus.STALEMATE, GameStatus.DRAW)

    def get_result(self) -> float | None:
        """
        Get game result from current player's perspective.

        Returns:
            +1.0 if current player won
            -1.0 if current player lost
            0.0 if draw
            None if game not over
        """
        if not self.is_game_over():
            return None
        if self.state.status is GameStatus.CHECKMATE:
            return 1.0 if self.state.winner is self.state.current_player else -1.0
        return 0.0

    def get_result_message(self) -> str:
        return result_message(self.state)

    # -------------------------------------------------------------------------
    # Array encodings
    # -------------------------------------------------------------------------

    def get_canonical_board(self) -> np.ndarray:
        """
        Get board representation from current player's perspective.

        Returns:
            Array of shape (8, 8, 14) with dtype float32. See
            chessrules.encoding.canonical_board for the plane layout.
        """
        return encoding.canonical_board(self.state)

    def get_legal_moves_mask(self) -> np.ndarray:
        """
        Get boolean mask of legal moves.

        Returns:
            Boolean array of shape (4096,) where True indicates legal move.
        """
        return encoding.legal_moves_mask(self.state)

    def get_move_index(self, move: Move) -> int:
        """
        Convert Move to policy index.

        Raises:
            ValueError: If move is illegal in current position.
        """
        return encoding.move_index(self.state, move)

    def get_move_from_index(self, index: int) -> Move:
        """
        Convert policy index to Move.

        Raises:
            ValueError: If index doesn't correspond to legal move in current position.
        """
        return encoding.move_from_index(self.state, index)
