"""
Reversi game module.
Handles game flow, state management and dispatch of the computer player.
"""
import logging
import random
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait as wait_futures
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import numpy as np

from . import rules
from .board import Board, Piece
from ..config import GameConfig, PlayerType, SearchConfig
from ..errors import GameClosedError, UnsupportedPlayerTypeError
from ..search.minimax import MinimaxSearch

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of a game, handed to observers and UIs."""
    board: Board
    current_player: Piece
    game_over: bool
    black_score: int
    white_score: int
    empty_cells: int
    ai_thinking: bool
    ai_enabled: bool
    black_player: PlayerType
    white_player: PlayerType

    def cell(self, row: int, col: int) -> Piece:
        return self.board.get(row, col)


@dataclass
class _PendingSearch:
    future: Future
    side: Piece


class ReversiGame:
    """
    Main game class for Reversi that owns the authoritative game state.

    State changes only through drop_piece(), reset() and the configuration
    setters. Computer moves are searched on a worker thread against a copy
    of the board and applied by whichever thread calls poll() or
    wait_for_ai(), so a UI applies them on its own thread.
    """

    def __init__(self, config: Optional[GameConfig] = None,
                 search_config: Optional[SearchConfig] = None):
        """
        Initialize a new Reversi game.

        Args:
            config: Player types, AI toggle and AI delay
            search_config: Search depth and tie-break seed
        """
        self.config = config if config is not None else GameConfig()
        self.search_config = search_config if search_config is not None else SearchConfig()
        self._player_types = {
            Piece.BLACK: self._check_player_type(self.config.black_player, Piece.BLACK),
            Piece.WHITE: self._check_player_type(self.config.white_player, Piece.WHITE),
        }
        self._ai_enabled = self.config.ai_enabled
        self._rng = random.Random(self.search_config.seed)

        self._lock = threading.RLock()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="reversi-ai")
        self._pending: Optional[_PendingSearch] = None
        self._closed = False
        self._listeners: List[Callable[[GameSnapshot], None]] = []

        self._init_state(Board.initial(), Piece.BLACK)
        with self._lock:
            self._maybe_schedule_ai()

    @classmethod
    def from_position(cls, board: Board, current_player: Piece,
                      config: Optional[GameConfig] = None,
                      search_config: Optional[SearchConfig] = None) -> 'ReversiGame':
        """
        Start a game from an arbitrary position.

        If `current_player` cannot move the turn passes; if neither side can
        move the game starts out finished.
        """
        game = cls(config, search_config)
        with game._lock:
            game._drop_pending()
            game._init_state(board.copy(), current_player)
            if not rules.has_any_legal_move(game._board, current_player):
                nxt = rules.next_side_to_move(game._board, current_player)
                game._current_player = nxt if nxt is not None else current_player
                game._game_over = nxt is None
            game._maybe_schedule_ai()
        return game

    def _init_state(self, board: Board, current_player: Piece) -> None:
        self._board = board
        self._current_player = current_player
        self._game_over = False
        self._ai_thinking = False
        self._update_scores()

    def _update_scores(self) -> None:
        self._black_score, self._white_score, self._empty_cells = rules.piece_counts(self._board)

    @staticmethod
    def _check_player_type(player_type, side: Piece) -> PlayerType:
        player_type = PlayerType.parse(player_type)
        if player_type is PlayerType.AI_MCTS:
            raise UnsupportedPlayerTypeError(player_type, side)
        return player_type

    # Read access

    @property
    def board(self) -> Board:
        """A copy of the current board."""
        return self._board.copy()

    @property
    def current_player(self) -> Piece:
        return self._current_player

    @property
    def game_over(self) -> bool:
        return self._game_over

    @property
    def ai_thinking(self) -> bool:
        return self._ai_thinking

    @property
    def ai_enabled(self) -> bool:
        return self._ai_enabled

    def get_player_type(self, side: Piece) -> PlayerType:
        return self._player_types[side]

    def snapshot(self) -> GameSnapshot:
        """Get an immutable snapshot of the whole game state."""
        with self._lock:
            return GameSnapshot(
                board=self._board.copy(),
                current_player=self._current_player,
                game_over=self._game_over,
                black_score=self._black_score,
                white_score=self._white_score,
                empty_cells=self._empty_cells,
                ai_thinking=self._ai_thinking,
                ai_enabled=self._ai_enabled,
                black_player=self._player_types[Piece.BLACK],
                white_player=self._player_types[Piece.WHITE],
            )

    def get_board_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            2D numpy array representing the board state
        """
        return self._board.get_board_state()

    def get_score(self) -> Tuple[int, int]:
        """
        Get the current score (black, white).

        Returns:
            Tuple of (black_score, white_score)
        """
        return self._black_score, self._white_score

    def get_empty_cells(self) -> int:
        return self._empty_cells

    def get_current_player(self) -> Piece:
        return self._current_player

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self._game_over

    def get_winner(self) -> Optional[Piece]:
        """
        Get the winner of the game.

        Returns:
            Piece.BLACK, Piece.WHITE, or Piece.EMPTY (0) for a draw;
            None if the game is not over
        """
        if not self._game_over:
            return None
        return rules.winner(self._board)

    def get_valid_moves(self) -> List[Tuple[int, int]]:
        """
        Get all valid moves for the current player.

        Returns:
            List of (row, col) tuples representing valid moves
        """
        return rules.legal_moves(self._board, self._current_player)

    def is_valid_drop(self, row: int, col: int, player: Optional[Piece] = None) -> bool:
        """Check a drop against the current board, for the current player by default."""
        if player is None:
            player = self._current_player
        return rules.is_legal(self._board, player, row, col)

    # Observers

    def subscribe(self, callback: Callable[[GameSnapshot], None]) -> None:
        """Call `callback` with a fresh snapshot after every state change."""
        with self._lock:
            self._listeners.append(callback)

    def unsubscribe(self, callback: Callable[[GameSnapshot], None]) -> None:
        with self._lock:
            if callback in self._listeners:
                self._listeners.remove(callback)

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for callback in list(self._listeners):
            callback(snapshot)

    # Mutation

    def drop_piece(self, row: int, col: int) -> bool:
        """
        Place a piece for the side to move.

        Ignored when the game is over, the computer is thinking, the side to
        move is computer-controlled, or the drop is illegal.

        Returns:
            bool: True if the move was made, False otherwise

        Raises:
            GameClosedError: after shutdown()
        """
        with self._lock:
            self._check_open()
            if self._game_over or self._ai_thinking:
                return False
            if self._ai_enabled and self._player_types[self._current_player].is_ai:
                return False
            if not self._apply(row, col):
                return False
            self._maybe_schedule_ai()
            self._notify()
            return True

    def _apply(self, row: int, col: int) -> bool:
        side = self._current_player
        flips = rules.captures(self._board, side, row, col)
        if not flips:
            return False

        self._board = rules.apply_move(self._board, side, row, col)
        self._update_scores()
        logger.debug("%s drops at (%d, %d), flipping %d",
                     side.label, row, col, sum(len(line) for line in flips.values()))

        # Pass resolution: opponent, else the same side again, else game over.
        nxt = rules.next_side_to_move(self._board, side)
        if nxt is None:
            self._game_over = True
            winner = rules.winner(self._board)
            logger.info("Game over - Black: %d, White: %d, %s",
                        self._black_score, self._white_score,
                        "draw" if winner == Piece.EMPTY else f"{winner.label} wins")
        else:
            if nxt == side:
                logger.info("%s has no legal move and passes", side.opposite.label)
            self._current_player = nxt
        return True

    def reset(self) -> None:
        """Reset the game to its initial state, dropping any search in flight."""
        with self._lock:
            self._check_open()
            self._drop_pending()
            self._init_state(Board.initial(), Piece.BLACK)
            logger.info("Game reset")
            self._maybe_schedule_ai()
            self._notify()

    def set_player_type(self, side: Piece, player_type) -> None:
        """
        Choose who plays `side`.

        Raises:
            UnsupportedPlayerTypeError: for PlayerType.AI_MCTS
        """
        player_type = self._check_player_type(player_type, side)
        with self._lock:
            self._check_open()
            self._player_types[side] = player_type
            self._drop_orphaned_search()
            self._maybe_schedule_ai()
            self._notify()

    def set_ai_enabled(self, enabled: bool) -> None:
        with self._lock:
            self._check_open()
            self._ai_enabled = bool(enabled)
            self._drop_orphaned_search()
            self._maybe_schedule_ai()
            self._notify()

    def _check_open(self) -> None:
        if self._closed:
            raise GameClosedError()

    def _drop_pending(self) -> None:
        """Forget the search in flight; its result will be discarded. Lock held."""
        self._pending = None
        self._ai_thinking = False

    def _drop_orphaned_search(self) -> None:
        # The side being searched for is no longer computer-controlled.
        pending = self._pending
        if pending is None:
            return
        if not (self._ai_enabled and self._player_types[pending.side].is_ai):
            logger.debug("Dropping search for %s", pending.side.label)
            self._drop_pending()

    # Computer player

    def _maybe_schedule_ai(self) -> None:
        """Start a search if the side to move is computer-controlled. Lock held."""
        if self._game_over or self._pending is not None or not self._ai_enabled:
            return
        side = self._current_player
        player_type = self._player_types[side]
        if not player_type.is_ai:
            return

        if player_type is PlayerType.AI_MINIMAX:
            strategy = self._minimax_move
        else:
            raise UnsupportedPlayerTypeError(player_type, side)

        snapshot = self._board.copy()
        self._ai_thinking = True
        future = self._executor.submit(strategy, snapshot, side, self.config.ai_delay)
        self._pending = _PendingSearch(future, side)
        logger.debug("Dispatched search for %s (depth %d)", side.label, self.search_config.depth)

    def _minimax_move(self, board: Board, side: Piece, delay: float) -> Optional[Tuple[int, int]]:
        # Runs on the worker thread; only touches its own board copy.
        if delay > 0:
            time.sleep(delay)
        searcher = MinimaxSearch(self.search_config.depth, rng=self._rng)
        return searcher.find_best_move(board, side)

    def poll(self) -> bool:
        """
        Apply a finished search result, if any, on the calling thread.

        Returns:
            True if a computer move was applied
        """
        with self._lock:
            pending = self._pending
            if pending is None or not pending.future.done():
                return False
            return self._deliver(pending)

    def wait_for_ai(self, timeout: Optional[float] = None) -> bool:
        """
        Block until the outstanding search finishes, then apply it.

        Returns:
            True if a computer move was applied
        """
        with self._lock:
            pending = self._pending
        if pending is None:
            return False
        done, _ = wait_futures([pending.future], timeout=timeout)
        if not done:
            return False
        with self._lock:
            if self._pending is not pending:
                logger.debug("Discarding stale search result for %s", pending.side.label)
                return False
            return self._deliver(pending)

    def _deliver(self, pending: _PendingSearch) -> bool:
        """Hand a finished search result to the game. Lock held."""
        self._pending = None
        self._ai_thinking = False

        error = pending.future.exception()
        if error is not None:
            self._notify()
            raise error

        move = pending.future.result()
        if move is None:
            # Pass resolution keeps this from happening, treat it as a pass.
            logger.warning("%s search found no move, passing", pending.side.label)
            nxt = rules.next_side_to_move(self._board, pending.side)
            if nxt is None:
                self._game_over = True
            else:
                self._current_player = nxt
            self._maybe_schedule_ai()
            self._notify()
            return False

        applied = self._apply(*move)
        self._maybe_schedule_ai()
        self._notify()
        return applied

    def shutdown(self, wait: bool = True) -> None:
        """Stop the worker thread. Results still in flight are dropped."""
        with self._lock:
            self._closed = True
            self._drop_pending()
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> 'ReversiGame':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    def __str__(self) -> str:
        """String representation of the game state."""
        result = str(self._board)
        result += f"\nCurrent player: {self._current_player.label}"
        result += f"\nScore - Black: {self._black_score}, White: {self._white_score}"
        if self._game_over:
            winner = self.get_winner()
            if winner == Piece.EMPTY:
                result += "\nGame over! It's a draw!"
            else:
                result += f"\nGame over! {winner.label} wins!"
        return result
