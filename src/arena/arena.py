"""
Arena for playing matches between computer players.
"""
import os
import json
import random
import logging
import time
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from tqdm import tqdm

from ..config import GameConfig, PlayerType
from ..game.board import Board, Piece
from ..game.game import ReversiGame
from ..game.rules import legal_moves
from ..search.minimax import MinimaxSearch

logger = logging.getLogger(__name__)


class RandomPlayer:
    """Plays a uniformly random legal move."""

    def __init__(self, player_id: str = "random", seed: Optional[int] = None):
        self.player_id = player_id
        self.rng = random.Random(seed)

    def get_move(self, board: Board, side: Piece) -> Optional[Tuple[int, int]]:
        moves = legal_moves(board, side)
        return self.rng.choice(moves) if moves else None


class MinimaxPlayer:
    """Plays the move chosen by a fixed-depth minimax search."""

    def __init__(self, depth: int, player_id: Optional[str] = None, seed: Optional[int] = None):
        self.depth = depth
        self.player_id = player_id or f"minimax_d{depth}"
        self.search = MinimaxSearch(depth, rng=random.Random(seed))

    def get_move(self, board: Board, side: Piece) -> Optional[Tuple[int, int]]:
        return self.search.find_best_move(board, side)


@dataclass
class GameRecord:
    """Outcome of a single arena game."""
    black: str
    white: str
    black_score: int
    white_score: int
    moves: int
    passes: int
    duration: float

    @property
    def winner(self) -> Optional[str]:
        if self.black_score > self.white_score:
            return self.black
        if self.white_score > self.black_score:
            return self.white
        return None


class Arena:
    """Arena for running matches between two players."""

    def __init__(self, player1, player2):
        """
        Initialize the arena.

        Args:
            player1: First player (Black in odd-numbered games)
            player2: Second player
        """
        if player1.player_id == player2.player_id:
            raise ValueError(f"Players need distinct ids, both are {player1.player_id!r}")
        self.player1 = player1
        self.player2 = player2
        self.records: List[GameRecord] = []

    @staticmethod
    def play_game(black, white, verbose: bool = False) -> GameRecord:
        """
        Play a single game.

        Both sides are driven from here through the game controller, with the
        controller's own computer player switched off.

        Returns:
            GameRecord with the final score
        """
        config = GameConfig(black_player=PlayerType.HUMAN, white_player=PlayerType.HUMAN,
                            ai_enabled=False, ai_delay=0.0)
        players = {Piece.BLACK: black, Piece.WHITE: white}
        start = time.time()
        moves = 0
        passes = 0

        with ReversiGame(config) as game:
            if verbose:
                print(f"Starting game: {black.player_id} (Black) vs {white.player_id} (White)")
                print(game)

            while not game.is_game_over():
                side = game.get_current_player()
                move = players[side].get_move(game.board, side)
                if move is None:
                    raise RuntimeError(f"{players[side].player_id} returned no move for {side.label}")
                if not game.drop_piece(*move):
                    raise RuntimeError(f"{players[side].player_id} played illegal move {move}")
                moves += 1
                if not game.is_game_over() and game.get_current_player() == side:
                    passes += 1
                if verbose:
                    print(f"{players[side].player_id} plays at {move}")
                    print(game)

            black_score, white_score = game.get_score()

        return GameRecord(black.player_id, white.player_id, black_score, white_score,
                          moves, passes, time.time() - start)

    def run_match(self, games: int, verbose: bool = False) -> Dict:
        """
        Play `games` games, alternating who takes Black.

        Returns:
            Dictionary with wins per player, draws and average piece margin
        """
        if games < 1:
            raise ValueError("Need at least 1 game for a match")

        p1, p2 = self.player1.player_id, self.player2.player_id
        results = {'games_played': 0, 'wins': {p1: 0, p2: 0}, 'draws': 0, 'start_time': time.time()}
        margin = 0

        for game_num in tqdm(range(games), desc=f"{p1} vs {p2}", disable=verbose):
            if game_num % 2 == 0:
                black, white = self.player1, self.player2
            else:
                black, white = self.player2, self.player1
            record = self.play_game(black, white, verbose=verbose)
            self.records.append(record)

            results['games_played'] += 1
            if record.winner is None:
                results['draws'] += 1
            else:
                results['wins'][record.winner] += 1

            p1_score = record.black_score if record.black == p1 else record.white_score
            p2_score = record.white_score if record.black == p1 else record.black_score
            margin += p1_score - p2_score
            logger.debug("Game %d: %s %d - %d %s", game_num + 1,
                         record.black, record.black_score, record.white_score, record.white)

        results['end_time'] = time.time()
        results['duration'] = results['end_time'] - results['start_time']
        results['average_margin'] = margin / games
        return results

    def save_results(self, filepath: str, results: Dict):
        """Save match results and per-game records to a JSON file."""
        os.makedirs(os.path.dirname(os.path.abspath(filepath)), exist_ok=True)
        data = dict(results)
        data['games'] = [asdict(record) for record in self.records]
        data['saved_at'] = datetime.now().isoformat()
        with open(filepath, 'w') as f:
            json.dump(data, f, indent=2)

    def print_summary(self, results: Dict):
        """Print the match summary."""
        p1, p2 = self.player1.player_id, self.player2.player_id
        print(f"\nMatch: {p1} vs {p2} ({results['games_played']} games)")
        print(f"  {p1:22s} wins: {results['wins'][p1]}")
        print(f"  {p2:22s} wins: {results['wins'][p2]}")
        print(f"  draws: {results['draws']}")
        print(f"  average margin for {p1}: {results['average_margin']:+.2f}")
