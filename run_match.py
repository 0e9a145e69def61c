"""
Script for running matches between Reversi engines.
"""
import os
import sys
import argparse
from datetime import datetime
from pathlib import Path

# Add src directory to path
sys.path.append(str(Path(__file__).parent.absolute()))

from src.arena import Arena, MinimaxPlayer, RandomPlayer
from src.config import Config, get_default_config
from src.errors import ReversiError
from src.logger import setup_logger


def make_player(kind: str, depth: int, seed):
    """Build a player from 'random' or 'minimax'."""
    if kind == 'random':
        return RandomPlayer(seed=seed)
    if kind == 'minimax':
        return MinimaxPlayer(depth, seed=seed)
    raise ValueError(f"Unknown player: {kind}")


def main():
    parser = argparse.ArgumentParser(description='Run a match between Reversi engines')

    parser.add_argument('--config', type=str, default='configs/default_config.json',
                        help='Path to config file')
    parser.add_argument('--player1', choices=['minimax', 'random'], default='minimax',
                        help='First player')
    parser.add_argument('--player2', choices=['minimax', 'random'], default='random',
                        help='Second player')
    parser.add_argument('--games', type=int, default=None,
                        help='Number of games to play')
    parser.add_argument('--depth1', type=int, default=None,
                        help='Search depth for player 1')
    parser.add_argument('--depth2', type=int, default=None,
                        help='Search depth for player 2')
    parser.add_argument('--seed', type=int, default=None,
                        help='Base random seed')
    parser.add_argument('--output-dir', type=str, default=None,
                        help='Directory to save match results')
    parser.add_argument('--verbose', action='store_true',
                        help='Print every move')

    args = parser.parse_args()

    try:
        if os.path.exists(args.config):
            config = Config.load(args.config)
        else:
            print(f"Config file {args.config} not found, using default configuration")
            config = get_default_config()

        if args.games is not None:
            config.arena.games = args.games
        if args.depth1 is not None:
            config.arena.depth_player1 = args.depth1
        if args.depth2 is not None:
            config.arena.depth_player2 = args.depth2
        if args.output_dir is not None:
            config.arena.output_dir = args.output_dir
        config.validate()
    except ReversiError as e:
        print(f"Error: {e}")
        sys.exit(2)

    log = setup_logger(config)
    seed = args.seed if args.seed is not None else config.search.seed
    player1 = make_player(args.player1, config.arena.depth_player1, seed)
    player2 = make_player(args.player2, config.arena.depth_player2,
                          None if seed is None else seed + 1)
    if player1.player_id == player2.player_id:
        player2.player_id += "_2"

    arena = Arena(player1, player2)
    results = arena.run_match(config.arena.games, verbose=args.verbose)
    arena.print_summary(results)
    log.log_metrics({
        'games': results['games_played'],
        'draws': results['draws'],
        'average_margin': results['average_margin'],
        'duration': results['duration'],
    }, step=results['games_played'], prefix='match/')

    os.makedirs(config.arena.output_dir, exist_ok=True)
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    results_file = os.path.join(config.arena.output_dir, f"match_{timestamp}.json")
    arena.save_results(results_file, results)
    print(f"\nResults saved to {results_file}")
    log.close()


if __name__ == "__main__":
    main()
