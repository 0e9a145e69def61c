"""
Play Reversi in the terminal against the minimax engine.
"""
import os
import sys
import argparse
from pathlib import Path

# Add src directory to path
sys.path.append(str(Path(__file__).parent.absolute()))

from src.config import Config, PlayerType, get_default_config
from src.errors import ReversiError
from src.game.board import Piece
from src.game.game import ReversiGame
from src.logger import setup_logger


def parse_move(text: str):
    """Parse 'row col' or 'd3' style input into a (row, col) pair."""
    text = text.strip().lower()
    parts = text.replace(',', ' ').split()
    if len(parts) == 2 and all(p.isdigit() for p in parts):
        return int(parts[0]), int(parts[1])
    if len(text) == 2 and text[0] in 'abcdefgh' and text[1] in '12345678':
        return int(text[1]) - 1, ord(text[0]) - ord('a')
    return None


def print_status(game: ReversiGame):
    snapshot = game.snapshot()
    print()
    print("  " + " ".join("abcdefgh"))
    for i, line in enumerate(str(snapshot.board).splitlines()):
        print(f"{i + 1} {line}")
    print(f"Black: {snapshot.black_score}  White: {snapshot.white_score}  Empty: {snapshot.empty_cells}")
    if snapshot.game_over:
        winner = game.get_winner()
        print("Game over! " + ("It's a draw!" if winner == Piece.EMPTY else f"{winner.label} wins!"))
    else:
        print(f"To move: {snapshot.current_player.label}")


def main():
    """Run an interactive game with the specified configuration."""
    parser = argparse.ArgumentParser(description='Play Reversi against the minimax engine')
    parser.add_argument('--config', type=str, default='configs/default_config.json',
                        help='Path to config file')
    parser.add_argument('--black', type=str, default=None,
                        help='Player type for Black (human, ai_minimax)')
    parser.add_argument('--white', type=str, default=None,
                        help='Player type for White (human, ai_minimax)')
    parser.add_argument('--depth', type=int, default=None,
                        help='Search depth for computer players')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for the computer players')
    args = parser.parse_args()

    # Load configuration
    if os.path.exists(args.config):
        config = Config.load(args.config)
    else:
        print(f"Config file {args.config} not found, using default configuration")
        config = get_default_config()

    try:
        if args.black is not None:
            config.game.black_player = PlayerType.parse(args.black)
        if args.white is not None:
            config.game.white_player = PlayerType.parse(args.white)
        if args.depth is not None:
            config.search.depth = args.depth
        if args.seed is not None:
            config.search.seed = args.seed
        config.validate()
    except ReversiError as e:
        print(f"Error: {e}")
        sys.exit(2)

    log = setup_logger(config)
    try:
        game = ReversiGame(config.game, config.search)
    except ReversiError as e:
        print(f"Error: {e}")
        log.close()
        sys.exit(2)
    print("Enter moves as 'd3' or 'row col' (0-based). 'r' restarts, 'q' quits.")

    try:
        while True:
            print_status(game)
            if game.is_game_over():
                answer = input("Play again? [y/N] ").strip().lower()
                if answer != 'y':
                    break
                game.reset()
                continue

            if game.ai_thinking:
                print("AI: let me think...")
                game.wait_for_ai()
                continue

            text = input(f"{game.get_current_player().label}> ").strip().lower()
            if text == 'q':
                break
            if text == 'r':
                game.reset()
                continue
            move = parse_move(text)
            if move is None or not game.drop_piece(*move):
                print("Illegal move.")
    except (KeyboardInterrupt, EOFError):
        print()
    finally:
        game.shutdown(wait=False)
        log.close()


if __name__ == "__main__":
    main()
