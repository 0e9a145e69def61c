"""
Depth-limited minimax search with alpha-beta pruning.

The search is framed the way the evaluator scores positions: White is the
maximizing side and Black the minimizing one, whichever side asked for a
move. At the root White takes the highest score and Black the lowest.
"""
import logging
import math
import random
from typing import List, Optional, Tuple

from ..game.board import Board, Piece
from ..game.rules import apply_move, legal_moves
from .evaluator import evaluate

logger = logging.getLogger(__name__)

Move = Tuple[int, int]

DEFAULT_DEPTH = 5


class MinimaxSearch:
    """
    Minimax searcher over immutable board snapshots.

    Attributes:
        depth: Number of plies explored below the root position
        use_pruning: Cut branches once beta <= alpha. Disabling it gives the
            plain minimax value and is only useful for checking the pruned one.
        nodes: Number of positions visited by the last search
    """

    def __init__(self, depth: int = DEFAULT_DEPTH, rng: Optional[random.Random] = None,
                 use_pruning: bool = True):
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")
        self.depth = depth
        self.rng = rng if rng is not None else random.Random()
        self.use_pruning = use_pruning
        self.nodes = 0

    def minimax(self, board: Board, depth: int, alpha: float, beta: float,
                maximizing: bool) -> float:
        """
        Score `board` with White to move when `maximizing`, Black otherwise.

        A side with no legal move is treated as a leaf rather than searched
        as a pass.
        """
        self.nodes += 1
        if depth == 0:
            return evaluate(board)

        side = Piece.WHITE if maximizing else Piece.BLACK
        moves = legal_moves(board, side)
        if not moves:
            return evaluate(board)

        if maximizing:
            best = -math.inf
            for row, col in moves:
                child = apply_move(board, side, row, col)
                score = self.minimax(child, depth - 1, alpha, beta, False)
                best = max(best, score)
                alpha = max(alpha, score)
                if self.use_pruning and beta <= alpha:
                    break
            return best

        best = math.inf
        for row, col in moves:
            child = apply_move(board, side, row, col)
            score = self.minimax(child, depth - 1, alpha, beta, True)
            best = min(best, score)
            beta = min(beta, score)
            if self.use_pruning and beta <= alpha:
                break
        return best

    def score_moves(self, board: Board, side: Piece) -> List[Tuple[Move, float]]:
        """
        Score every legal move of `side` on `board`.

        Returns:
            List of ((row, col), score) pairs in move generation order
        """
        scored = []
        for row, col in legal_moves(board, side):
            child = apply_move(board, side, row, col)
            # The opponent moves next; White is the maximizer.
            score = self.minimax(child, self.depth - 1, -math.inf, math.inf,
                                 side == Piece.BLACK)
            scored.append(((row, col), score))
        return scored

    def find_best_move(self, board: Board, side: Piece) -> Optional[Move]:
        """
        Pick the best move for `side`.

        Ties are broken uniformly at random.

        Returns:
            (row, col) of the chosen move, or None if `side` cannot move
        """
        self.nodes = 0
        scored = self.score_moves(board, side)
        if not scored:
            logger.debug("%s has no legal move", side.label)
            return None

        pick = max if side == Piece.WHITE else min
        best_score = pick(score for _, score in scored)
        best_moves = [move for move, score in scored if score == best_score]
        move = self.rng.choice(best_moves)
        logger.debug("%s plays %s (score=%s, tied=%d, nodes=%d)",
                     side.label, move, best_score, len(best_moves), self.nodes)
        return move


def minimax(board: Board, depth: int, alpha: float = -math.inf, beta: float = math.inf,
            maximizing: bool = True, use_pruning: bool = True) -> float:
    """Minimax value of `board` searched `depth` plies deep."""
    searcher = MinimaxSearch(max(depth, 1), use_pruning=use_pruning)
    return searcher.minimax(board, depth, alpha, beta, maximizing)


def find_best_move(board: Board, side: Piece, depth: int = DEFAULT_DEPTH,
                   rng: Optional[random.Random] = None) -> Optional[Move]:
    """Best move for `side` at the given depth, or None when there is none."""
    return MinimaxSearch(depth, rng=rng).find_best_move(board, side)
