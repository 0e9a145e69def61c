"""
Rules for Reversi: move legality, flips, move application and pass resolution.

Every function takes the board explicitly and never mutates it.
"""
from typing import Dict, List, Optional, Tuple

from .board import Board, Piece

Cell = Tuple[int, int]
Direction = Tuple[int, int]

# N, NE, E, SE, S, SW, W, NW
DIRECTIONS: Tuple[Direction, ...] = (
    (-1, 0), (-1, 1), (0, 1), (1, 1),
    (1, 0), (1, -1), (0, -1), (-1, -1),
)


FULL_MASK = 0xFFFFFFFFFFFFFFFF
# Masks that clear the column a horizontal shift wraps into.
_NOT_COL_0 = 0xFEFEFEFEFEFEFEFE
_NOT_COL_7 = 0x7F7F7F7F7F7F7F7F


def _shift(bits: int, direction: Direction) -> int:
    """Move every set bit one cell along `direction`, dropping bits that leave the board."""
    dr, dc = direction
    step = dr * Board.SIZE + dc
    if step > 0:
        bits = (bits << step) & FULL_MASK
    else:
        bits >>= -step
    if dc == 1:
        bits &= _NOT_COL_0
    elif dc == -1:
        bits &= _NOT_COL_7
    return bits


def legal_move_mask(board: Board, side: Piece) -> int:
    """
    Bitboard of every legal move for `side`.

    Runs of opponent pieces are grown outwards from the side's own pieces;
    an empty cell right past a run is a legal move.
    """
    black, white = board.bitboards()
    own, opponent = (black, white) if side == Piece.BLACK else (white, black)
    empty = ~(black | white) & FULL_MASK

    moves = 0
    for direction in DIRECTIONS:
        candidates = _shift(own, direction) & opponent
        for _ in range(Board.SIZE - 3):  # a run holds at most six pieces
            candidates |= _shift(candidates, direction) & opponent
        moves |= _shift(candidates, direction) & empty
    return moves


def mobility(board: Board, side: Piece) -> int:
    """Number of legal moves for `side`."""
    return bin(legal_move_mask(board, side)).count('1')


def _walk(board: Board, side: Piece, row: int, col: int, direction: Direction) -> List[Cell]:
    """
    Opponent cells captured along one ray from (row, col).

    Returns an empty list when the ray runs off the board or reaches an
    empty cell before a piece of `side`.
    """
    opponent = side.opposite
    dr, dc = direction
    r, c = row + dr, col + dc
    line = []
    while Board.in_bounds(r, c) and board.get(r, c) == opponent:
        line.append((r, c))
        r += dr
        c += dc
    if line and Board.in_bounds(r, c) and board.get(r, c) == side:
        return line
    return []


def captures(board: Board, side: Piece, row: int, col: int) -> Dict[Direction, List[Cell]]:
    """
    Cells flipped by placing `side` at (row, col), grouped by direction.

    Returns:
        Mapping of capturing direction to the opponent cells it flips.
        Empty when the placement is illegal.
    """
    if not Board.in_bounds(row, col) or board.get(row, col) != Piece.EMPTY:
        return {}
    result = {}
    for direction in DIRECTIONS:
        line = _walk(board, side, row, col, direction)
        if line:
            result[direction] = line
    return result


def is_legal(board: Board, side: Piece, row: int, col: int) -> bool:
    """Check if `side` may place a piece at (row, col)."""
    if not Board.in_bounds(row, col) or board.get(row, col) != Piece.EMPTY:
        return False
    return any(_walk(board, side, row, col, d) for d in DIRECTIONS)


def legal_moves(board: Board, side: Piece) -> List[Cell]:
    """
    Get all legal moves for `side`.

    Returns:
        List of (row, col) tuples in row-major order
    """
    mask = legal_move_mask(board, side)
    moves = []
    while mask:
        low = mask & -mask
        moves.append(divmod(low.bit_length() - 1, Board.SIZE))
        mask ^= low
    return moves


def has_any_legal_move(board: Board, side: Piece) -> bool:
    return legal_move_mask(board, side) != 0


def apply_move(board: Board, side: Piece, row: int, col: int) -> Board:
    """
    Place `side` at (row, col) and flip every captured cell.

    The input board is left untouched. An illegal move is a no-op and
    returns an unchanged copy.

    Returns:
        The resulting board
    """
    new_board = board.copy()
    flips = captures(board, side, row, col)
    if not flips:
        return new_board

    new_board.set(row, col, side)
    for line in flips.values():
        for r, c in line:
            new_board.set(r, c, side)
    return new_board


def piece_counts(board: Board) -> Tuple[int, int, int]:
    """Return (black, white, empty) counts."""
    black, white = board.get_score()
    return black, white, Board.BOARD_SIZE - black - white


def next_side_to_move(board: Board, just_moved: Piece) -> Optional[Piece]:
    """
    Resolve whose turn follows a move by `just_moved`.

    The opponent moves if it can; otherwise it passes and `just_moved` goes
    again. When neither side can move the game is over and None is returned.
    """
    opponent = just_moved.opposite
    if has_any_legal_move(board, opponent):
        return opponent
    if has_any_legal_move(board, just_moved):
        return just_moved
    return None


def winner(board: Board) -> Piece:
    """Side with more pieces, or EMPTY for a draw."""
    black, white = board.get_score()
    if black > white:
        return Piece.BLACK
    if white > black:
        return Piece.WHITE
    return Piece.EMPTY
