"""
Board module for Reversi.
Holds the 8x8 cell grid and the piece/side types.
"""
from enum import IntEnum
from typing import Iterator, List, Tuple
import numpy as np


class Piece(IntEnum):
    """Content of a single cell. BLACK and WHITE double as the two sides."""

    EMPTY = 0
    BLACK = 1  # Player 1
    WHITE = 2  # Player 2

    @property
    def opposite(self) -> 'Piece':
        """The other side. Only defined for BLACK and WHITE."""
        if self is Piece.EMPTY:
            raise ValueError("EMPTY has no opposite side")
        return Piece(3 - self.value)

    @property
    def label(self) -> str:
        return self.name.capitalize()


_PIECES = (Piece.EMPTY, Piece.BLACK, Piece.WHITE)

# Bit (row * 8 + col) of a bitboard stands for cell (row, col).
_BIT_VALUES = (np.uint64(1) << np.arange(64, dtype=np.uint64)).reshape(8, 8)


class Board:
    """
    Represents the Reversi game board as an 8x8 numpy array of Piece values.

    Boards compare and hash by content, so they can be used as plain values.
    The search works on copies and never touches the board owned by a game.
    """

    # Board dimensions
    SIZE = 8
    BOARD_SIZE = SIZE * SIZE

    CORNERS = ((0, 0), (0, 7), (7, 0), (7, 7))

    def __init__(self, cells=None):
        """
        Initialize a board.

        Args:
            cells: Optional 8x8 array-like of Piece values. An empty board is
                created when omitted; use Board.initial() for the opening.
        """
        if cells is None:
            self._cells = np.zeros((self.SIZE, self.SIZE), dtype=np.int8)
        else:
            grid = np.array(cells, dtype=np.int8)
            if grid.shape != (self.SIZE, self.SIZE):
                raise ValueError(f"Board must be {self.SIZE}x{self.SIZE}, got {grid.shape}")
            if not np.isin(grid, (Piece.EMPTY, Piece.BLACK, Piece.WHITE)).all():
                raise ValueError("Board cells must be EMPTY, BLACK or WHITE")
            self._cells = grid
        self._bits = None

    @classmethod
    def initial(cls) -> 'Board':
        """Create a board holding the canonical opening position."""
        board = cls()
        board._cells[3, 3] = Piece.WHITE
        board._cells[3, 4] = Piece.BLACK
        board._cells[4, 3] = Piece.BLACK
        board._cells[4, 4] = Piece.WHITE
        return board

    @classmethod
    def from_strings(cls, rows: List[str]) -> 'Board':
        """
        Build a board from eight strings using 'B', 'W' and '.'.

        Whitespace inside a row is ignored, so the output of str(board)
        can be fed back in.
        """
        symbols = {'.': Piece.EMPTY, 'B': Piece.BLACK, 'W': Piece.WHITE}
        grid = []
        for row in rows:
            grid.append([symbols[ch] for ch in row if not ch.isspace()])
        return cls(grid)

    @staticmethod
    def in_bounds(row: int, col: int) -> bool:
        """Check whether (row, col) lies on the board."""
        return 0 <= row < Board.SIZE and 0 <= col < Board.SIZE

    def get(self, row: int, col: int) -> Piece:
        return _PIECES[self._cells.item(row, col)]

    def set(self, row: int, col: int, piece: Piece) -> None:
        # Only used while building a new board value.
        self._cells[row, col] = piece
        self._bits = None

    def copy(self) -> 'Board':
        """Create a deep copy of the board."""
        new_board = Board.__new__(Board)
        new_board._cells = self._cells.copy()
        new_board._bits = self._bits
        return new_board

    def count(self, piece: Piece) -> int:
        return int(np.count_nonzero(self._cells == piece))

    def get_score(self) -> Tuple[int, int]:
        """
        Get the current score (black, white).

        Returns:
            Tuple of (black_count, white_count)
        """
        return self.count(Piece.BLACK), self.count(Piece.WHITE)

    def cells(self) -> Iterator[Tuple[int, int, Piece]]:
        """Iterate over (row, col, piece) in row-major order."""
        for i, row in enumerate(self._cells.tolist()):
            for j, value in enumerate(row):
                yield i, j, _PIECES[value]

    def bitboards(self) -> Tuple[int, int]:
        """
        Get the board as a pair of 64-bit masks.

        Returns:
            Tuple of (black_bits, white_bits), bit row * 8 + col set for
            each occupied cell
        """
        if self._bits is None:
            black = _BIT_VALUES[self._cells == Piece.BLACK].sum(dtype=np.uint64)
            white = _BIT_VALUES[self._cells == Piece.WHITE].sum(dtype=np.uint64)
            self._bits = (int(black), int(white))
        return self._bits

    def get_board_state(self) -> np.ndarray:
        """
        Get the board state as a numpy array.

        Returns:
            A copy of the 8x8 array (0 empty, 1 black, 2 white)
        """
        return self._cells.copy()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return np.array_equal(self._cells, other._cells)

    def __hash__(self) -> int:
        return hash(self._cells.tobytes())

    def __repr__(self) -> str:
        black, white = self.get_score()
        return f"Board(black={black}, white={white})"

    def __str__(self) -> str:
        """Return a string representation of the board."""
        symbols = {Piece.EMPTY: '.', Piece.BLACK: 'B', Piece.WHITE: 'W'}
        rows = []
        for i in range(self.SIZE):
            row = [symbols[Piece(int(self._cells[i, j]))] for j in range(self.SIZE)]
            rows.append(' '.join(row))
        return "\n".join(rows)
