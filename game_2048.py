"""
Stateful 2048 Game Implementation
The board owns the grid, score, open-cell set and move history.
"""

import random
from copy import deepcopy
from typing import Any, Dict, List, Optional, Sequence, Tuple

from game_logger import get_logger
from llm_suggest import SuggestionBridge
from position_set import PositionSet

# Game dimensions
GRID_SIZE = 4

DIRECTIONS = ('up', 'down', 'left', 'right')

logger = get_logger()


class InvalidPosition(IndexError):
    """Raised when a cell is addressed outside the grid."""

    def __init__(self, operation: str, row: int, col: int):
        super().__init__(f"{operation} invalid position: ({row}, {col})")
        self.operation = operation
        self.row = row
        self.col = col


def format_cell(cell: Optional[int], width: int = 4) -> str:
    """Center a cell value in a fixed-width field; empty cells are blank."""
    return f"{cell if cell is not None else '':^{width}}"


def board_to_string(grid: List[List[Optional[int]]]) -> str:
    """
    Render a grid one row per line.

    Args:
        grid: Grid to render

    Returns:
        Lines like "Row 0: [ 2  ,     ,  4  ,     ];", each ending in a newline
    """
    res = ''
    for index, row in enumerate(grid):
        res += f"Row {index}: [{', '.join(format_cell(cell) for cell in row)}];\n"
    return res


def select_random(sequence: Sequence[Any], rng=random) -> Optional[Any]:
    """Pick one element uniformly at random, or None from an empty sequence."""
    if not sequence:
        return None
    return sequence[int(rng.random() * len(sequence))]


class Board:
    """
    A 2048 board.

    Every cell write goes through set_cell, which keeps the set of available
    positions in step with the grid: a position is available iff its cell is
    empty.
    """

    size = GRID_SIZE

    def __init__(self, rng=None, ai_helper=None):
        self.rng = rng if rng is not None else random
        if ai_helper is None:
            ai_helper = SuggestionBridge()
        self.ai_helper = ai_helper
        self.available_cells = PositionSet()
        self.move_history: List[Dict[str, Any]] = []
        self.score = 0
        self.board = self._create_empty_board()
        self.insert_random_number()

    def _create_empty_board(self) -> List[List[Optional[int]]]:
        self.available_cells.clear()
        grid = []
        for i in range(self.size):
            grid.append([None] * self.size)
            for j in range(self.size):
                self.available_cells.add(i, j)
        return grid

    def _is_valid_position(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def get_board(self) -> List[List[Optional[int]]]:
        """Return the live grid. Callers must not mutate it."""
        return self.board

    def get_score(self) -> int:
        return self.score

    def get_cell(self, row: int, col: int) -> Optional[int]:
        if not self._is_valid_position(row, col):
            raise InvalidPosition('get_cell', row, col)
        return self.board[row][col]

    def set_cell(self, row: int, col: int, value: Optional[int]) -> None:
        if not self._is_valid_position(row, col):
            raise InvalidPosition('set_cell', row, col)
        old_value = self.board[row][col]
        self.board[row][col] = value
        if old_value is None and value is not None:
            self.available_cells.delete(row, col)
        elif old_value is not None and value is None:
            self.available_cells.add(row, col)

    def is_full(self) -> bool:
        return self.available_cells.size == 0

    def reset(self) -> None:
        """
        Empty the grid and spawn fresh tiles.

        Score and move history are left as they are; use new_game() to
        start over completely.
        """
        self.board = self._create_empty_board()
        self.insert_random_number()

    def new_game(self) -> None:
        """Clear score and move history, then reset the grid."""
        self.score = 0
        self.move_history = []
        self.reset()

    def display(self) -> None:
        logger.info(f"Current Score: {self.score}")
        logger.info('Current Board:')
        for index, row in enumerate(self.board):
            logger.info(f"Row {index}: [{', '.join(format_cell(cell) for cell in row)}]")

    # ---------------- Tile spawning ----------------

    def insert_random_number(self) -> bool:
        """
        Spawn several tiles at once.

        The number of spawns is floor(random * available / 2) + 2, so a
        nearly empty board receives many tiles in one call.
        """
        random_loop = int(self.rng.random() * self.available_cells.size / 2) + 2
        for _ in range(random_loop):
            self.insert_random_number_once()
        return True

    def insert_random_number_once(self) -> bool:
        """Spawn a 2 (90% chance) or a 4 (10% chance) on a random empty cell."""
        value = 2 if self.rng.random() < 0.9 else 4
        return self.insert_number_at_random_position(value)

    def insert_number_at_random_position(self, value: int) -> bool:
        if self.is_full():
            return False
        selected = select_random(self.available_cells.values(), self.rng)
        if selected is None:
            return False
        self.set_cell(selected['row'], selected['col'], value)
        return True

    # ---------------- Merging ----------------

    def _merge_line(self, line: List[Tuple[int, int]]) -> None:
        """
        Slide and merge one row or column toward line[0].

        Args:
            line: Cell coordinates ordered from the edge tiles move toward
        """
        last_merge = -1
        for index in range(1, len(line)):
            row, col = line[index]
            value = self.board[row][col]
            if value is None:
                continue

            target = index
            while target > 0 and self._cell_at(line[target - 1]) is None:
                target -= 1

            if target > 0 and self._cell_at(line[target - 1]) == value and last_merge != target - 1:
                merge_row, merge_col = line[target - 1]
                merged = value * 2
                self.set_cell(merge_row, merge_col, merged)
                self.score += merged
                self.set_cell(row, col, None)
                # A merged tile cannot merge again in the same move
                last_merge = target - 1
            elif target != index:
                target_row, target_col = line[target]
                self.set_cell(target_row, target_col, value)
                self.set_cell(row, col, None)

    def _cell_at(self, position: Tuple[int, int]) -> Optional[int]:
        row, col = position
        return self.board[row][col]

    def _finish_move(self) -> None:
        self.insert_random_number()
        self.display()

    def merge_up(self) -> None:
        for col in range(self.size):
            self._merge_line([(row, col) for row in range(self.size)])
        self._finish_move()

    def merge_down(self) -> None:
        for col in range(self.size):
            self._merge_line([(row, col) for row in reversed(range(self.size))])
        self._finish_move()

    def merge_left(self) -> None:
        for row in range(self.size):
            self._merge_line([(row, col) for col in range(self.size)])
        self._finish_move()

    def merge_right(self) -> None:
        for row in range(self.size):
            self._merge_line([(row, col) for col in reversed(range(self.size))])
        self._finish_move()

    def move(self, direction: str) -> None:
        """Dispatch to merge_<direction>."""
        if direction not in DIRECTIONS:
            raise ValueError(f"Invalid direction: {direction}. Must be 'left', 'right', 'up', or 'down'")
        getattr(self, f"merge_{direction}")()

    def is_game_over(self) -> bool:
        """The game is over when the board is full and no neighbours match."""
        if not self.is_full():
            return False
        for row in range(self.size):
            for col in range(self.size):
                value = self.board[row][col]
                if col < self.size - 1 and value == self.board[row][col + 1]:
                    return False
                if row < self.size - 1 and value == self.board[row + 1][col]:
                    return False
        return True

    # ---------------- History ----------------

    def collect_move_history(self, direction: str) -> List[Dict[str, Any]]:
        """
        Append a snapshot of the current state to the move history.

        Args:
            direction: 'up', 'down', 'left', 'right' or 'start'

        Returns:
            The full move history
        """
        self.move_history.append({
            'direction': direction,
            'score': self.score,
            'game_board': deepcopy(self.board),
        })
        logger.debug(f"Moving {direction}...", extra={'payload': self.move_history})
        return self.move_history

    def get_move_history(self) -> List[Dict[str, Any]]:
        return self.move_history

    def get_move_history_string(self) -> str:
        return '\n'.join(
            f"Direction: {move['direction']}, Score: {move['score']}, "
            f"Board: {board_to_string(move['game_board'])}"
            for move in self.move_history
        )

    async def suggest_ai_move(self) -> None:
        """Ask the suggestion bridge for a move. Errors propagate to the caller."""
        board_state = f"Current board state:\n{board_to_string(self.board)}"
        history = f"Move history:\n{self.get_move_history_string()}"
        question = (
            "Based on the current board state and move history, please suggest the best next move."
            f"\n\n{board_state}\n\n{history}"
        )
        await self.ai_helper.suggest_move(question)
