"""
Set of (row, col) grid positions.
Used by the board to track which cells are empty.
"""

from typing import Dict, List, Tuple


class PositionSet:
    """
    Set-like container over integer coordinate pairs.

    Members are keyed by the (row, col) tuple itself, so distinct pairs never
    collide (12, 3) and (1, 23) are two different members.
    """

    def __init__(self):
        self._positions: Dict[Tuple[int, int], Dict[str, int]] = {}

    def has(self, row: int, col: int) -> bool:
        return (row, col) in self._positions

    def add(self, row: int, col: int) -> None:
        self._positions[(row, col)] = {"row": row, "col": col}

    def delete(self, row: int, col: int) -> None:
        self._positions.pop((row, col), None)

    def clear(self) -> None:
        self._positions = {}

    @property
    def size(self) -> int:
        return len(self._positions)

    def __len__(self) -> int:
        return len(self._positions)

    def values(self) -> List[Dict[str, int]]:
        """
        Return a fresh list of {"row", "col"} dicts sorted by row, then column.

        Returns:
            List of positions; mutating it does not affect the set
        """
        return [
            dict(self._positions[key]) for key in sorted(self._positions)
        ]
