"""Dense two-dimensional grid used for match scores and their display.

Cells are stored in a single flat list in row-major order. A grid is
addressed by ``(column, row)``, matching how match grids are drawn: one
column per haystack character, one row per needle character.
"""

from __future__ import annotations

from typing import Callable, Generic, Iterator, Sequence, TypeVar

T = TypeVar("T")
U = TypeVar("U")

__all__ = ["Grid"]


class Grid(Generic[T]):
    """Fixed-width grid of cells with row insertion.

    Every out-of-range access or malformed row raises immediately. Those are
    bugs in the caller, not conditions to recover from.
    """

    def __init__(self, width: int, height: int, initial: T) -> None:
        """Create a grid with every cell set to ``initial``.

        Args:
            width: Number of columns.
            height: Number of rows.
            initial: Value for every cell.
        """
        if width < 0 or height < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {width}x{height}")
        self._width = width
        self._height = height
        self._cells: list[T] = [initial] * (width * height)

    @classmethod
    def _from_cells(cls, width: int, height: int, cells: list[T]) -> Grid[T]:
        grid = cls.__new__(cls)
        grid._width = width
        grid._height = height
        grid._cells = cells
        return grid

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _offset(self, column: int, row: int) -> int:
        if not 0 <= column < self._width:
            raise IndexError(f"Column {column} out of range for width {self._width}")
        if not 0 <= row < self._height:
            raise IndexError(f"Row {row} out of range for height {self._height}")
        return row * self._width + column

    def __getitem__(self, key: tuple[int, int]) -> T:
        column, row = key
        return self._cells[self._offset(column, row)]

    def __setitem__(self, key: tuple[int, int], value: T) -> None:
        column, row = key
        self._cells[self._offset(column, row)] = value

    def row(self, index: int) -> list[T]:
        """Return a copy of one row."""
        if not 0 <= index < self._height:
            raise IndexError(f"Row {index} out of range for height {self._height}")
        start = index * self._width
        return self._cells[start : start + self._width]

    def rows(self) -> Iterator[list[T]]:
        """Iterate over copies of all rows, top to bottom."""
        for index in range(self._height):
            yield self.row(index)

    def map(self, transform: Callable[[T], U]) -> Grid[U]:
        """Return a new grid of the same shape with ``transform`` applied to every cell."""
        return Grid._from_cells(self._width, self._height, [transform(c) for c in self._cells])

    def insert_row(self, row: Sequence[T], at: int) -> None:
        """Insert ``row`` before row index ``at``, shifting later rows down.

        Args:
            row: Exactly ``width`` cells.
            at: Insertion index in ``[0, height]``.
        """
        if len(row) != self._width:
            raise ValueError(f"Row has {len(row)} cells, grid width is {self._width}")
        if not 0 <= at <= self._height:
            raise IndexError(f"Insertion index {at} out of range for height {self._height}")
        start = at * self._width
        self._cells[start:start] = list(row)
        self._height += 1

    def inserting_row(self, row: Sequence[T], at: int) -> Grid[T]:
        """Copy-producing form of :meth:`insert_row`."""
        copy = Grid._from_cells(self._width, self._height, list(self._cells))
        copy.insert_row(row, at)
        return copy

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self._width == other._width
            and self._height == other._height
            and self._cells == other._cells
        )

    def __repr__(self) -> str:
        return f"Grid(width={self._width}, height={self._height})"
