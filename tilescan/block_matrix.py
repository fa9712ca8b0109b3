"""Dense row-major integer matrix with the operations of a tiled 2D prefix sum."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from itertools import accumulate
from typing import Dict, List, Mapping, Optional, Sequence


def value_at(array: Sequence[int], row: int, col: int, stride: int) -> int:
    """Return ``array[row * stride + col]``, raising IndexError when out of range."""
    index = row * stride + col
    if row < 0 or col < 0 or index >= len(array):
        raise IndexError(f"position ({row}, {col}) with stride {stride} is out of range")
    return array[index]


def format_local_matrix(rank: int, local_n: int, local_mat: Sequence[int]) -> str:
    """Render a square ``local_n`` x ``local_n`` block labelled with its rank."""
    lines = [f"rank {rank}: \n"]
    for row in range(local_n):
        values = local_mat[row * local_n:(row + 1) * local_n]
        lines.append("".join(f"\t{value}" for value in values) + "\n")
    return "".join(lines)


@dataclass
class PrefixSumBlockMatrix:
    """A block of the global matrix, stored row-major in ``data``."""

    num_rows: int = 0
    num_cols: int = 0
    data: Optional[List[int]] = field(default=None)

    def __post_init__(self) -> None:
        if self.num_rows < 0 or self.num_cols < 0:
            raise ValueError("matrix dimensions must not be negative")
        size = self.num_rows * self.num_cols
        if self.data is None:
            self.data = [0] * size
        else:
            self.data = list(self.data)
            if len(self.data) != size:
                raise ValueError(
                    f"data holds {len(self.data)} values, expected {size} "
                    f"for a {self.num_rows} x {self.num_cols} matrix"
                )

    @classmethod
    def square(cls, dim: int) -> "PrefixSumBlockMatrix":
        """A zero-filled ``dim`` x ``dim`` matrix."""
        return cls(dim, dim)

    def _index(self, row: int, col: int) -> int:
        if not (0 <= row < self.num_rows and 0 <= col < self.num_cols):
            raise IndexError(
                f"position ({row}, {col}) outside {self.num_rows} x {self.num_cols} matrix"
            )
        return row * self.num_cols + col

    def _row(self, row: int) -> List[int]:
        start = row * self.num_cols
        return self.data[start:start + self.num_cols]

    def value_at(self, row: int, col: int) -> int:
        return self.data[self._index(row, col)]

    def set_value(self, row: int, col: int, value: int) -> None:
        self.data[self._index(row, col)] = value

    def compute_local_prefix_sum(self) -> None:
        """Replace every element by the sum of all elements above and left of it."""
        rows = [list(accumulate(self._row(r))) for r in range(self.num_rows)]
        for r in range(1, len(rows)):
            rows[r] = [current + above for current, above in zip(rows[r], rows[r - 1])]
        self.data[:] = [value for row in rows for value in row]

    def sub_divide(self, tiles_per_row: int, tiles_per_col: int) -> Dict[int, List[int]]:
        """Split into a ``tiles_per_row`` x ``tiles_per_col`` grid of tiles.

        Returns a mapping from row-major tile index to that tile's values in
        row-major order.
        """
        if tiles_per_row <= 0 or tiles_per_col <= 0:
            raise ValueError("tile counts must be positive")
        if self.num_rows % tiles_per_row != 0 or self.num_cols % tiles_per_col != 0:
            raise ValueError(
                "Matrix dimensions must be divisible by tiles_per_row and tiles_per_col"
            )
        rows_per_tile = self.num_rows // tiles_per_row
        cols_per_tile = self.num_cols // tiles_per_col

        tiles: Dict[int, List[int]] = {}
        for tile_row in range(tiles_per_row):
            for tile_col in range(tiles_per_col):
                values: List[int] = []
                for row in range(tile_row * rows_per_tile, (tile_row + 1) * rows_per_tile):
                    start = row * self.num_cols + tile_col * cols_per_tile
                    values.extend(self.data[start:start + cols_per_tile])
                tiles[tile_row * tiles_per_col + tile_col] = values
        return tiles

    @staticmethod
    def combine(
        tiles: Mapping[int, "PrefixSumBlockMatrix"],
        tiles_per_row: int,
        tiles_per_col: int,
        result: "PrefixSumBlockMatrix",
    ) -> None:
        """Write each tile into its place in ``result``."""
        if tiles_per_row <= 0 or tiles_per_col <= 0:
            raise ValueError("tile counts must be positive")
        block_rows = result.num_rows // tiles_per_row
        block_cols = result.num_cols // tiles_per_col

        for tile_index, block in tiles.items():
            tile_row, tile_col = divmod(tile_index, tiles_per_col)
            first_row = tile_row * block_rows
            first_col = tile_col * block_cols
            if (
                first_row + block.num_rows > result.num_rows
                or first_col + block.num_cols > result.num_cols
            ):
                raise IndexError(f"tile {tile_index} does not fit in the result matrix")
            for i in range(block.num_rows):
                start = (first_row + i) * result.num_cols + first_col
                result.data[start:start + block.num_cols] = block._row(i)

    def extract_right_edge(self) -> List[int]:
        """Values of the last column, top to bottom."""
        return [self.value_at(row, self.num_cols - 1) for row in range(self.num_rows)]

    def extract_bottom_edge(self) -> List[int]:
        """Values of the last row, left to right."""
        return [self.value_at(self.num_rows - 1, col) for col in range(self.num_cols)]

    def add_rowwise_offset(self, offsets: Sequence[int]) -> None:
        """Add ``offsets[row]`` to every element of each row."""
        if len(offsets) < self.num_rows:
            raise ValueError("one offset per row is required")
        self.data[:] = [
            value + offsets[index // self.num_cols] for index, value in enumerate(self.data)
        ]

    def add_colwise_offset(self, offsets: Sequence[int]) -> None:
        """Add ``offsets[col]`` to every element of each column."""
        if len(offsets) < self.num_cols:
            raise ValueError("one offset per column is required")
        self.data[:] = [
            value + offsets[index % self.num_cols] for index, value in enumerate(self.data)
        ]

    def format(self) -> str:
        """Tab-separated rows, each value followed by a tab, one line per row."""
        return "".join(
            "".join(f"{value}\t" for value in self._row(row)) + "\n"
            for row in range(self.num_rows)
        )

    def print(self) -> None:
        """Write the formatted matrix to standard output."""
        out = sys.stdout
        out.write(self.format())
        out.flush()