"""Run configuration: matrix and tile geometry, backend and options."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from tilescan.logger import LogLevel


@dataclass(frozen=True)
class ArraySize2D:
    """Row and column extent of a 2D array."""

    num_rows: int
    num_cols: int


@dataclass
class ProgramArgs:
    """Validated settings for one prefix-sum run."""

    seed: int = 1234
    backend: str = "mpi"
    log_level: LogLevel = LogLevel.WARNING
    full_matrix_dim: Sequence[int] = (4, 4)
    tile_dim: Sequence[int] = (4, 4)
    sub_tile_dim: Optional[Sequence[int]] = None
    cuda_kernel: Optional[str] = None
    orig_argv: Optional[Sequence[str]] = None
    print_full_array: bool = False

    def __post_init__(self) -> None:
        self.full_matrix_dim = tuple(self.full_matrix_dim)
        self.tile_dim = tuple(self.tile_dim)
        if self.sub_tile_dim is not None:
            self.sub_tile_dim = tuple(self.sub_tile_dim)
        if self.orig_argv is not None:
            self.orig_argv = tuple(self.orig_argv)

        if len(self.full_matrix_dim) != len(self.tile_dim):
            raise ValueError(
                "full_matrix_dim and tile_dim must have the same number of dimensions"
            )

        if self.backend != "cuda" or self.cuda_kernel != "accum":
            for axis, (full, tile) in enumerate(zip(self.full_matrix_dim, self.tile_dim)):
                if tile == 0 or full % tile != 0:
                    raise ValueError(
                        f"full_matrix_dim[{axis}] is not divisible by tile_dim[{axis}]"
                    )

    @property
    def orig_argc(self) -> int:
        """Number of original command-line arguments, 0 when none were kept."""
        return 0 if self.orig_argv is None else len(self.orig_argv)

    def full_matrix_size_1d(self) -> int:
        """Total number of elements in the full matrix."""
        return math.prod(self.full_matrix_dim)

    def full_matrix_size_2d(self) -> ArraySize2D:
        return ArraySize2D(self.full_matrix_dim[0], self.full_matrix_dim[1])

    def tile_size_2d(self) -> ArraySize2D:
        return ArraySize2D(self.tile_dim[0], self.tile_dim[1])

    def sub_tile_size_2d(self) -> ArraySize2D:
        """Sub-tile extent; raises ValueError when no sub-tile is configured."""
        if self.sub_tile_dim is None:
            raise ValueError("sub_tile_dim is not set")
        return ArraySize2D(self.sub_tile_dim[0], self.sub_tile_dim[1])

    def tile_grid_dim(self) -> Tuple[int, ...]:
        """Number of tiles along each axis."""
        return tuple(full // tile for full, tile in zip(self.full_matrix_dim, self.tile_dim))

    def elements_per_tile(self) -> int:
        return math.prod(self.tile_dim)

    def describe(self) -> str:
        """Human-readable summary of the matrix and tile dimensions."""
        return (
            "ProgramArgs:\n"
            f"Full Matrix Dimensions: {self.full_matrix_dim[0]} x {self.full_matrix_dim[1]}\n"
            f"Tile Dimensions: {self.tile_dim[0]} x {self.tile_dim[1]}"
        )