"""Moves tiles and tile edges between the ranks of a Cartesian grid."""

from __future__ import annotations

from typing import Dict, List, Sequence

from tilescan.block_matrix import PrefixSumBlockMatrix
from tilescan.comm import CartesianGrid


class TileInfoDistributor:
    """Handles the exchanges that turn per-tile prefix sums into a global one.

    ``tile`` is this rank's block and is updated in place.
    """

    def __init__(self, tile: PrefixSumBlockMatrix, grid: CartesianGrid) -> None:
        self._tile = tile
        self._grid = grid

    def _fill_tile(self, values: Sequence[int]) -> None:
        if len(values) != len(self._tile.data):
            raise ValueError(
                f"received {len(values)} values for a tile of "
                f"{self._tile.num_rows} x {self._tile.num_cols}"
            )
        self._tile.data[:] = values

    def distribute_full_matrix(self, full_matrix: PrefixSumBlockMatrix) -> None:
        """Scatter the tiles of ``full_matrix`` (held by rank 0) to every rank."""
        grid = self._grid
        comm = grid.cart_comm
        if grid.rank == 0:
            sub_matrices = full_matrix.sub_divide(grid.num_rows, grid.num_cols)
            for index, values in sub_matrices.items():
                if index == 0:
                    self._fill_tile(values)
                else:
                    comm.send(values, index)
        else:
            self._fill_tile(comm.recv(0))

    def reconstruct_full_matrix(self, full_matrix: PrefixSumBlockMatrix) -> None:
        """Gather every rank's tile into ``full_matrix`` on rank 0."""
        grid = self._grid
        comm = grid.cart_comm
        tile = self._tile
        if grid.rank != 0:
            comm.send(tile.data, 0)
            return

        tiles: Dict[int, PrefixSumBlockMatrix] = {
            0: PrefixSumBlockMatrix(tile.num_rows, tile.num_cols, tile.data)
        }
        for source in range(1, grid.size):
            tiles[source] = PrefixSumBlockMatrix(
                tile.num_rows, tile.num_cols, comm.recv(source)
            )
        PrefixSumBlockMatrix.combine(tiles, grid.num_rows, grid.num_cols, full_matrix)

    def share_right_edges(self) -> None:
        """Add the right edges of all tiles to the left of this one, row by row."""
        grid = self._grid
        accum: List[int] = [0] * self._tile.num_rows
        for sender_col in range(grid.num_cols - 1):
            edge = self._tile.extract_right_edge() if sender_col == grid.proc_col else None
            edge = grid.row_comm.bcast(edge, sender_col)
            if grid.proc_col > sender_col:
                accum = [total + value for total, value in zip(accum, edge)]
        self._tile.add_rowwise_offset(accum)

    def share_bottom_edges(self) -> None:
        """Add the bottom edges of all tiles above this one, column by column."""
        grid = self._grid
        accum: List[int] = [0] * self._tile.num_cols
        for sender_row in range(grid.num_rows - 1):
            edge = self._tile.extract_bottom_edge() if sender_row == grid.proc_row else None
            edge = grid.col_comm.bcast(edge, sender_row)
            if grid.proc_row > sender_row:
                accum = [total + value for total, value in zip(accum, edge)]
        self._tile.add_colwise_offset(accum)