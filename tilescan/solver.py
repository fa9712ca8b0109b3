"""Prefix-sum solvers: the common interface and the message-passing backend."""

from __future__ import annotations

import abc
import time
from typing import Callable, Optional

from tilescan.block_matrix import PrefixSumBlockMatrix
from tilescan.comm import CartesianGrid, Communicator
from tilescan.distributor import TileInfoDistributor
from tilescan.matrix_init import generate_random_matrix
from tilescan.program_args import ProgramArgs
from tilescan.time_utils import TimeIntervals

_INTERVAL_NAMES = ("warmup", "total", "data_distribute", "compute", "data_gather")


class PrefixSumSolver(abc.ABC):
    """Interface of a 2D prefix-sum backend."""

    @abc.abstractmethod
    def populate_full_matrix(self) -> None:
        """Fill the full matrix with the run's random input."""

    @abc.abstractmethod
    def compute(self) -> None:
        """Replace the full matrix by its 2D prefix sum."""

    @abc.abstractmethod
    def print_full_matrix(self, title: str = "") -> None:
        """Print a title line followed by the full matrix."""

    @abc.abstractmethod
    def print_lower_right_element(self, title: str = "") -> None:
        """Print a title line followed by the last matrix element."""

    @abc.abstractmethod
    def start_timer(self) -> None:
        """Mark the start of the timed run."""

    @abc.abstractmethod
    def stop_timer(self) -> None:
        """Mark the end of the timed run."""

    @abc.abstractmethod
    def report_time(self) -> Optional[str]:
        """Print a timing report."""


def _format_report(rows) -> str:
    starts = [row[0] for row in rows]
    ends = [row[1] for row in rows]
    wall_ms = (max(ends) - min(starts)) * 1000.0
    lines = [
        "\n\n=== Runtime Report ===\n",
        f"Total runtime (wall clock): {wall_ms:g} ms\n",
        "\n=== Per-Rank Timing Breakdown (ms) ===\n",
        f"{'Rank':>8}{'Total':>15}{'Distribute':>15}{'Compute':>15}{'Gather':>15}\n",
        "-" * 68 + "\n",
    ]
    for rank, (_, _, total, distribute, compute, gather) in enumerate(rows):
        values = "".join(
            f"{seconds * 1000.0:>15.4f}" for seconds in (total, distribute, compute, gather)
        )
        lines.append(f"{rank:>8}{values}\n")
    lines.append("\n")
    return "".join(lines)


class MpiPrefixSumSolver(PrefixSumSolver):
    """Tiled prefix sum spread over the ranks of a communicator.

    Rank 0 owns the full matrix; each rank owns one tile of a grid whose
    shape is the tile grid of ``program_args``.
    """

    def __init__(
        self,
        program_args: ProgramArgs,
        comm: Communicator,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.program_args = program_args
        self.comm = comm
        grid_dim = program_args.tile_grid_dim()
        self.grid = CartesianGrid(comm, grid_dim[0], grid_dim[1])
        self.full_matrix = PrefixSumBlockMatrix(0, 0)
        self.assigned_matrix = PrefixSumBlockMatrix(
            program_args.tile_dim[0], program_args.tile_dim[1]
        )
        self._time_intervals = TimeIntervals(clock)
        self.populate_full_matrix()
        self._time_intervals.attach_intervals(_INTERVAL_NAMES)

    @property
    def rank(self) -> int:
        return self.comm.rank

    def populate_full_matrix(self) -> None:
        if self.rank != 0:
            return
        rows, cols = self.program_args.full_matrix_dim[0], self.program_args.full_matrix_dim[1]
        self.full_matrix = PrefixSumBlockMatrix(
            rows, cols, generate_random_matrix(rows, cols, self.program_args.seed)
        )

    def _distributor(self) -> TileInfoDistributor:
        return TileInfoDistributor(self.assigned_matrix, self.grid)

    def distribute_sub_matrices(self) -> None:
        self._distributor().distribute_full_matrix(self.full_matrix)

    def compute_and_share_assigned(self) -> None:
        self.assigned_matrix.compute_local_prefix_sum()
        distributor = self._distributor()
        distributor.share_right_edges()
        distributor.share_bottom_edges()

    def collect_sub_matrices(self) -> None:
        self._distributor().reconstruct_full_matrix(self.full_matrix)

    def compute(self) -> None:
        intervals = self._time_intervals
        intervals.record_start("data_distribute")
        self.distribute_sub_matrices()
        intervals.record_end("data_distribute")

        intervals.record_start("compute")
        self.compute_and_share_assigned()
        intervals.record_end("compute")

        intervals.record_start("data_gather")
        self.collect_sub_matrices()
        intervals.record_end("data_gather")

    def print_full_matrix(self, title: str = "") -> None:
        if self.rank == 0:
            print(title)
            self.full_matrix.print()

    def print_lower_right_element(self, title: str = "") -> None:
        if self.rank == 0:
            print(title)
            matrix = self.full_matrix
            print(matrix.value_at(matrix.num_rows - 1, matrix.num_cols - 1), end="")

    def print_assigned_matrix(self) -> None:
        self.assigned_matrix.print()

    def start_timer(self) -> None:
        self.comm.barrier()
        self._time_intervals.record_start("total")

    def stop_timer(self) -> None:
        self._time_intervals.record_end("total")

    def report_time(self) -> Optional[str]:
        """Gather timings at rank 0, print the report there and return it.

        Other ranks return None.
        """
        intervals = self._time_intervals
        local = (
            intervals.start_time("total"),
            intervals.end_time("total"),
            intervals.elapsed_time("total"),
            intervals.elapsed_time("data_distribute"),
            intervals.elapsed_time("compute"),
            intervals.elapsed_time("data_gather"),
        )
        rows = self.comm.gather(local, 0)
        if rows is None:
            return None
        report = _format_report(rows)
        print(report, end="")
        return report