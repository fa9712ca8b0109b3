"""Command-line entry point for the tiled 2D prefix sum."""

from __future__ import annotations

import argparse
import math
import sys
from typing import Optional, Sequence

from tilescan.comm import run_world
from tilescan.dispatch import create_solver, register_all_solvers
from tilescan.logger import LogLevel, level_from_string, log, set_log_level
from tilescan.program_args import ProgramArgs


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tilescan", description="Parallel prefix sum runner"
    )
    parser.add_argument("-r", "--seed", type=int, default=1234, help="Random seed")
    parser.add_argument(
        "-b", "--backend", choices=("mpi", "cuda"), default="mpi",
        help="Backend to use (mpi or cuda)",
    )
    parser.add_argument(
        "-L", "--log-level", choices=("off", "info", "warning", "error"),
        default="warning", help="Logging level",
    )
    parser.add_argument(
        "-f", "--full-matrix-dim", type=int, nargs=2, default=[4, 4],
        metavar=("ROWS", "COLS"), help="Full matrix dimensions (rows cols)",
    )
    parser.add_argument(
        "-t", "--tile-dim", type=int, nargs=2, default=[4, 4],
        metavar=("ROWS", "COLS"), help="Tile dimensions (rows cols)",
    )
    parser.add_argument(
        "-k", "--kernel", choices=("single_tile", "multi_tile"), default=None,
        help="CUDA kernel type (single_tile, multi_tile)",
    )
    parser.add_argument(
        "-s", "--sub-tile-dim", type=int, nargs=2, default=None,
        metavar=("ROWS", "COLS"), help="Sub-tile dimensions (rows cols, CUDA only)",
    )
    parser.add_argument(
        "-p", "--print-full-matrix", action="store_true",
        help="Print the full matrix after computation",
    )
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> ProgramArgs:
    """Parse command-line arguments into a validated ProgramArgs.

    Invalid arguments exit through argparse with status 2.
    """
    if argv is None:
        argv = sys.argv[1:]
    argv = list(argv)
    parser = _build_parser()
    ns = parser.parse_args(argv)

    kernel = ns.kernel
    sub_tile_dim = ns.sub_tile_dim
    if ns.backend != "cuda":
        if kernel is not None:
            print("[Warning] Ignoring --kernel because backend is not 'cuda'.",
                  file=sys.stderr)
        if sub_tile_dim is not None:
            print("[Warning] Ignoring --sub-tile-dim because backend is not 'cuda'.",
                  file=sys.stderr)
        kernel = None
        sub_tile_dim = None
    else:
        if kernel is None:
            kernel = "single_tile"
        if sub_tile_dim is None:
            sub_tile_dim = [2, 2]

    try:
        return ProgramArgs(
            seed=ns.seed,
            backend=ns.backend,
            log_level=level_from_string(ns.log_level),
            full_matrix_dim=ns.full_matrix_dim,
            tile_dim=ns.tile_dim,
            sub_tile_dim=sub_tile_dim,
            cuda_kernel=kernel,
            orig_argv=argv,
            print_full_array=ns.print_full_matrix,
        )
    except ValueError as exc:
        parser.error(str(exc))
        raise  # parser.error never returns


def _log_options(args: ProgramArgs) -> None:
    log(LogLevel.INFO, "Parsed options:")
    log(LogLevel.INFO, f"  rows per tile : {args.tile_dim[0]}")
    log(LogLevel.INFO, f"  cols per tile : {args.tile_dim[1]}")
    log(LogLevel.INFO, f"  seed    : {args.seed}")
    log(LogLevel.INFO, f"  backend : {args.backend}")
    log(
        LogLevel.INFO,
        f"  full matrix dim : {args.full_matrix_dim[0]} x {args.full_matrix_dim[1]}",
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run one prefix-sum computation and print its result and timings."""
    args = parse_args(argv)
    set_log_level(args.log_level)
    _log_options(args)

    register_all_solvers()

    def run_rank(comm) -> None:
        solver = create_solver(args, comm)
        if args.print_full_array:
            solver.print_full_matrix("Starting matrix")
        solver.start_timer()
        solver.compute()
        solver.stop_timer()
        if args.print_full_array:
            solver.print_full_matrix("After prefix sum computation")
        else:
            solver.print_lower_right_element(
                "Lower right corner element after prefix sum:"
            )
        solver.report_time()

    try:
        run_world(math.prod(args.tile_grid_dim()), run_rank)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())