"""Registry that maps backend names to prefix-sum solver builders."""

from __future__ import annotations

from typing import Callable, Dict, Optional

from tilescan.comm import Communicator
from tilescan.program_args import ProgramArgs
from tilescan.solver import MpiPrefixSumSolver, PrefixSumSolver

SolverBuilder = Callable[[ProgramArgs, Optional[Communicator]], PrefixSumSolver]

_registry: Dict[str, SolverBuilder] = {}


def register_backend(name: str, builder: SolverBuilder) -> None:
    """Register ``builder`` under ``name``, replacing any earlier builder."""
    _registry[name] = builder


def create_solver(args: ProgramArgs, comm: Optional[Communicator]) -> PrefixSumSolver:
    """Build the solver for ``args.backend``; unknown backends raise ValueError."""
    try:
        builder = _registry[args.backend]
    except KeyError:
        raise ValueError(f"Unsupported backend: {args.backend}") from None
    return builder(args, comm)


def _build_mpi_solver(args: ProgramArgs, comm: Optional[Communicator]) -> PrefixSumSolver:
    if comm is None:
        raise ValueError("the mpi backend needs a communicator")
    return MpiPrefixSumSolver(args, comm)


def register_all_solvers() -> None:
    """Register every backend this package provides."""
    register_backend("mpi", _build_mpi_solver)