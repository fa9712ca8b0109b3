# tilescan

`tilescan` computes the two-dimensional inclusive prefix sum (summed-area
table) of an integer matrix. The matrix is split into tiles, and each tile
belongs to one rank of a Cartesian grid of ranks. Every rank scans its own
tile. The ranks then broadcast the right and bottom edges of their tiles
along the grid rows and columns, so that each tile adds the offsets of the
tiles to its left and above it. Rank 0 scatters the starting matrix and
gathers the finished tiles back into the full result.

The ranks run as threads inside one Python process and talk through an
in-process communicator (`tilescan.comm.Communicator`) with send, receive,
broadcast, barrier, gather and split. The package uses only the standard
library.

## Installation

```
pip install .
```

## Command line

```
tilescan [-r SEED] [-b BACKEND] [-L LEVEL] [-f ROWS COLS] [-t ROWS COLS] [-p]
```

| Option | Meaning | Default |
| --- | --- | --- |
| `-r`, `--seed` | Random seed for the starting matrix | `1234` |
| `-b`, `--backend` | Solver backend, `mpi` or `cuda` (see below) | `mpi` |
| `-L`, `--log-level` | `off`, `info`, `warning` or `error` | `warning` |
| `-f`, `--full-matrix-dim` | Full matrix size (rows cols) | `4 4` |
| `-t`, `--tile-dim` | Size of one tile (rows cols) | `4 4` |
| `-k`, `--kernel` | `single_tile` or `multi_tile`; only kept with `-b cuda` | none |
| `-s`, `--sub-tile-dim` | Sub-tile size (rows cols); only kept with `-b cuda` | none |
| `-p`, `--print-full-matrix` | Print the matrix before and after the scan | off |

Each full matrix dimension must be divisible by the matching tile dimension.
If it is not, the command stops with a usage error (exit status 2). The
number of ranks is the number of tiles:
(rows / tile rows) × (cols / tile cols).

With `-L info` the parsed options are logged before the run.

Example: an 8×8 matrix split into four 4×4 tiles, with both matrices printed:

```
tilescan -f 8 8 -t 4 4 -p --seed 42
```

Without `-p`, rank 0 prints only the lower-right element of the result, which
is the sum of the whole matrix. Rank 0 then prints a timing report: the
wall-clock runtime and, for each rank, the total, distribute, compute and
gather times in milliseconds.

## Library use

```python
from tilescan.block_matrix import PrefixSumBlockMatrix

m = PrefixSumBlockMatrix(2, 3, [1, 2, 3, 4, 5, 6])
m.compute_local_prefix_sum()
print(m.data)   # [1, 3, 6, 5, 12, 21]
```

A run of the distributed solver on simulated ranks:

```python
from tilescan.comm import run_world
from tilescan.program_args import ProgramArgs
from tilescan.solver import MpiPrefixSumSolver

args = ProgramArgs(full_matrix_dim=(6, 6), tile_dim=(3, 3))

def run(comm):
    solver = MpiPrefixSumSolver(args, comm)
    solver.compute()
    return solver.full_matrix.data if comm.rank == 0 else None

result = run_world(4, run)[0]
```

Other pieces:

- `tilescan.matrix_init.generate_random_matrix` draws the starting matrices
  from a Mersenne Twister (`Mt19937`), so a given seed always gives the same
  matrix. Integer bounds (default −10 to 10) give integers in `[low, high]`.
- `tilescan.program_args.ProgramArgs` holds and checks a run's settings.
- `tilescan.dispatch.register_all_solvers` and
  `tilescan.dispatch.create_solver` build a solver by backend name.
- `tilescan.time_utils.TimeIntervals` records named start/end intervals.
- `tilescan.logger` offers a small level-filtered logger.

## What it does not do

Only the `mpi` backend, which runs on the in-process simulated ranks, has a
solver. The command line accepts `-b cuda` together with `--kernel` and
`--sub-tile-dim`, but no GPU solver is registered. Such a run prints
`error: Unsupported backend: cuda` and exits with status 1. The ranks are
threads of one process; nothing runs across several processes or machines.