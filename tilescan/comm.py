"""In-process message passing between ranks running on threads.

``run_world`` starts one thread per rank and hands each a ``Communicator``
offering point-to-point messages, broadcast, gather, barrier and split.
``CartesianGrid`` arranges the ranks of a communicator in a 2D grid with
row and column sub-communicators.
"""

from __future__ import annotations

import copy
import itertools
import threading
from collections import defaultdict, deque
from typing import Any, Callable, Deque, Dict, Hashable, List, Optional, Tuple

_BCAST_TAG = -1
_GATHER_TAG = -2

_Key = Tuple[int, int, int, int]


class _WorldAborted(RuntimeError):
    """Raised in ranks still running after another rank failed."""


class _World:
    """Shared mailboxes and failure state for one group of ranks."""

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._mailboxes: Dict[_Key, Deque[Any]] = defaultdict(deque)
        self._contexts = itertools.count(1)
        self.error: Optional[BaseException] = None

    def new_context(self) -> int:
        with self._cond:
            return next(self._contexts)

    def post(self, key: _Key, payload: Any) -> None:
        with self._cond:
            self._mailboxes[key].append(payload)
            self._cond.notify_all()

    def take(self, key: _Key) -> Any:
        with self._cond:
            while True:
                if self.error is not None:
                    raise _WorldAborted("another rank failed")
                box = self._mailboxes.get(key)
                if box:
                    return box.popleft()
                self._cond.wait()

    def abort(self, error: BaseException) -> None:
        with self._cond:
            if self.error is None:
                self.error = error
            self._cond.notify_all()


class Communicator:
    """A group of ranks that can exchange messages; each rank holds its own instance."""

    def __init__(self, world: _World, context: int, rank: int, size: int) -> None:
        self._world = world
        self._context = context
        self.rank = rank
        self.size = size

    def _check_rank(self, other: int, what: str) -> None:
        if not 0 <= other < self.size:
            raise ValueError(f"{what} rank {other} outside communicator of size {self.size}")

    def _post(self, data: Any, dest: int, tag: int) -> None:
        self._world.post((self._context, self.rank, dest, tag), copy.deepcopy(data))

    def _take(self, source: int, tag: int) -> Any:
        return self._world.take((self._context, source, self.rank, tag))

    def send(self, data: Any, dest: int, tag: int = 0) -> None:
        """Send a copy of ``data`` to ``dest``; messages arrive in order."""
        self._check_rank(dest, "destination")
        if tag < 0:
            raise ValueError("tags must not be negative")
        self._post(data, dest, tag)

    def recv(self, source: int, tag: int = 0) -> Any:
        """Block until a message from ``source`` with ``tag`` arrives and return it."""
        self._check_rank(source, "source")
        if tag < 0:
            raise ValueError("tags must not be negative")
        return self._take(source, tag)

    def bcast(self, data: Any, root: int = 0) -> Any:
        """Return the root's ``data`` on every rank."""
        self._check_rank(root, "root")
        if self.rank == root:
            for dest in range(self.size):
                if dest != root:
                    self._post(data, dest, _BCAST_TAG)
            return data
        return self._take(root, _BCAST_TAG)

    def gather(self, value: Any, root: int = 0) -> Optional[List[Any]]:
        """Collect one value per rank at ``root`` in rank order; others get None."""
        self._check_rank(root, "root")
        if self.rank != root:
            self._post(value, root, _GATHER_TAG)
            return None
        return [
            value if source == root else self._take(source, _GATHER_TAG)
            for source in range(self.size)
        ]

    def barrier(self) -> None:
        """Return only once every rank has entered the barrier."""
        self.gather(None, 0)
        self.bcast(None, 0)

    def split(self, color: Optional[Hashable], key: int = 0) -> Optional["Communicator"]:
        """Partition ranks by ``color``, ordered by ``key`` then old rank.

        A ``None`` color leaves the rank out and returns None to it.
        """
        entries = self.gather((color, key, self.rank), 0)
        layout: Optional[Dict[int, Tuple[int, int, int]]] = None
        if self.rank == 0:
            groups: Dict[Hashable, List[Tuple[int, int]]] = {}
            for entry_color, entry_key, entry_rank in entries:
                if entry_color is not None:
                    groups.setdefault(entry_color, []).append((entry_key, entry_rank))
            layout = {}
            for members in groups.values():
                context = self._world.new_context()
                ordered = [old_rank for _, old_rank in sorted(members)]
                for new_rank, old_rank in enumerate(ordered):
                    layout[old_rank] = (context, new_rank, len(ordered))
        layout = self.bcast(layout, 0)
        placement = layout.get(self.rank)
        if placement is None:
            return None
        context, new_rank, size = placement
        return Communicator(self._world, context, new_rank, size)


class CartesianGrid:
    """Row-major 2D arrangement of the ranks of a communicator."""

    def __init__(self, comm: Communicator, num_rows: int, num_cols: int) -> None:
        if num_rows <= 0 or num_cols <= 0:
            raise ValueError("grid dimensions must be positive")
        if num_rows * num_cols != comm.size:
            raise ValueError(
                f"a {num_rows} x {num_cols} grid needs {num_rows * num_cols} ranks, "
                f"communicator has {comm.size}"
            )
        self.rank = comm.rank
        self.num_rows = num_rows
        self.num_cols = num_cols
        self.proc_row, self.proc_col = divmod(comm.rank, num_cols)
        self.cart_comm = comm.split(0, comm.rank)
        self.row_comm = self.cart_comm.split(self.proc_row, self.proc_col)
        self.col_comm = self.cart_comm.split(self.proc_col, self.proc_row)

    @property
    def size(self) -> int:
        return self.num_rows * self.num_cols


def run_world(size: int, target: Callable[[Communicator], Any]) -> List[Any]:
    """Run ``target(comm)`` on ``size`` ranks at once and return results by rank.

    If any rank raises, the remaining ranks are stopped and the first
    exception is raised here.
    """
    if size < 1:
        raise ValueError("a world needs at least one rank")
    world = _World()
    context = world.new_context()
    results: List[Any] = [None] * size

    def run(rank: int) -> None:
        try:
            results[rank] = target(Communicator(world, context, rank, size))
        except _WorldAborted:
            pass
        except BaseException as exc:  # noqa: BLE001 - re-raised by the caller
            world.abort(exc)

    threads = [
        threading.Thread(target=run, args=(rank,), name=f"rank-{rank}", daemon=True)
        for rank in range(size)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    if world.error is not None:
        raise world.error
    return results