import threading

import pytest

from tilescan.comm import CartesianGrid, run_world


def test_environment_ranks_and_size():
    results = run_world(4, lambda comm: (comm.rank, comm.size))
    assert results == [(0, 4), (1, 4), (2, 4), (3, 4)]


def test_run_world_needs_a_rank():
    with pytest.raises(ValueError):
        run_world(0, lambda comm: None)


def test_cartesian_grid_default_init():
    def body(comm):
        grid = CartesianGrid(comm, 2, 2)
        return grid.num_rows, grid.num_cols, grid.size, grid.rank, grid.proc_row, grid.proc_col

    for rank, (rows, cols, size, grid_rank, proc_row, proc_col) in enumerate(run_world(4, body)):
        assert (rows, cols, size) == (2, 2, 4)
        assert grid_rank == rank
        assert proc_row == rank // 2
        assert proc_col == rank % 2


def test_cartesian_grid_sub_communicators():
    def body(comm):
        grid = CartesianGrid(comm, 2, 3)
        return (
            grid.cart_comm.rank,
            grid.row_comm.rank,
            grid.row_comm.size,
            grid.col_comm.rank,
            grid.col_comm.size,
        )

    results = run_world(6, body)
    for rank, (cart_rank, row_rank, row_size, col_rank, col_size) in enumerate(results):
        assert cart_rank == rank
        assert row_rank == rank % 3
        assert row_size == 3
        assert col_rank == rank // 3
        assert col_size == 2


def test_row_comm_broadcast_stays_in_row():
    def body(comm):
        grid = CartesianGrid(comm, 2, 2)
        return grid.row_comm.bcast(comm.rank * 10 if grid.proc_col == 0 else None, root=0)

    assert run_world(4, body) == [0, 0, 20, 20]


def test_grid_with_wrong_rank_count_raises():
    with pytest.raises(ValueError):
        run_world(3, lambda comm: CartesianGrid(comm, 2, 2))


def test_send_and_recv_in_order():
    def body(comm):
        if comm.rank == 0:
            comm.send([1, 2], dest=1)
            comm.send([3], dest=1)
            return None
        return comm.recv(source=0), comm.recv(source=0)

    assert run_world(2, body)[1] == ([1, 2], [3])


def test_send_copies_data():
    def body(comm):
        if comm.rank == 0:
            payload = [1, 2, 3]
            comm.send(payload, dest=1)
            payload[0] = 99
            comm.barrier()
            return payload
        comm.barrier()
        return comm.recv(source=0)

    assert run_world(2, body) == [[99, 2, 3], [1, 2, 3]]


def test_tags_are_separate_channels():
    def body(comm):
        if comm.rank == 0:
            comm.send("first", dest=1, tag=5)
            comm.send("second", dest=1, tag=7)
            return None
        return comm.recv(source=0, tag=7), comm.recv(source=0, tag=5)

    assert run_world(2, body)[1] == ("second", "first")


def test_bcast_from_nonzero_root():
    def body(comm):
        return comm.bcast("hello" if comm.rank == 2 else None, root=2)

    assert run_world(3, body) == ["hello", "hello", "hello"]


def test_gather_at_root():
    results = run_world(4, lambda comm: comm.gather(comm.rank * comm.rank, root=1))
    assert results == [None, [0, 1, 4, 9], None, None]


def test_barrier_waits_for_everyone():
    arrived = []
    lock = threading.Lock()

    def body(comm):
        with lock:
            arrived.append(comm.rank)
        comm.barrier()
        with lock:
            return len(arrived)

    assert run_world(5, body) == [5, 5, 5, 5, 5]


def test_split_orders_by_key_and_drops_none():
    def body(comm):
        color = None if comm.rank == 3 else comm.rank % 2
        sub = comm.split(color, key=-comm.rank)
        return None if sub is None else (sub.rank, sub.size)

    assert run_world(5, body) == [(2, 3), (0, 1), (1, 3), None, (0, 3)]


def test_invalid_destination_raises():
    with pytest.raises(ValueError):
        run_world(2, lambda comm: comm.send(1, dest=2))


def test_error_in_one_rank_stops_the_world():
    def body(comm):
        if comm.rank == 1:
            raise KeyError("boom")
        return comm.recv(source=1)

    with pytest.raises(KeyError):
        run_world(3, body)