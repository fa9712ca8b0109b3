import itertools

import pytest

from tilescan.matrix_init import Mt19937, generate_random_matrix


def test_mt19937_default_seed_first_output():
    assert Mt19937().next_u32() == 3499211612


def test_mt19937_default_seed_ten_thousandth_output():
    rng = Mt19937()
    value = None
    for value in itertools.islice(rng, 10000):
        pass
    assert value == 4123659995


def test_mt19937_same_seed_same_sequence():
    a = Mt19937(1234)
    b = Mt19937(1234)
    assert [a.next_u32() for _ in range(700)] == [b.next_u32() for _ in range(700)]


def test_mt19937_seed_reduced_modulo_32_bits():
    a = Mt19937(1234 + (1 << 32))
    b = Mt19937(1234)
    assert a.next_u32() == b.next_u32()


def test_matrix_size_and_range():
    mat = generate_random_matrix(4, 6, 1234)
    assert len(mat) == 24
    assert all(isinstance(v, int) and -10 <= v <= 10 for v in mat)


def test_matrix_is_deterministic():
    first = generate_random_matrix(8, 8, 42)
    second = generate_random_matrix(8, 8, 42)
    assert len(first) == 64
    assert first == second
    assert all(-10 <= v <= 10 for v in first)


def test_different_seeds_differ():
    assert generate_random_matrix(8, 8, 1) != generate_random_matrix(8, 8, 2)


def test_degenerate_range():
    assert generate_random_matrix(3, 3, 7, 5, 5) == [5] * 9


def test_custom_int_range_covers_values():
    mat = generate_random_matrix(20, 20, 99, 0, 1)
    assert set(mat) == {0, 1}


def test_float_matrix_range():
    mat = generate_random_matrix(10, 10, 1234, -1.0, 1.0)
    assert len(mat) == 100
    assert all(isinstance(v, float) and -1.0 <= v < 1.0 for v in mat)


def test_empty_matrix():
    assert generate_random_matrix(0, 5, 1) == []


def test_inverted_bounds_rejected():
    with pytest.raises(ValueError):
        generate_random_matrix(2, 2, 1, 5, 1)