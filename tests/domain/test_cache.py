"""Tests for the explicit table cache."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import numpy as np

from scientific_polarization.domain.cache import TableCache


def test_same_parameters_return_same_object() -> None:
    cache = TableCache()
    first = cache.update_table(1.5, 4, 5)
    second = cache.update_table(1.5, 4, 5)
    assert first is second


def test_int_and_float_trust_share_key() -> None:
    cache = TableCache()
    assert cache.update_table(2, 4, 5) is cache.update_table(2.0, 4, 5)


def test_different_parameters_never_share_tables() -> None:
    cache = TableCache()
    low = cache.update_table(1.0, 4, 5)
    high = cache.update_table(3.0, 4, 5)
    assert low is not high
    assert not np.array_equal(low.values, high.values)
    assert low.m == 1.0 and high.m == 3.0


def test_probability_tables_shared_across_update_tables() -> None:
    cache = TableCache()
    cache.update_table(1.0, 4, 5)
    assert len(cache) == 2
    cache.update_table(2.0, 4, 5)
    assert len(cache) == 3
    assert cache.probability_tables(4) is cache.probability_tables(4)
    assert len(cache) == 3


def test_clear_empties_cache() -> None:
    cache = TableCache()
    table = cache.update_table(1.5, 3, 4)
    cache.clear()
    assert len(cache) == 0
    assert cache.update_table(1.5, 3, 4) is not table


def test_concurrent_readers_get_one_table() -> None:
    cache = TableCache()
    with ThreadPoolExecutor(max_workers=4) as pool:
        tables = list(pool.map(lambda _: cache.update_table(1.5, 6, 8), range(8)))
    assert all(table is tables[0] for table in tables)
    assert len(cache) == 2
