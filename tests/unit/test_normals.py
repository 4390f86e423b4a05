"""
Tests for normal draw generation and parallel stream partitioning.
"""

import numpy as np
import pytest

from mc_option_pricing.errors import InvalidSampleSizeError
from mc_option_pricing.options.simulation.normals import (
    make_generator,
    spawn_generators,
    split_paths,
    standard_normal_matrix,
)


def test_reseed_reproduces_draws():
    first = standard_normal_matrix(make_generator(5), 10, 3)
    second = standard_normal_matrix(make_generator(5), 10, 3)
    np.testing.assert_array_equal(first, second)


def test_shape():
    assert standard_normal_matrix(make_generator(1), 7, 4).shape == (7, 4)


@pytest.mark.parametrize("n_paths,n_cols", [(0, 1), (5, 0), (-1, 2)])
def test_invalid_sizes(n_paths, n_cols):
    with pytest.raises(InvalidSampleSizeError):
        standard_normal_matrix(make_generator(1), n_paths, n_cols)


def test_spawned_streams_differ():
    streams = spawn_generators(1, 3)
    draws = [rng.standard_normal(5) for rng in streams]
    assert not np.array_equal(draws[0], draws[1])
    assert not np.array_equal(draws[1], draws[2])


def test_spawned_streams_reproducible():
    first = [rng.standard_normal(4) for rng in spawn_generators(9, 2)]
    second = [rng.standard_normal(4) for rng in spawn_generators(9, 2)]
    for a, b in zip(first, second):
        np.testing.assert_array_equal(a, b)


def test_spawn_requires_workers():
    with pytest.raises(InvalidSampleSizeError):
        spawn_generators(1, 0)


@pytest.mark.parametrize("n_paths,n_workers", [(10, 3), (12, 4), (3, 5)])
def test_split_paths(n_paths, n_workers):
    chunks = split_paths(n_paths, n_workers)
    assert sum(chunks) == n_paths
    assert max(chunks) - min(chunks) <= 1
