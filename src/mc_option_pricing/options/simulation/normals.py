"""
Standard normal draws for simulation.

Every pricing call builds its own generator from a seed, so repeated or
parallel calls never share stream state. Same seed, same draws.
"""

import numpy as np

from mc_option_pricing.errors import InvalidSampleSizeError


def make_generator(seed: int | None) -> np.random.Generator:
    """
    Create a fresh random generator (the "reseed" operation).

    Parameters
    ----------
    seed : int, optional
        Seed for reproducibility; None draws entropy from the OS

    Returns
    -------
    np.random.Generator
        PCG64 generator
    """
    return np.random.default_rng(seed)


def standard_normal_matrix(
    rng: np.random.Generator,
    n_paths: int,
    n_cols: int = 1,
) -> np.ndarray:
    """
    Draw an (n_paths, n_cols) matrix of independent N(0, 1) numbers.

    Raises
    ------
    InvalidSampleSizeError
        If n_paths or n_cols is not positive
    """
    if n_paths <= 0:
        raise InvalidSampleSizeError(f"CRITICAL: n_paths must be > 0, got {n_paths}")
    if n_cols <= 0:
        raise InvalidSampleSizeError(f"CRITICAL: n_cols must be > 0, got {n_cols}")

    return rng.standard_normal((n_paths, n_cols))


def spawn_generators(seed: int | None, n_workers: int) -> list[np.random.Generator]:
    """
    Create statistically independent generators for parallel workers.

    Uses SeedSequence.spawn so each worker owns its own stream.
    """
    if n_workers <= 0:
        raise InvalidSampleSizeError(f"CRITICAL: n_workers must be > 0, got {n_workers}")

    children = np.random.SeedSequence(seed).spawn(n_workers)
    return [np.random.default_rng(child) for child in children]


def split_paths(n_paths: int, n_workers: int) -> list[int]:
    """Partition n_paths across workers as evenly as possible."""
    base, extra = divmod(n_paths, n_workers)
    return [base + (1 if i < extra else 0) for i in range(n_workers)]
