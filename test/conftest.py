import numpy as np
import pytest


def pytest_configure(config):
    config.addinivalue_line("markers", "cuda: test requires a CUDA device")


def brute_force_sq(mask):
    """Squared distance of every voxel to its nearest foreground voxel, by exhaustive search."""
    fg = np.argwhere(mask)
    grid = np.stack(np.meshgrid(*[np.arange(n) for n in mask.shape], indexing="ij"), axis=-1)
    diff = grid[..., None, :] - fg[None, None, None, :, :]
    return (diff ** 2).sum(axis=-1).min(axis=-1).astype(np.float64)


@pytest.fixture
def brute_force():
    return brute_force_sq
