import numpy as np
import pytest


@pytest.fixture
def flat_image():
    return np.full((32, 32), 0.5)


@pytest.fixture
def corner_image():
    """Bright quadrant in the lower right: a single L corner at (31.5, 31.5)."""
    img = np.zeros((64, 64))
    img[32:, 32:] = 1.0
    return img


@pytest.fixture
def edge_image():
    """Vertical step edge between columns 23 and 24, no corner."""
    img = np.zeros((48, 48))
    img[:, 24:] = 1.0
    return img


@pytest.fixture
def textured_image():
    rng = np.random.default_rng(0)
    return rng.random((64, 64))


@pytest.fixture
def checkerboard():
    tiles = (np.indices((8, 8)).sum(axis=0) % 2).astype(np.uint8)
    return np.kron(tiles, np.ones((8, 8), dtype=np.uint8)) * 255
