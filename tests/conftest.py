import numpy as np
import pytest
from PIL import Image

from lsbstego.carrier import ArrayCarrier


@pytest.fixture
def rng():
    return np.random.default_rng(2023)


@pytest.fixture
def noisy_carrier(rng):
    arr = rng.integers(0, 256, size=(24, 32, 3), dtype=np.uint8)
    return ArrayCarrier(arr)


@pytest.fixture
def cover_png(tmp_path, rng):
    path = tmp_path / 'cover.png'
    arr = rng.integers(0, 256, size=(40, 50, 3), dtype=np.uint8)
    Image.fromarray(arr).save(path)
    return path


@pytest.fixture
def secret_file(tmp_path):
    path = tmp_path / 'secret.bin'
    path.write_bytes(bytes(range(256)) + b'tail')
    return path
