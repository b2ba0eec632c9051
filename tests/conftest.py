from __future__ import annotations

import numpy as np
import pytest


@pytest.fixture
def write_raw(tmp_path):
    """Write integer samples as a headerless geogrid file and return its path."""

    def _write(values, dtype, name="tile.bin"):
        path = tmp_path / name
        np.asarray(values, dtype=np.dtype(dtype)).tofile(path)
        return path

    return _write


@pytest.fixture
def write_bytes(tmp_path):
    def _write(data: bytes, name="tile.bin"):
        path = tmp_path / name
        path.write_bytes(bytes(data))
        return path

    return _write
