# -*- coding: utf-8 -*-
"""
stats
=====

Per-slice mean / min / max of a decoded grid.

Running min and max start at 0.0 rather than at the first sample, as the
original geogrid checker does: an all-positive slice reports min 0.0 and an
all-negative slice reports max 0.0.
"""

from __future__ import annotations

from typing import List

import numpy as np
import pandas as pd


def slice_statistics(grid: np.ndarray) -> pd.DataFrame:
    """
    One row per z-slice: slice (1-based), mean, min, max.

    A 2-D (ny, nx) grid is treated as a single slice.
    """
    arr = np.asarray(grid)
    if arr.ndim == 2:
        arr = arr[np.newaxis, ...]
    if arr.ndim != 3:
        raise ValueError(f"grid must be 2-D or 3-D, got shape {arr.shape}")

    flat = arr.reshape(arr.shape[0], -1).astype(np.float64)
    if flat.shape[1] == 0:
        raise ValueError("grid slices are empty")

    return pd.DataFrame(
        {
            "slice": np.arange(1, flat.shape[0] + 1),
            "mean": flat.sum(axis=1) / flat.shape[1],
            "min": np.minimum(flat.min(axis=1), 0.0),
            "max": np.maximum(flat.max(axis=1), 0.0),
        }
    )


def format_statistics(df: pd.DataFrame) -> List[str]:
    """Render rows as '<slice> <mean> <min> <max>' with six decimals."""
    return [
        f"{int(k)} {mean:f} {lo:f} {hi:f}"
        for k, mean, lo, hi in zip(df["slice"], df["mean"], df["min"], df["max"])
    ]
