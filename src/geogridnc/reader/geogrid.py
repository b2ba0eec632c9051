# -*- coding: utf-8 -*-
"""
geogrid
=======
WRF geogrid (ENVI-style flat binary) decoding.

A geogrid file is a headerless run of nx*ny*nz fixed-width integers stored
x-fastest, then y, then z. Word size, signedness, byte order and scale are
supplied by the caller; nothing is read from the WRF index file.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Union

import numpy as np
import xarray as xr

from ..config import GridSpec
from ..errors import DecodeError, GeogridIOError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

WORD_SIZES = (1, 2, 4)

_BYTEORDER = {"big": ">", "little": "<"}


def _check_word_size(word_size: int) -> None:
    if word_size not in WORD_SIZES:
        raise DecodeError(f"Unsupported word size {word_size!r}. Supported: {list(WORD_SIZES)}")


def build_dtype(word_size: int, signed: bool, endianness: str) -> np.dtype:
    """
    numpy dtype for one stored sample, with an explicit byte order.

    The host byte order is never assumed.
    """
    _check_word_size(word_size)
    if endianness not in _BYTEORDER:
        raise DecodeError("endianness must be 'little' or 'big'.")
    kind = "i" if signed else "u"
    return np.dtype(f"{_BYTEORDER[endianness]}{kind}{word_size}")


def decode_word(raw: bytes, word_size: int, endianness: str, signed: bool) -> int:
    """Reinterpret ``word_size`` raw bytes as one integer sample."""
    _check_word_size(word_size)
    if len(raw) != word_size:
        raise DecodeError(f"Expected {word_size} bytes, got {len(raw)}.")
    if endianness not in _BYTEORDER:
        raise DecodeError("endianness must be 'little' or 'big'.")
    return int.from_bytes(raw, byteorder=endianness, signed=signed)


def decode_buffer(buf: bytes, spec: GridSpec) -> np.ndarray:
    """
    Decode an in-memory byte string into a (nz, ny, nx) float32 grid.

    Values are widened to float64, multiplied by ``scale`` and narrowed to
    float32; no extra rounding is applied.
    """
    dtype = build_dtype(spec.word_size, spec.signed, spec.endianness)
    if len(buf) < spec.n_bytes:
        raise GeogridIOError(
            f"Data size mismatch: expected {spec.n_bytes} bytes but got {len(buf)}. "
            f"Check nx/ny/nz/word size."
        )
    raw = np.frombuffer(buf, dtype=dtype, count=spec.n_values)
    return _scale_to_float32(raw, spec)


def _scale_to_float32(raw: np.ndarray, spec: GridSpec) -> np.ndarray:
    data = raw.astype(np.float64) * float(spec.scale)
    return data.astype(np.float32).reshape(spec.shape)


def decode_geogrid(path: PathLike, spec: GridSpec) -> np.ndarray:
    """
    Read a geogrid file into a dense float32 array of shape (nz, ny, nx).

    Raises
    ------
    DecodeError
        word size is not 1, 2 or 4.
    GeogridIOError
        file missing, unreadable, or shorter than nx*ny*nz*word_size bytes.
    """
    dtype = build_dtype(spec.word_size, spec.signed, spec.endianness)
    path = str(path)

    try:
        size = os.path.getsize(path)
    except OSError as e:
        raise GeogridIOError(f"Cannot open geogrid file '{path}': {e.strerror or e}") from e

    if size < spec.n_bytes:
        raise GeogridIOError(
            f"Geogrid file '{path}' is too short: expected {spec.n_bytes} bytes "
            f"({spec.nx}x{spec.ny}x{spec.nz} words of {spec.word_size} bytes) but got {size}."
        )
    if size > spec.n_bytes:
        logger.debug("Ignoring %s trailing bytes in %s", size - spec.n_bytes, path)

    try:
        with open(path, "rb") as f:
            raw = np.fromfile(f, dtype=dtype, count=spec.n_values)
    except OSError as e:
        raise GeogridIOError(f"Cannot read geogrid file '{path}': {e.strerror or e}") from e

    if raw.size != spec.n_values:
        raise GeogridIOError(
            f"Data size mismatch: expected {spec.n_values} words but read {raw.size} from '{path}'."
        )

    logger.info("Decoded %s (%s words, dtype=%s, scale=%s)", path, raw.size, dtype.str, spec.scale)
    return _scale_to_float32(raw, spec)


def output_dims(spec: GridSpec):
    """Dimension names of the output variable: (z, y, x), or (y, x) when nz == 1."""
    return ("z", "y", "x") if spec.nz > 1 else ("y", "x")


def decode_geogrid_to_dataarray(path: PathLike, spec: GridSpec, *, name: str = "var") -> xr.DataArray:
    """
    Decode a geogrid file into an xr.DataArray laid out like the NetCDF output.

    The z axis is dropped when nz == 1.
    """
    grid = decode_geogrid(path, spec)
    dims = output_dims(spec)
    data = grid if spec.nz > 1 else grid.reshape(spec.ny, spec.nx)

    da = xr.DataArray(data, dims=dims, name=name)
    da.attrs.update(
        {
            "source_file": Path(path).name,
            "word_size": spec.word_size,
            "signed": int(spec.signed),
            "endianness": spec.endianness,
            "scale_factor_applied": float(spec.scale),
        }
    )
    return da
