# -*- coding: utf-8 -*-
"""
geogridnc
=========

WRF geogrid (ENVI flat binary) -> NetCDF4 converter.

- decode fixed-width integer samples (1/2/4 bytes, signed or unsigned,
  big or little endian) with a scale factor into float32
- write a deflated float32 variable "var" over (z, y, x) or (y, x)
- per-slice mean / min / max report
"""

from .errors import (
    GeogridError,
    ConfigError,
    GeogridIOError,
    DecodeError,
    MaterializeError,
)
from .config import GridSpec, ConversionConfig, parse_args
from .reader import decode_word, decode_buffer, decode_geogrid, decode_geogrid_to_dataarray
from .nc_writer import OutputLayout, StepResult, MaterializeReport, write_netcdf
from .stats import slice_statistics, format_statistics
from .workflows import ConversionResult, convert_geogrid_to_netcdf

__version__ = "1.0.0"

__all__ = [
    "GeogridError",
    "ConfigError",
    "GeogridIOError",
    "DecodeError",
    "MaterializeError",
    "GridSpec",
    "ConversionConfig",
    "parse_args",
    "decode_word",
    "decode_buffer",
    "decode_geogrid",
    "decode_geogrid_to_dataarray",
    "OutputLayout",
    "StepResult",
    "MaterializeReport",
    "write_netcdf",
    "slice_statistics",
    "format_statistics",
    "ConversionResult",
    "convert_geogrid_to_netcdf",
]
