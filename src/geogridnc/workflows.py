# -*- coding: utf-8 -*-

"""
workflows
=========

geogrid file -> float32 grid -> NetCDF4 -> per-slice statistics.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import pandas as pd

from .config import ConversionConfig, GridSpec
from .nc_writer import MaterializeReport, write_netcdf
from .reader.geogrid import decode_geogrid
from .stats import slice_statistics

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass
class ConversionResult:
    report: MaterializeReport
    statistics: pd.DataFrame

    @property
    def ok(self) -> bool:
        return self.report.ok


def convert_geogrid_to_netcdf(
    data_path: PathLike,
    out_nc: PathLike,
    spec: GridSpec,
    *,
    overwrite: bool = True,
) -> ConversionResult:
    """
    Decode ``data_path`` and write it to ``out_nc``.

    Decode errors (GeogridIOError, DecodeError) propagate before the output
    file is created. NetCDF step failures are collected in the returned
    report instead of being raised.
    """
    spec.validate()
    grid = decode_geogrid(data_path, spec)
    report = write_netcdf(out_nc, grid, spec, overwrite=overwrite)
    stats = slice_statistics(grid)

    return ConversionResult(report=report, statistics=stats)


def run(config: ConversionConfig) -> ConversionResult:
    logger.debug("Converting %s -> %s with %s", config.input_path, config.output_path, config.grid)
    return convert_geogrid_to_netcdf(
        config.input_path,
        config.output_path,
        config.grid,
        overwrite=config.overwrite,
    )
