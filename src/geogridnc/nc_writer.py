# -*- coding: utf-8 -*-
"""
geogridnc.nc_writer
===================

Write a decoded geogrid array to NetCDF4, one library step at a time.

Each step (create, def_dim, def_var, def_var_deflate, enddef, put_var, close)
is attempted and recorded in a MaterializeReport. A failed step does not stop
the later ones, so the report carries every diagnostic the library produced.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, List, Tuple, Union

import netCDF4 as nc
import numpy as np

from .config import GridSpec
from .errors import MaterializeError
from .reader.geogrid import output_dims

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

VAR_NAME = "var"
COMP_LEVEL = 4


@dataclass(frozen=True)
class OutputLayout:
    dims: Tuple[str, ...]
    sizes: Tuple[int, ...]
    var_name: str = VAR_NAME
    dtype: str = "f4"
    complevel: int = COMP_LEVEL
    shuffle: bool = False

    @classmethod
    def from_spec(cls, spec: GridSpec) -> "OutputLayout":
        dims = output_dims(spec)
        sizes = (spec.nz, spec.ny, spec.nx) if len(dims) == 3 else (spec.ny, spec.nx)
        return cls(dims=dims, sizes=sizes)


@dataclass(frozen=True)
class StepResult:
    step: str
    ok: bool
    message: str = ""

    def line(self) -> str:
        return f"[OK] {self.step}" if self.ok else f"[XX] {self.step}: {self.message}"


@dataclass
class MaterializeReport:
    path: str
    steps: List[StepResult] = field(default_factory=list)

    def __iter__(self) -> Iterator[StepResult]:
        return iter(self.steps)

    @property
    def ok(self) -> bool:
        return all(s.ok for s in self.steps)

    @property
    def failed(self) -> List[StepResult]:
        return [s for s in self.steps if not s.ok]

    def errors(self) -> List[MaterializeError]:
        return [MaterializeError(s.message, step=s.step) for s in self.failed]

    def lines(self) -> List[str]:
        return [s.line() for s in self.steps]

    def raise_for_status(self) -> None:
        errs = self.errors()
        if errs:
            raise errs[0]

    def record(self, step: str, func: Callable[[], object]):
        """Run one step; store its outcome and return its value (None on failure)."""
        try:
            value = func()
        except Exception as e:
            msg = str(e) or e.__class__.__name__
            self.steps.append(StepResult(step, False, msg))
            logger.error("NetCDF step %s failed: %s", step, msg)
            return None
        self.steps.append(StepResult(step, True))
        logger.debug("NetCDF step %s ok", step)
        return value


def _require(obj, what: str):
    if obj is None:
        raise MaterializeError(f"no {what} (an earlier step failed)")
    return obj


def _check_deflate(var: nc.Variable, layout: OutputLayout) -> None:
    filters = var.filters() or {}
    zlib = bool(filters.get("zlib", False))
    level = int(filters.get("complevel", 0))
    shuffle = bool(filters.get("shuffle", False))
    if not zlib or level != layout.complevel or shuffle != layout.shuffle:
        raise MaterializeError(
            f"deflate settings not applied (zlib={zlib}, complevel={level}, shuffle={shuffle})"
        )


def write_netcdf(
    out_nc: PathLike,
    grid: np.ndarray,
    spec: GridSpec,
    *,
    overwrite: bool = True,
) -> MaterializeReport:
    """
    Write ``grid`` (float32, C order, nz*ny*nx values) to ``out_nc``.

    The variable "var" is declared over (z, y, x), or (y, x) when nz == 1,
    deflated at level 4 without shuffle. The buffer is written as-is, so its
    linear order must already be x-fastest. A buffer whose size is not
    nx*ny*nz raises MaterializeError before the file is created.
    """
    layout = OutputLayout.from_spec(spec)
    report = MaterializeReport(path=str(out_nc))

    data = np.ascontiguousarray(grid, dtype=np.float32)
    if data.size != spec.n_values:
        raise MaterializeError(f"grid has {data.size} values, expected {spec.n_values}", step="put_var")
    data = data.reshape(layout.sizes)

    ds = report.record(
        "create",
        lambda: nc.Dataset(str(out_nc), mode="w", format="NETCDF4", clobber=overwrite),
    )
    try:
        for dim, size in zip(layout.dims, layout.sizes):
            report.record(
                f"def_dim {dim}",
                lambda dim=dim, size=size: _require(ds, "dataset").createDimension(dim, size),
            )

        var = report.record(
            f"def_var {layout.var_name}",
            lambda: _require(ds, "dataset").createVariable(
                layout.var_name,
                layout.dtype,
                layout.dims,
                zlib=True,
                complevel=layout.complevel,
                shuffle=layout.shuffle,
            ),
        )
        report.record("def_var_deflate", lambda: _check_deflate(_require(var, "variable"), layout))
        # sync() leaves define mode and flushes the header
        report.record("enddef", lambda: _require(ds, "dataset").sync())

        def _put():
            _require(var, "variable")[:] = data

        report.record("put_var", _put)
    finally:
        report.record("close", lambda: _require(ds, "dataset").close())
        if ds is not None and ds.isopen():
            ds.close()

    if report.ok:
        logger.info("Wrote %s: %s%s", out_nc, layout.var_name, dict(zip(layout.dims, layout.sizes)))
    else:
        logger.warning("Wrote %s with %s failed step(s)", out_nc, len(report.failed))
    return report
