# -*- coding: utf-8 -*-
"""
geogridnc.config
================

Grid description and run configuration.

The WRF 'index' file is never parsed: every geometry and encoding parameter
comes from the caller (command line or a plain mapping).
"""

from __future__ import annotations

import argparse
import math
import numbers
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from .errors import ConfigError

ENDIANNESS = ("big", "little")

_TRUE = {"1", "true", "yes", "y", "on"}
_FALSE = {"0", "false", "no", "n", "off", ""}


def _as_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    s = str(value).strip().lower()
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    raise ConfigError(f"'{key}' must be a boolean, got {value!r}.")


def _as_int(value: Any, key: str) -> int:
    try:
        return int(str(value).strip())
    except ValueError as e:
        raise ConfigError(f"'{key}' must be an integer, got {value!r}.") from e


def _as_float(value: Any, key: str) -> float:
    try:
        return float(str(value).strip())
    except ValueError as e:
        raise ConfigError(f"'{key}' must be a number, got {value!r}.") from e


@dataclass(frozen=True)
class GridSpec:
    """
    Geometry and sample encoding of a geogrid file.

    Samples are stored x-fastest, then y, then z; ``shape`` is therefore
    (nz, ny, nx) in C order.
    """
    nx: int = 1
    ny: int = 1
    nz: int = 1
    word_size: int = 4
    signed: bool = False
    endianness: str = "big"
    scale: float = 1.0

    @property
    def shape(self) -> Tuple[int, int, int]:
        return (self.nz, self.ny, self.nx)

    @property
    def n_values(self) -> int:
        return self.nx * self.ny * self.nz

    @property
    def n_bytes(self) -> int:
        return self.n_values * self.word_size

    def validate(self) -> "GridSpec":
        for key in ("nx", "ny", "nz"):
            v = getattr(self, key)
            if isinstance(v, bool) or not isinstance(v, numbers.Integral) or v < 1:
                raise ConfigError(f"'{key}' must be a positive integer, got {v!r}.")
        if self.endianness not in ENDIANNESS:
            raise ConfigError(f"endianness must be 'big' or 'little', got {self.endianness!r}.")
        s = self.scale
        if isinstance(s, bool) or not isinstance(s, numbers.Real) or not math.isfinite(s) or s <= 0.0:
            raise ConfigError(f"scale must be a positive finite number, got {self.scale!r}.")
        # word_size is checked by the decoder (DecodeError), not here
        return self

    @classmethod
    def from_mapping(cls, meta: Mapping[str, Any]) -> "GridSpec":
        """
        Build a spec from a dict such as {"nx": "720", "signed": "yes", ...}.

        Missing keys fall back to the dataclass defaults.
        """
        kw = {}
        for key in ("nx", "ny", "nz", "word_size"):
            if key in meta:
                kw[key] = _as_int(meta[key], key)
        if "scale" in meta:
            kw["scale"] = _as_float(meta["scale"], "scale")
        if "signed" in meta:
            kw["signed"] = _as_bool(meta["signed"], "signed")
        if "endianness" in meta:
            kw["endianness"] = str(meta["endianness"]).strip().lower()
        return cls(**kw).validate()

    def describe(self) -> List[str]:
        return [
            f"Grid NX:\t\t{self.nx}",
            f"Grid NY:\t\t{self.ny}",
            f"Grid NZ:\t\t{self.nz}",
            f"Word size:\t\t{self.word_size}",
            f"Scale factor:\t\t{self.scale:f}",
            f"Signed:\t\t\t{'yes' if self.signed else 'no'}",
            f"Endianness:\t\t{self.endianness}",
        ]


@dataclass(frozen=True)
class ConversionConfig:
    input_path: str
    output_path: str
    grid: GridSpec = field(default_factory=GridSpec)
    verbose: bool = False
    overwrite: bool = True
    log_level: Optional[str] = None

    def describe(self) -> List[str]:
        return [
            f"Input file:\t\t{self.input_path}",
            f"output file:\t\t{self.output_path}",
        ] + self.grid.describe()


USAGE_EPILOG = (
    "This program converts a WRF geogrid file (which is actually an ENVI file) to NetCDF4.\n"
    "The WRF 'index' file is not parsed, instead all settings should be provided "
    "via the commandline options."
)


class _RaisingArgumentParser(argparse.ArgumentParser):
    """argparse parser that raises ConfigError instead of exiting."""

    def error(self, message):
        raise ConfigError(message)


def build_parser(prog: str = "geogrid-to-nc") -> argparse.ArgumentParser:
    parser = _RaisingArgumentParser(
        prog=prog,
        description="Convert a WRF geogrid binary file to compressed NetCDF4.",
        epilog=USAGE_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--input", "-i", default="", help="inputfile (geogrid)")
    parser.add_argument("--output", "-o", default="", help="outputfile (netcdf)")
    parser.add_argument("--nx", "-x", default="1", help="Grid size NX")
    parser.add_argument("--ny", "-y", default="1", help="Grid size NY")
    parser.add_argument("--nz", "-z", default="1", help="Grid size NZ")
    parser.add_argument("--wsize", "-w", default="4", help="Word size (1, 2 or 4)")
    parser.add_argument("--scale", "-s", default="1.0", help="Scale factor")
    parser.add_argument("--signed", "-m", action="store_true", help="Signed data (default unsigned)")
    parser.add_argument(
        "--littleendian", "-l", action="store_true", help="Endianness (default big endian)"
    )
    parser.add_argument("--verbose", "-v", action="store_true")
    parser.add_argument(
        "--no-clobber", action="store_true", help="Fail instead of overwriting an existing output file"
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default INFO, DEBUG with --verbose)")
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> ConversionConfig:
    """Parse command-line options into a ConversionConfig; raises ConfigError."""
    args = build_parser().parse_args(argv)

    if not args.input or not args.output:
        raise ConfigError("both --input and --output are required.")

    grid = GridSpec(
        nx=_as_int(args.nx, "nx"),
        ny=_as_int(args.ny, "ny"),
        nz=_as_int(args.nz, "nz"),
        word_size=_as_int(args.wsize, "wsize"),
        signed=bool(args.signed),
        endianness="little" if args.littleendian else "big",
        scale=_as_float(args.scale, "scale"),
    ).validate()

    return ConversionConfig(
        input_path=args.input,
        output_path=args.output,
        grid=grid,
        verbose=bool(args.verbose),
        overwrite=not args.no_clobber,
        log_level=args.log_level,
    )
