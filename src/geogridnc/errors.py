# -*- coding: utf-8 -*-
"""
geogridnc.errors
================

Error taxonomy for the geogrid -> NetCDF conversion.
"""

from __future__ import annotations

from typing import Optional


class GeogridError(Exception):
    """Base class for all conversion errors."""


class ConfigError(GeogridError, ValueError):
    """Malformed or missing configuration; raised before any I/O."""


class GeogridIOError(GeogridError, OSError):
    """Input file missing, unreadable, or shorter than the declared grid."""


class DecodeError(GeogridError, ValueError):
    """Unsupported word size."""


class MaterializeError(GeogridError, RuntimeError):
    """A NetCDF library step failed while writing the output file."""

    def __init__(self, message: str, step: Optional[str] = None):
        super().__init__(message)
        self.step = step

    def __str__(self) -> str:
        msg = super().__str__()
        return f"{self.step}: {msg}" if self.step else msg
