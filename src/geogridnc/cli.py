# -*- coding: utf-8 -*-
"""
Command-line entry point: ``geogrid-to-nc``.

Example:
    geogrid-to-nc -i topo_30s/00001-01200.00001-01200 -o topo.nc \
        -x 1200 -y 1200 -w 2 -m -s 1.0
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, Sequence

from .config import build_parser, parse_args
from .errors import ConfigError, DecodeError, GeogridIOError
from .stats import format_statistics
from .workflows import run

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_MATERIALIZE = 1
EXIT_CONFIG = 2
EXIT_DECODE = 3


def _setup_logging(level: Optional[str], verbose: bool) -> None:
    default = logging.DEBUG if verbose else logging.INFO
    lvl = getattr(logging, str(level).upper(), default) if level else default
    logging.basicConfig(level=lvl, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        config = parse_args(argv)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        build_parser().print_help()
        return EXIT_CONFIG

    _setup_logging(config.log_level, config.verbose)

    if config.verbose:
        for line in config.describe():
            print(line)

    try:
        result = run(config)
    except (GeogridIOError, DecodeError) as e:
        logger.error("%s", e)
        print("Read geogrid status: 1")
        return EXIT_DECODE
    print("Read geogrid status: 0")

    for line in result.report.lines():
        print(line)

    for line in format_statistics(result.statistics):
        print(line)

    return EXIT_OK if result.ok else EXIT_MATERIALIZE


if __name__ == "__main__":
    sys.exit(main())
