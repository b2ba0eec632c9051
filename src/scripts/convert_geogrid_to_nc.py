#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
convert_geogrid_to_nc.py
========================

Command-line tool: convert one WRF geogrid tile (ENVI flat binary) to NetCDF4.

Example:
    python convert_geogrid_to_nc.py \
        --input  /path/to/geog/topo_30s/00001-01200.00001-01200 \
        --output /path/to/topo_30s_tile.nc \
        --nx 1200 --ny 1200 --wsize 2 --signed --scale 1.0

The WRF 'index' file is not parsed; take nx/ny/nz, word size, signedness,
endianness and scale from it by hand.
"""

import sys

from geogridnc.cli import main


if __name__ == "__main__":
    sys.exit(main())
