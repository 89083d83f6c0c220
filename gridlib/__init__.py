"""Market-data grids for derivatives analytics.

This package provides tenor tables that can be queried off-grid and time
discretizations with a tick-size aware set algebra.

Key modules:
- table: Exact and interpolated (maturity, termination) data tables
- timegrid: Time discretizations with search and union/intersect
- interpolation: Univariate and bilinear interpolators
- conventions: Table conventions and offset arithmetic
"""

import logging

__version__ = "1.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # Main modules are imported via subpackages
    "table",
    "timegrid",
    "interpolation",
    "conventions",
    "errors",
    "settings",
]
