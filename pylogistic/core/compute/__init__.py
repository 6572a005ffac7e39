"""
Shared compute infrastructure for pylogistic.

Submodules:
    timing: Execution timing utilities
    tolerances: Numerical comparison tolerances
"""

from pylogistic.core.compute.timing import Timer, timed
from pylogistic.core.compute.tolerances import (
    ToleranceTier,
    EXACT_FP64,
    PRODUCT_FP64,
    FINITE_DIFFERENCE,
    LABEL_TOLERANCE,
)

__all__ = [
    # Timing
    "Timer",
    "timed",
    # Tolerances
    "ToleranceTier",
    "EXACT_FP64",
    "PRODUCT_FP64",
    "FINITE_DIFFERENCE",
    "LABEL_TOLERANCE",
]
