"""
Tolerance tiers for numerical comparison.

Defines precision expectations for the different kinds of checks:
- exact kernels (transpose, sums): machine precision
- reassociated products: small relative error
- finite-difference gradients: limited by the step size

Used by the model (label tolerance) and the test suite.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Elementwise kernels and reductions over small matrices
EXACT_FP64 = ToleranceTier(
    rtol=1e-12,
    atol=1e-14,
    name='exact_fp64',
    description='double precision, no reassociation',
)

# Matrix products evaluated in a different association order
PRODUCT_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='product_fp64',
    description='double precision, reassociated sums',
)

# Central finite differences with step ~1e-6
FINITE_DIFFERENCE = ToleranceTier(
    rtol=1e-5,
    atol=1e-7,
    name='finite_difference',
    description='analytic vs central-difference derivative',
)

# A label is treated as the positive class within this distance of 1.0
LABEL_TOLERANCE = 1e-8
