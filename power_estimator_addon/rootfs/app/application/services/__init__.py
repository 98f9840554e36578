"""Application services for power estimation.

These services orchestrate domain logic with infrastructure adapters
to fulfill use cases.
"""

from .linear_regression_estimator import COMPONENT_POWER_SCALE, LinearRegressionEstimator

__all__ = [
    "COMPONENT_POWER_SCALE",
    "LinearRegressionEstimator",
]
