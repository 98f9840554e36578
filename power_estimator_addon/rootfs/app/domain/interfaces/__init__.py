"""Domain interfaces for power estimation.

Interfaces define contracts between the domain and infrastructure layers.
The domain depends on these abstractions, not on concrete implementations.
"""

from .ratio_policy import IRatioPolicy
from .weight_provider import IWeightProvider

__all__ = [
    "IRatioPolicy",
    "IWeightProvider",
]
