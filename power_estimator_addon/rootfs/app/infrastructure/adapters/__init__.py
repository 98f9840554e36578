"""Infrastructure adapters for power estimation.

These adapters implement domain interfaces using external libraries
like requests.
"""

from .http_weight_provider import HttpWeightProvider
from .weight_document import (
    decode_component_model_weights,
    decode_model_weights,
    decode_weights,
)

__all__ = [
    "HttpWeightProvider",
    "decode_component_model_weights",
    "decode_model_weights",
    "decode_weights",
]
