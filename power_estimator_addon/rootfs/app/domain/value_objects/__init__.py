"""Value objects for the power estimation domain.

Value objects are immutable data carriers that represent domain concepts.
They have no identity and are compared by their attributes.
"""

from .component_power import ComponentPowerRecord
from .feature_schema import FeatureSchema
from .model_weights import (
    CategoricalFeatureWeight,
    ComponentModelWeights,
    ModelWeights,
    NumericalFeatureWeight,
    WeightSet,
)
from .output_type import OutputType
from .weight_request import WeightRequest
from .weight_source_config import WeightSourceConfig

__all__ = [
    "CategoricalFeatureWeight",
    "ComponentModelWeights",
    "ComponentPowerRecord",
    "FeatureSchema",
    "ModelWeights",
    "NumericalFeatureWeight",
    "OutputType",
    "WeightRequest",
    "WeightSet",
    "WeightSourceConfig",
]
