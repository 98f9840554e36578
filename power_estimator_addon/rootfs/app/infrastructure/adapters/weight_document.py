"""Weight document decoder.

Turns the JSON documents published by the model server (or hosted as a
static initial model) into weight value objects.

A single model looks like::

    {
        "All_Weights": {
            "Bias_Weight": 1.0,
            "Categorical_Variables": {
                "cpu_architecture": {"Sandy Bridge": {"weight": 1.0}}
            },
            "Numerical_Variables": {
                "cpu_cycles": {"mean": 0, "variance": 1, "weight": 1.0}
            }
        }
    }

An ensemble is a list of such objects, and component weights map each
component name ("core", "dram", ...) to a single model or an ensemble.
"""

import json
from typing import Any

from domain.exceptions import ConfigurationError, DecodeError
from domain.value_objects import (
    CategoricalFeatureWeight,
    ComponentModelWeights,
    ModelWeights,
    NumericalFeatureWeight,
    OutputType,
    WeightSet,
)

ALL_WEIGHTS_KEY = "All_Weights"
BIAS_KEY = "Bias_Weight"
NUMERICAL_KEY = "Numerical_Variables"
CATEGORICAL_KEY = "Categorical_Variables"


def decode_weights(
    body: str | bytes, output_type: OutputType
) -> ModelWeights | ComponentModelWeights:
    """Decode a weight document for the given output type.

    Args:
        body: Raw JSON document
        output_type: Requested output type, selects the expected shape

    Returns:
        ComponentModelWeights for component output types, ModelWeights otherwise

    Raises:
        DecodeError: If the body is not valid JSON or has an invalid shape
        ConfigurationError: If the document shape does not match the output type
    """
    try:
        document = json.loads(body)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Weight document is not valid JSON: {e}") from e

    if output_type.is_component:
        return decode_component_model_weights(document)
    return decode_model_weights(document)


def decode_model_weights(document: Any) -> ModelWeights:
    """Decode a single model or an ensemble document."""
    if _looks_like_component_document(document):
        raise ConfigurationError(
            "Total power weights were requested but the document holds component weights "
            f"({', '.join(document)})"
        )
    members = document if isinstance(document, list) else [document]
    if not members:
        raise DecodeError("Weight document holds an empty ensemble")
    return ModelWeights.from_sequence([_decode_weight_set(member) for member in members])


def decode_component_model_weights(document: Any) -> ComponentModelWeights:
    """Decode a component name -> model document mapping."""
    if _is_model_document(document):
        raise ConfigurationError(
            "Component weights were requested but the document holds a single model"
        )
    if not isinstance(document, dict) or not document:
        raise DecodeError(
            f"Component weight document must be a non-empty object, got {type(document).__name__}"
        )

    components: dict[str, ModelWeights] = {}
    for component, model_document in document.items():
        if model_document == [] or model_document is None:
            raise ConfigurationError(f"Component '{component}' has no weight sets")
        try:
            components[component] = decode_model_weights(model_document)
        except DecodeError as e:
            raise DecodeError(f"Invalid weights for component '{component}': {e}") from e
    return ComponentModelWeights(components=components)


def _is_model_document(document: Any) -> bool:
    return isinstance(document, list) or (
        isinstance(document, dict) and ALL_WEIGHTS_KEY in document
    )


def _looks_like_component_document(document: Any) -> bool:
    return (
        isinstance(document, dict)
        and ALL_WEIGHTS_KEY not in document
        and bool(document)
        and all(_is_model_document(value) for value in document.values())
    )


def _decode_weight_set(document: Any) -> WeightSet:
    try:
        all_weights = document[ALL_WEIGHTS_KEY]
        numerical = {
            name: NumericalFeatureWeight(
                weight=float(coefficient["weight"]),
                mean=float(coefficient.get("mean", 0.0)),
                variance=float(coefficient.get("variance", 0.0)),
            )
            for name, coefficient in (all_weights.get(NUMERICAL_KEY) or {}).items()
        }
        categorical = {
            name: {
                category: CategoricalFeatureWeight(weight=float(entry["weight"]))
                for category, entry in categories.items()
            }
            for name, categories in (all_weights.get(CATEGORICAL_KEY) or {}).items()
        }
        return WeightSet(
            bias=float(all_weights.get(BIAS_KEY, 0.0)),
            numerical_weights=numerical,
            categorical_weights=categorical,
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise DecodeError(f"Invalid weight set: {e!r}") from e
