"""Model weight value objects.

Immutable representation of trained linear-regression coefficients.
A weight document may omit low-signal features; those simply contribute
nothing to a prediction.
"""

from dataclasses import dataclass, field
from typing import Iterator, Mapping, Sequence


@dataclass(frozen=True)
class NumericalFeatureWeight:
    """Coefficient and standardization parameters of one numerical feature.

    Attributes:
        weight: Trained linear coefficient
        mean: Feature mean seen at training time
        variance: Feature variance seen at training time
    """

    weight: float
    mean: float = 0.0
    variance: float = 1.0


@dataclass(frozen=True)
class CategoricalFeatureWeight:
    """Learned effect of one categorical value."""

    weight: float


@dataclass(frozen=True)
class WeightSet:
    """One trained linear model.

    Attributes:
        bias: Intercept term
        numerical_weights: Feature name -> coefficient
        categorical_weights: Metadata feature name -> category value -> weight
    """

    bias: float
    numerical_weights: Mapping[str, NumericalFeatureWeight] = field(default_factory=dict)
    categorical_weights: Mapping[str, Mapping[str, CategoricalFeatureWeight]] = field(
        default_factory=dict
    )

    def categorical_weight(self, feature_name: str, value: str) -> float:
        """Return the weight of a category, 0.0 when the category is unknown."""
        entry = self.categorical_weights.get(feature_name, {}).get(value)
        return entry.weight if entry is not None else 0.0


@dataclass(frozen=True)
class ModelWeights:
    """Ensemble of weight sets whose predictions are averaged.

    Attributes:
        weight_sets: Ordered, non-empty members of the ensemble
    """

    weight_sets: tuple[WeightSet, ...]

    def __post_init__(self) -> None:
        """Validate the ensemble."""
        if not self.weight_sets:
            raise ValueError("ModelWeights must contain at least one weight set")

    @classmethod
    def from_sequence(cls, weight_sets: Sequence[WeightSet]) -> "ModelWeights":
        """Create ModelWeights from a sequence of weight sets."""
        return cls(weight_sets=tuple(weight_sets))

    def __iter__(self) -> Iterator[WeightSet]:
        return iter(self.weight_sets)

    def __len__(self) -> int:
        return len(self.weight_sets)


@dataclass(frozen=True)
class ComponentModelWeights:
    """Per hardware component model weights (e.g. "core", "dram").

    Every component is evaluated on its own, with no cross-component
    normalization.
    """

    components: Mapping[str, ModelWeights]

    def __post_init__(self) -> None:
        """Validate the component mapping."""
        if not self.components:
            raise ValueError("ComponentModelWeights must contain at least one component")

    @property
    def component_names(self) -> tuple[str, ...]:
        """Return the component names in document order."""
        return tuple(self.components)

    def __getitem__(self, component: str) -> ModelWeights:
        return self.components[component]

    def items(self):
        return self.components.items()
