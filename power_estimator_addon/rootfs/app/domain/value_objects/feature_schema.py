"""Feature schema value object.

Immutable description of the inputs a power model expects.
"""

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class FeatureSchema:
    """Which features a model consumes and in what order.

    Attributes:
        numerical_feature_names: Positional meaning of every observation vector
        metadata_feature_names: Names of the categorical host attributes
            (e.g. "cpu_architecture")
        metadata_feature_values: Values of those attributes for this host,
            parallel to metadata_feature_names (e.g. "Sandy Bridge")
    """

    numerical_feature_names: tuple[str, ...]
    metadata_feature_names: tuple[str, ...] = ()
    metadata_feature_values: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate the schema."""
        if len(set(self.numerical_feature_names)) != len(self.numerical_feature_names):
            raise ValueError(
                f"numerical_feature_names must be unique, got {list(self.numerical_feature_names)}"
            )
        if len(self.metadata_feature_names) != len(self.metadata_feature_values):
            raise ValueError(
                "metadata_feature_names and metadata_feature_values must have the same length, "
                f"got {len(self.metadata_feature_names)} and {len(self.metadata_feature_values)}"
            )

    @classmethod
    def from_sequences(
        cls,
        numerical_feature_names: Sequence[str],
        metadata_feature_names: Sequence[str] = (),
        metadata_feature_values: Sequence[str] = (),
    ) -> "FeatureSchema":
        """Create a FeatureSchema from arbitrary sequences."""
        return cls(
            numerical_feature_names=tuple(numerical_feature_names),
            metadata_feature_names=tuple(metadata_feature_names),
            metadata_feature_values=tuple(metadata_feature_values),
        )

    @property
    def width(self) -> int:
        """Return the expected observation length."""
        return len(self.numerical_feature_names)

    @property
    def metadata(self) -> dict[str, str]:
        """Return the host metadata as a name -> value mapping."""
        return dict(zip(self.metadata_feature_names, self.metadata_feature_values))
