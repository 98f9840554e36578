"""Model output type value object."""

from enum import Enum


class OutputType(Enum):
    """Kind of power a model predicts.

    Absolute models estimate the power of a whole node, dynamic models the
    workload-relative power of a single container. Component models return
    one value per hardware component instead of a platform total.
    The values are the tags understood by the model server.
    """

    ABS_MODEL_WEIGHT = "AbsModelWeight"
    DYN_MODEL_WEIGHT = "DynModelWeight"
    ABS_COMPONENT_MODEL_WEIGHT = "AbsComponentModelWeight"
    DYN_COMPONENT_MODEL_WEIGHT = "DynComponentModelWeight"

    @property
    def is_component(self) -> bool:
        """True if the model predicts per-component power."""
        return self in (
            OutputType.ABS_COMPONENT_MODEL_WEIGHT,
            OutputType.DYN_COMPONENT_MODEL_WEIGHT,
        )

    @property
    def is_dynamic(self) -> bool:
        """True if the model predicts workload-relative power."""
        return self in (
            OutputType.DYN_MODEL_WEIGHT,
            OutputType.DYN_COMPONENT_MODEL_WEIGHT,
        )

    @classmethod
    def parse(cls, tag: str) -> "OutputType":
        """Parse an output type from its tag or enum name.

        Args:
            tag: e.g. "AbsComponentModelWeight" or "ABS_COMPONENT_MODEL_WEIGHT"

        Raises:
            ValueError: If the tag is unknown
        """
        for output_type in cls:
            if tag in (output_type.value, output_type.name):
                return output_type
        valid = ", ".join(t.value for t in cls)
        raise ValueError(f"Unknown output type '{tag}', expected one of: {valid}")
