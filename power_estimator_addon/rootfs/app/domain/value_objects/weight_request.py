"""Weight request value object.

Describes the model a client wants from the model server.
"""

from dataclasses import dataclass
from typing import Any

from .feature_schema import FeatureSchema
from .output_type import OutputType


@dataclass(frozen=True)
class WeightRequest:
    """Request for trained model weights.

    Attributes:
        schema: Features the client can provide
        output_type: Kind of power the model must predict
        energy_source: Power meter the model was trained against
        model_name: Optional explicit model to select on the server
        filter: Optional server-side filter expression
    """

    schema: FeatureSchema
    output_type: OutputType
    energy_source: str = "rapl"
    model_name: str | None = None
    filter: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """Serialize the request body sent to the model server."""
        payload: dict[str, Any] = {
            "metrics": list(self.schema.numerical_feature_names),
            "system_features": list(self.schema.metadata_feature_names),
            "system_values": list(self.schema.metadata_feature_values),
            "output_type": self.output_type.value,
            "source": self.energy_source,
        }
        if self.model_name:
            payload["model_name"] = self.model_name
        if self.filter:
            payload["filter"] = self.filter
        return payload
