"""Weight provider interface.

Contract for acquiring trained model weights.
"""

from abc import ABC, abstractmethod

from domain.value_objects import ComponentModelWeights, ModelWeights, WeightRequest


class IWeightProvider(ABC):
    """Contract for fetching model weights from a weight source."""

    @abstractmethod
    async def fetch_weights(
        self, request: WeightRequest
    ) -> ModelWeights | ComponentModelWeights:
        """Fetch the weights matching the request.

        Args:
            request: Feature schema and output type of the wanted model

        Returns:
            ComponentModelWeights if request.output_type is a component type,
            ModelWeights otherwise

        Raises:
            ConfigurationError: If no weight source is configured or the
                returned weights do not match the requested output type
            TransportError: If the weight source cannot be reached
            DecodeError: If the weight document cannot be parsed
        """
        pass
