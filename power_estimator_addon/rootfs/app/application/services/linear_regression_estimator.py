"""Linear regression power estimator.

Application service estimating node or container power with a linear
model whose weights are fetched once from a weight provider.
"""

import logging
from typing import Sequence

from domain.exceptions import ConfigurationError, EstimatorNotStartedError
from domain.interfaces import IRatioPolicy, IWeightProvider
from domain.services import LinearPredictionService, SampleBatch, ShareOfTotalRatioPolicy
from domain.value_objects import (
    ComponentModelWeights,
    ComponentPowerRecord,
    FeatureSchema,
    ModelWeights,
    OutputType,
    WeightRequest,
)

_LOGGER = logging.getLogger(__name__)

# Component powers are reported in a unit 1000x finer than platform powers
COMPONENT_POWER_SCALE = 1000.0


class LinearRegressionEstimator:
    """Estimator for platform and component power.

    Typical cycle::

        await estimator.start()
        estimator.reset()
        for values in container_feature_values:
            estimator.add_container_feature_values(values)
        powers = estimator.predict_platform_power()

    An estimator instance is not thread-safe: use one per collection loop
    or guard it with an external lock.
    """

    def __init__(
        self,
        schema: FeatureSchema,
        output_type: OutputType,
        weight_provider: IWeightProvider,
        component_scale: float = COMPONENT_POWER_SCALE,
        ratio_policy: IRatioPolicy | None = None,
        model_name: str | None = None,
        energy_source: str = "rapl",
        model_filter: str | None = None,
    ) -> None:
        """Initialize the estimator.

        Args:
            schema: Features supplied by every observation plus host metadata
            output_type: Kind of power to estimate
            weight_provider: Source of the model weights
            component_scale: Factor applied to component powers
            ratio_policy: Policy used when predictions are requested as ratios
                (defaults to ShareOfTotalRatioPolicy)
            model_name: Optional model to ask the model server for
            energy_source: Power meter the model must be trained against
            model_filter: Optional server-side filter for model selection
        """
        self._schema = schema
        self._output_type = output_type
        self._weight_provider = weight_provider
        self._component_scale = component_scale
        self._ratio_policy = ratio_policy or ShareOfTotalRatioPolicy()
        self._request = WeightRequest(
            schema=schema,
            output_type=output_type,
            energy_source=energy_source,
            model_name=model_name,
            filter=model_filter,
        )
        self._prediction_service = LinearPredictionService(schema)
        self._batch = SampleBatch(schema.width)
        self._weights: ModelWeights | ComponentModelWeights | None = None

    @property
    def schema(self) -> FeatureSchema:
        return self._schema

    @property
    def output_type(self) -> OutputType:
        return self._output_type

    @property
    def is_started(self) -> bool:
        """True once weights have been loaded successfully."""
        return self._weights is not None

    @property
    def component_names(self) -> tuple[str, ...]:
        """Components of the loaded component weights, empty otherwise."""
        if isinstance(self._weights, ComponentModelWeights):
            return self._weights.component_names
        return ()

    @property
    def sample_count(self) -> int:
        return len(self._batch)

    async def start(self) -> None:
        """Fetch the model weights and cache them.

        Calling start again re-fetches and replaces the cached weights.
        The cache is only replaced when the new weights were fetched and
        decoded completely.

        Raises:
            ConfigurationError: If no weight source is configured or the
                weights do not match the output type
            TransportError: If the weight source cannot be reached
            DecodeError: If the weight document is invalid
        """
        _LOGGER.info(
            "Starting %s estimator with %d features",
            self._output_type.value,
            self._schema.width,
        )
        weights = await self._weight_provider.fetch_weights(self._request)

        expected = ComponentModelWeights if self._output_type.is_component else ModelWeights
        if not isinstance(weights, expected):
            raise ConfigurationError(
                f"{self._output_type.value} estimator received {type(weights).__name__}, "
                f"expected {expected.__name__}"
            )

        self._weights = weights
        if isinstance(weights, ComponentModelWeights):
            _LOGGER.info("Loaded weights for components: %s", ", ".join(weights.component_names))
        else:
            _LOGGER.info("Loaded ensemble of %d weight set(s)", len(weights))

    def reset(self) -> None:
        """Discard the accumulated observations."""
        self._batch.reset()

    def reset_sample_idx(self) -> None:
        """Start a new collection cycle, same as reset()."""
        self.reset()

    def append(self, observation: Sequence[float]) -> None:
        """Append one observation to the batch.

        Raises:
            ShapeError: If the observation does not match the schema
        """
        self._batch.append(observation)

    def add_node_feature_values(self, values: Sequence[float]) -> None:
        """Append the feature values of the node."""
        self.append(values)

    def add_container_feature_values(self, values: Sequence[float]) -> None:
        """Append the feature values of one container."""
        self.append(values)

    def predict_platform_power(self, use_ratio: bool = False) -> list[float]:
        """Predict the platform power of every observation, in batch order.

        Args:
            use_ratio: Report each power as a ratio computed by the ratio policy

        Returns:
            One power per observation, empty for an empty batch

        Raises:
            EstimatorNotStartedError: If no weights were loaded
            ConfigurationError: If this is a component estimator
        """
        weights = self._require_weights()
        if not isinstance(weights, ModelWeights):
            raise ConfigurationError(
                f"Platform power is not available from a {self._output_type.value} model"
            )

        powers = self._prediction_service.predict(self._batch.as_matrix(), weights)
        if use_ratio:
            powers = self._ratio_policy.platform_ratios(powers)
        _LOGGER.debug("Predicted platform power for %d observations", powers.shape[0])
        return powers.tolist()

    def predict_component_power(self, use_ratio: bool = False) -> list[ComponentPowerRecord]:
        """Predict the power of every component for every observation.

        Args:
            use_ratio: Report each component power as a ratio computed by the
                ratio policy instead of a scaled absolute value

        Returns:
            One record per observation, empty for an empty batch

        Raises:
            EstimatorNotStartedError: If no weights were loaded
            ConfigurationError: If this is a platform estimator
        """
        weights = self._require_weights()
        if not isinstance(weights, ComponentModelWeights):
            raise ConfigurationError(
                f"Component power is not available from a {self._output_type.value} model"
            )

        powers = self._prediction_service.predict_components(self._batch.as_matrix(), weights)
        powers = powers * self._component_scale
        if use_ratio:
            powers = self._ratio_policy.component_ratios(powers)

        names = weights.component_names
        records = [
            ComponentPowerRecord(powers=dict(zip(names, row)))
            for row in powers.tolist()
        ]
        _LOGGER.debug("Predicted component power for %d observations", len(records))
        return records

    def get_status(self) -> dict[str, object]:
        """Describe the estimator state."""
        return {
            "ready": self.is_started,
            "output_type": self._output_type.value,
            "feature_names": list(self._schema.numerical_feature_names),
            "system_features": self._schema.metadata,
            "components": list(self.component_names),
            "sample_count": self.sample_count,
        }

    def _require_weights(self) -> ModelWeights | ComponentModelWeights:
        if self._weights is None:
            raise EstimatorNotStartedError(
                "Model weights are not loaded, start() must succeed before predicting"
            )
        return self._weights
