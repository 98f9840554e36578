"""HTTP weight provider adapter.

Infrastructure adapter that implements IWeightProvider by querying the
model server, or by downloading a static initial model document.

Note: This adapter uses the synchronous requests library. The fetch is
declared async to match the interface but blocks while the single request
is in flight; it runs once when an estimator starts.
"""

import logging

import requests

from domain.exceptions import ConfigurationError, TransportError
from domain.interfaces import IWeightProvider
from domain.value_objects import (
    ComponentModelWeights,
    ModelWeights,
    WeightRequest,
    WeightSourceConfig,
)

from .weight_document import decode_weights

_LOGGER = logging.getLogger(__name__)


class HttpWeightProvider(IWeightProvider):
    """Weight provider backed by the model server or an initial model URL.

    The model server wins when it is enabled. A failing model server is an
    error, there is no silent fallback to the initial model.
    """

    def __init__(self, config: WeightSourceConfig) -> None:
        """Initialize the provider.

        Args:
            config: Weight source configuration
        """
        self._config = config

    async def fetch_weights(
        self, request: WeightRequest
    ) -> ModelWeights | ComponentModelWeights:
        """Fetch and decode the weights for the request.

        Args:
            request: Feature schema and output type of the wanted model

        Returns:
            The decoded weights
        """
        if self._config.use_model_server:
            body = self._request_from_model_server(request)
            source = self._config.model_server_endpoint
        elif self._config.initial_model_url:
            body = self._download_initial_model()
            source = self._config.initial_model_url
        else:
            raise ConfigurationError(
                "No weight source configured: enable the model server endpoint "
                "or set an initial model URL"
            )

        weights = decode_weights(body, request.output_type)
        _LOGGER.info(
            "Loaded %s weights from %s",
            request.output_type.value,
            source,
        )
        return weights

    def _request_from_model_server(self, request: WeightRequest) -> str:
        """POST the weight request to the model server."""
        endpoint = self._config.model_server_endpoint
        _LOGGER.debug("Requesting %s weights from %s", request.output_type.value, endpoint)
        try:
            response = requests.post(
                endpoint,
                json=request.to_payload(),
                timeout=self._config.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"Model server request to {endpoint} failed: {e}") from e

        if response.status_code != 200:
            raise TransportError(
                f"Model server {endpoint} answered with status {response.status_code}"
            )
        return response.text

    def _download_initial_model(self) -> str:
        """GET the static initial model document."""
        url = self._config.initial_model_url
        _LOGGER.debug("Downloading initial model from %s", url)
        try:
            response = requests.get(url, timeout=self._config.timeout)
        except requests.RequestException as e:
            raise TransportError(f"Initial model download from {url} failed: {e}") from e

        if response.status_code != 200:
            raise TransportError(
                f"Initial model URL {url} answered with status {response.status_code}"
            )
        return response.text
