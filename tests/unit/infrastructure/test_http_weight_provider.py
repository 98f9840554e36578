"""Unit tests for the HTTP weight provider adapter."""

import json
from unittest.mock import Mock, patch

import pytest
import requests
from domain.exceptions import ConfigurationError, DecodeError, TransportError
from domain.value_objects import (
    ComponentModelWeights,
    ModelWeights,
    OutputType,
    WeightRequest,
    WeightSourceConfig,
)
from infrastructure.adapters import HttpWeightProvider

MODEL_SERVER_ENDPOINT = "http://kepler-model-server:8100/model"
INITIAL_MODEL_URL = "http://models.local/AbsComponentModelWeight/KerasCompWeightFullPipeline.json"


def mock_response(status_code: int = 200, body: object = None) -> Mock:
    response = Mock()
    response.status_code = status_code
    response.text = body if isinstance(body, str) else json.dumps(body)
    return response


@pytest.fixture
def power_request(feature_schema) -> WeightRequest:
    return WeightRequest(schema=feature_schema, output_type=OutputType.ABS_MODEL_WEIGHT)


@pytest.fixture
def component_request(feature_schema) -> WeightRequest:
    return WeightRequest(schema=feature_schema, output_type=OutputType.DYN_COMPONENT_MODEL_WEIGHT)


class TestModelServer:
    """Tests for weights requested from the model server."""

    @pytest.mark.asyncio
    async def test_posts_request_to_endpoint(self, power_request, power_weight_document) -> None:
        provider = HttpWeightProvider(WeightSourceConfig(
            model_server_enabled=True,
            model_server_endpoint=MODEL_SERVER_ENDPOINT,
            timeout=5,
        ))

        with patch("infrastructure.adapters.http_weight_provider.requests.post") as mock_post:
            mock_post.return_value = mock_response(body=power_weight_document)

            weights = await provider.fetch_weights(power_request)

            assert isinstance(weights, ModelWeights)
            assert mock_post.call_args[0][0] == MODEL_SERVER_ENDPOINT
            assert mock_post.call_args.kwargs["json"] == power_request.to_payload()
            assert mock_post.call_args.kwargs["timeout"] == 5

    @pytest.mark.asyncio
    async def test_component_output_type_decodes_components(
        self, component_request, component_weight_document
    ) -> None:
        provider = HttpWeightProvider(WeightSourceConfig(
            model_server_enabled=True,
            model_server_endpoint=MODEL_SERVER_ENDPOINT,
        ))

        with patch("infrastructure.adapters.http_weight_provider.requests.post") as mock_post:
            mock_post.return_value = mock_response(body=component_weight_document)

            weights = await provider.fetch_weights(component_request)

            assert isinstance(weights, ComponentModelWeights)
            assert weights.component_names == ("core", "dram")
            assert mock_post.call_args.kwargs["json"]["output_type"] == "DynComponentModelWeight"

    @pytest.mark.asyncio
    async def test_model_server_wins_over_initial_model(
        self, power_request, power_weight_document
    ) -> None:
        provider = HttpWeightProvider(WeightSourceConfig(
            model_server_enabled=True,
            model_server_endpoint=MODEL_SERVER_ENDPOINT,
            initial_model_url=INITIAL_MODEL_URL,
        ))

        with patch("infrastructure.adapters.http_weight_provider.requests.post") as mock_post, \
                patch("infrastructure.adapters.http_weight_provider.requests.get") as mock_get:
            mock_post.return_value = mock_response(body=power_weight_document)

            await provider.fetch_weights(power_request)

            mock_post.assert_called_once()
            mock_get.assert_not_called()

    @pytest.mark.asyncio
    async def test_connection_error_raises_transport_error(self, power_request) -> None:
        """Test that a failing model server does not fall back to the initial model."""
        provider = HttpWeightProvider(WeightSourceConfig(
            model_server_enabled=True,
            model_server_endpoint=MODEL_SERVER_ENDPOINT,
            initial_model_url=INITIAL_MODEL_URL,
        ))

        with patch("infrastructure.adapters.http_weight_provider.requests.post") as mock_post, \
                patch("infrastructure.adapters.http_weight_provider.requests.get") as mock_get:
            mock_post.side_effect = requests.ConnectionError("Connection refused")

            with pytest.raises(TransportError, match="Connection refused"):
                await provider.fetch_weights(power_request)
            mock_get.assert_not_called()

    @pytest.mark.asyncio
    async def test_non_200_status_raises_transport_error(self, power_request) -> None:
        provider = HttpWeightProvider(WeightSourceConfig(
            model_server_enabled=True,
            model_server_endpoint=MODEL_SERVER_ENDPOINT,
        ))

        with patch("infrastructure.adapters.http_weight_provider.requests.post") as mock_post:
            mock_post.return_value = mock_response(status_code=404, body="no model found")

            with pytest.raises(TransportError, match="status 404"):
                await provider.fetch_weights(power_request)

    @pytest.mark.asyncio
    async def test_invalid_body_raises_decode_error(self, power_request) -> None:
        provider = HttpWeightProvider(WeightSourceConfig(
            model_server_enabled=True,
            model_server_endpoint=MODEL_SERVER_ENDPOINT,
        ))

        with patch("infrastructure.adapters.http_weight_provider.requests.post") as mock_post:
            mock_post.return_value = mock_response(body="not json")

            with pytest.raises(DecodeError):
                await provider.fetch_weights(power_request)


class TestInitialModel:
    """Tests for weights downloaded from the initial model URL."""

    @pytest.mark.asyncio
    async def test_downloads_initial_model(
        self, component_request, component_weight_document
    ) -> None:
        provider = HttpWeightProvider(WeightSourceConfig(initial_model_url=INITIAL_MODEL_URL))

        with patch("infrastructure.adapters.http_weight_provider.requests.get") as mock_get, \
                patch("infrastructure.adapters.http_weight_provider.requests.post") as mock_post:
            mock_get.return_value = mock_response(body=component_weight_document)

            weights = await provider.fetch_weights(component_request)

            assert isinstance(weights, ComponentModelWeights)
            assert mock_get.call_args[0][0] == INITIAL_MODEL_URL
            mock_post.assert_not_called()

    @pytest.mark.asyncio
    async def test_disabled_model_server_uses_initial_model(
        self, power_request, power_weight_document
    ) -> None:
        provider = HttpWeightProvider(WeightSourceConfig(
            model_server_enabled=False,
            model_server_endpoint=MODEL_SERVER_ENDPOINT,
            initial_model_url=INITIAL_MODEL_URL,
        ))

        with patch("infrastructure.adapters.http_weight_provider.requests.get") as mock_get:
            mock_get.return_value = mock_response(body=power_weight_document)

            weights = await provider.fetch_weights(power_request)

            assert isinstance(weights, ModelWeights)

    @pytest.mark.asyncio
    async def test_timeout_raises_transport_error(self, power_request) -> None:
        provider = HttpWeightProvider(WeightSourceConfig(initial_model_url=INITIAL_MODEL_URL))

        with patch("infrastructure.adapters.http_weight_provider.requests.get") as mock_get:
            mock_get.side_effect = requests.Timeout("timed out")

            with pytest.raises(TransportError, match="timed out"):
                await provider.fetch_weights(power_request)

    @pytest.mark.asyncio
    async def test_non_200_status_raises_transport_error(self, power_request) -> None:
        provider = HttpWeightProvider(WeightSourceConfig(initial_model_url=INITIAL_MODEL_URL))

        with patch("infrastructure.adapters.http_weight_provider.requests.get") as mock_get:
            mock_get.return_value = mock_response(status_code=500, body="")

            with pytest.raises(TransportError, match="status 500"):
                await provider.fetch_weights(power_request)

    @pytest.mark.asyncio
    async def test_single_model_for_component_request_raises_configuration_error(
        self, component_request, power_weight_document
    ) -> None:
        provider = HttpWeightProvider(WeightSourceConfig(initial_model_url=INITIAL_MODEL_URL))

        with patch("infrastructure.adapters.http_weight_provider.requests.get") as mock_get:
            mock_get.return_value = mock_response(body=power_weight_document)

            with pytest.raises(ConfigurationError):
                await provider.fetch_weights(component_request)


class TestNoSource:
    """Tests for a provider without weight source."""

    @pytest.mark.asyncio
    async def test_no_source_raises_configuration_error(self, power_request) -> None:
        provider = HttpWeightProvider(WeightSourceConfig())

        with patch("infrastructure.adapters.http_weight_provider.requests.get") as mock_get:
            with pytest.raises(ConfigurationError, match="No weight source configured"):
                await provider.fetch_weights(power_request)
            mock_get.assert_not_called()
