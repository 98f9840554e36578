"""Pytest fixtures for integration tests.

This module provides fixtures for testing the Flask API with a mocked
model server.
"""

import json
from typing import Any
from unittest.mock import Mock, patch

import pytest

from application.services import LinearRegressionEstimator
from domain.value_objects import FeatureSchema, OutputType, WeightSourceConfig
from infrastructure.adapters import HttpWeightProvider


@pytest.fixture
def mock_model_server(
    power_weight_document: dict[str, Any],
    component_weight_document: dict[str, Any],
) -> Mock:
    """Patch requests.post to answer like the model server."""

    def answer(url: str, **kwargs: Any) -> Mock:
        response = Mock()
        response.status_code = 200
        if OutputType.parse(kwargs["json"]["output_type"]).is_component:
            response.text = json.dumps(component_weight_document)
        else:
            response.text = json.dumps(power_weight_document)
        return response

    with patch("infrastructure.adapters.http_weight_provider.requests.post") as mock_post:
        mock_post.side_effect = answer
        yield mock_post


def make_estimator(schema: FeatureSchema, output_type: OutputType) -> LinearRegressionEstimator:
    provider = HttpWeightProvider(WeightSourceConfig(
        model_server_enabled=True,
        model_server_endpoint="http://kepler-model-server:8100/model",
    ))
    return LinearRegressionEstimator(schema, output_type, provider)


@pytest.fixture
def estimator(feature_schema: FeatureSchema) -> LinearRegressionEstimator:
    """Platform power estimator for container observations."""
    return make_estimator(feature_schema, OutputType.DYN_MODEL_WEIGHT)


@pytest.fixture
def component_estimator(feature_schema: FeatureSchema) -> LinearRegressionEstimator:
    return make_estimator(feature_schema, OutputType.DYN_COMPONENT_MODEL_WEIGHT)


def _app_with(estimator: LinearRegressionEstimator) -> Any:
    import infrastructure.api.server as server_module

    with patch.object(server_module, "estimator", estimator):
        app = server_module.app
        app.config["TESTING"] = True
        yield app


@pytest.fixture
def flask_app(estimator: LinearRegressionEstimator, mock_model_server: Mock) -> Any:
    """Create a Flask test app serving the platform estimator.

    This fixture patches the global estimator in the server module.
    """
    yield from _app_with(estimator)


@pytest.fixture
def client(flask_app: Any) -> Any:
    """Create a Flask test client."""
    return flask_app.test_client()


@pytest.fixture
def component_app(component_estimator: LinearRegressionEstimator, mock_model_server: Mock) -> Any:
    """Create a Flask test app serving the component estimator."""
    yield from _app_with(component_estimator)


@pytest.fixture
def component_client(component_app: Any) -> Any:
    return component_app.test_client()
