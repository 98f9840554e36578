"""Flask HTTP API Server.

HTTP API exposing the linear-regression power estimator.
Provides endpoints for weight loading and power prediction.
"""

import asyncio
import logging
import os
import sys
import threading
from datetime import datetime
from functools import wraps
from pathlib import Path
from typing import Any, Callable

from flask import Flask, Response, jsonify, request

# Add app directory to Python path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from application.services import COMPONENT_POWER_SCALE, LinearRegressionEstimator
from domain.exceptions import (
    ConfigurationError,
    DecodeError,
    EstimatorNotStartedError,
    PowerEstimatorError,
    ShapeError,
    TransportError,
)
from domain.value_objects import FeatureSchema, OutputType, WeightSourceConfig
from infrastructure.adapters import HttpWeightProvider

# Configure logging
log_level = os.getenv("LOG_LEVEL", "info").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
_LOGGER = logging.getLogger(__name__)

DEFAULT_FEATURE_NAMES = "cpu_cycles,cpu_instructions,cache_miss"


def _env_list(name: str, default: str = "") -> list[str]:
    """Read a comma-separated list from the environment."""
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _is_number(value: Any) -> bool:
    """True for JSON numbers, JSON booleans excluded."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


# Create Flask app
app = Flask(__name__)

# Initialize services
weight_source_config = WeightSourceConfig(
    model_server_enabled=_env_bool("MODEL_SERVER_ENABLE"),
    model_server_endpoint=os.getenv("MODEL_SERVER_ENDPOINT") or None,
    initial_model_url=os.getenv("INITIAL_MODEL_URL") or None,
    timeout=float(os.getenv("MODEL_FETCH_TIMEOUT", "30")),
)
feature_schema = FeatureSchema.from_sequences(
    numerical_feature_names=_env_list("MODEL_FEATURE_NAMES", DEFAULT_FEATURE_NAMES),
    metadata_feature_names=_env_list("SYSTEM_FEATURE_NAMES"),
    metadata_feature_values=_env_list("SYSTEM_FEATURE_VALUES"),
)
estimator = LinearRegressionEstimator(
    schema=feature_schema,
    output_type=OutputType.parse(os.getenv("MODEL_OUTPUT_TYPE", "AbsModelWeight")),
    weight_provider=HttpWeightProvider(weight_source_config),
    component_scale=float(os.getenv("COMPONENT_POWER_SCALE", str(COMPONENT_POWER_SCALE))),
    model_name=os.getenv("MODEL_NAME") or None,
    energy_source=os.getenv("ENERGY_SOURCE", "rapl"),
    model_filter=os.getenv("MODEL_FILTER") or None,
)

# The estimator keeps a mutable sample batch, one request at a time
estimator_lock = threading.Lock()

_LOGGER.info("=" * 60)
_LOGGER.info("Power Estimator Configuration")
_LOGGER.info("=" * 60)
_LOGGER.info("Output type: %s", estimator.output_type.value)
_LOGGER.info("Features: %s", ", ".join(feature_schema.numerical_feature_names))
_LOGGER.info("System features: %s", feature_schema.metadata or "(none)")
_LOGGER.info("Model server: %s", weight_source_config.model_server_endpoint
             if weight_source_config.use_model_server else "(disabled)")
_LOGGER.info("Initial model URL: %s", weight_source_config.initial_model_url or "(not set)")
_LOGGER.info("=" * 60)


def async_route(f: Callable) -> Callable:
    """Decorator to run async functions in Flask routes.

    Uses asyncio.run() for proper event loop lifecycle management.
    """
    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return asyncio.run(f(*args, **kwargs))
    return wrapper


@app.route("/health", methods=["GET"])
def health_check() -> Response:
    """Health check endpoint."""
    return jsonify({
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
    })


@app.route("/api/v1/status", methods=["GET"])
def get_status() -> Response:
    """Get estimator status."""
    with estimator_lock:
        return jsonify(estimator.get_status())


@app.route("/api/v1/weights/reload", methods=["POST"])
@async_route
async def reload_weights() -> Response:
    """Fetch the model weights again and replace the cached ones."""
    try:
        # Held during the blocking fetch: predictions wait for the new weights
        with estimator_lock:
            await estimator.start()
            status = estimator.get_status()
        return jsonify({"success": True, **status})

    except ConfigurationError as e:
        _LOGGER.error("Invalid weight configuration: %s", e)
        return jsonify({"error": str(e)}), 400
    except (TransportError, DecodeError) as e:
        _LOGGER.error("Failed to load model weights: %s", e)
        return jsonify({"error": str(e)}), 502
    except Exception as e:
        _LOGGER.exception("Error reloading weights")
        return jsonify({"error": str(e)}), 500


@app.route("/api/v1/predict", methods=["POST"])
def predict() -> Response:
    """Estimate power for a batch of observations.

    Request body:
    {
        "observations": [[float, ...], ...] (one value per feature name),
        "use_ratio": bool (optional, default: false)
    }
    """
    try:
        data = request.get_json(silent=True)
        if not data:
            return jsonify({"error": "No data provided"}), 400

        observations = data.get("observations")
        if not isinstance(observations, list):
            return jsonify({"error": "observations must be a list of feature vectors"}), 400
        for observation in observations:
            if not isinstance(observation, list) or not all(_is_number(v) for v in observation):
                return jsonify({
                    "error": "every observation must be a list of numbers",
                }), 400

        use_ratio = data.get("use_ratio", False)
        if not isinstance(use_ratio, bool):
            return jsonify({"error": "use_ratio must be a boolean"}), 400

        with estimator_lock:
            estimator.reset()
            for observation in observations:
                estimator.append([float(value) for value in observation])

            if estimator.output_type.is_component:
                records = estimator.predict_component_power(use_ratio)
                powers: list[Any] = [record.to_dict() for record in records]
            else:
                powers = estimator.predict_platform_power(use_ratio)

        return jsonify({
            "success": True,
            "output_type": estimator.output_type.value,
            "use_ratio": use_ratio,
            "powers": powers,
        })

    except EstimatorNotStartedError as e:
        return jsonify({"error": str(e)}), 503
    except ShapeError as e:
        _LOGGER.warning("Invalid observation: %s", e)
        return jsonify({"error": str(e)}), 400
    except (TypeError, ValueError) as e:
        _LOGGER.warning("Invalid prediction request: %s", e)
        return jsonify({"error": f"Invalid data: {e}"}), 400
    except Exception as e:
        _LOGGER.exception("Error making prediction")
        return jsonify({"error": str(e)}), 500


def main() -> None:
    """Main entry point for the server."""
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "5000"))

    try:
        asyncio.run(estimator.start())
    except PowerEstimatorError as e:
        _LOGGER.error("Model weights not loaded at startup: %s", e)
        _LOGGER.error("Predictions are unavailable until POST /api/v1/weights/reload succeeds")

    _LOGGER.info("Starting power estimator API server on %s:%d", host, port)
    app.run(host=host, port=port, debug=False)


if __name__ == "__main__":
    main()
