"""Pytest configuration for power estimator tests.

This module configures the Python path for tests to find the application
modules and provides the sample model shared by the test suites.
"""

import sys
from pathlib import Path
from typing import Any

import pytest

# Add the application directory to the Python path for test imports
APP_DIR = Path(__file__).parent.parent / "power_estimator_addon" / "rootfs" / "app"
sys.path.insert(0, str(APP_DIR))

from domain.value_objects import FeatureSchema  # noqa: E402

CONTAINER_FEATURE_NAMES = [
    "cpu_cycles",
    "cpu_instructions",
    "cache_miss",
    "cgroupfs_memory_usage_bytes",
    "cgroupfs_kernel_memory_usage_bytes",
    "cgroupfs_tcp_memory_usage_bytes",
    "cgroupfs_cpu_usage_us",
    "cgroupfs_system_cpu_usage_us",
    "cgroupfs_user_cpu_usage_us",
    "bytes_read",
    "bytes_writes",
    "block_devices_used",
    "container_cpu_usage_seconds_total",
    "container_memory_working_set_bytes",
    "node_cpu_usage_seconds_total",
    "node_memory_working_set_bytes",
]
SYSTEM_FEATURE_NAMES = ["cpu_architecture"]
SYSTEM_FEATURE_VALUES = ["Sandy Bridge"]

NODE_FEATURE_VALUES = [2.0] * len(CONTAINER_FEATURE_NAMES)
CONTAINER_FEATURE_VALUES = [
    [1.0] * len(CONTAINER_FEATURE_NAMES),  # container A
    [1.0] * len(CONTAINER_FEATURE_NAMES),  # container B
]


def weight_document(numerical_variables: dict[str, dict[str, float]]) -> dict[str, Any]:
    """Build a single-model weight document with bias 1 and one category."""
    return {
        "All_Weights": {
            "Bias_Weight": 1.0,
            "Categorical_Variables": {
                "cpu_architecture": {"Sandy Bridge": {"weight": 1.0}},
            },
            "Numerical_Variables": numerical_variables,
        }
    }


CORE_NUMERICAL_VARIABLES = {"cpu_cycles": {"weight": 1.0, "mean": 0, "variance": 1}}
DRAM_NUMERICAL_VARIABLES = {"cache_miss": {"weight": 1.0, "mean": 0, "variance": 1}}

POWER_WEIGHT_DOCUMENT = weight_document(CORE_NUMERICAL_VARIABLES)
COMPONENT_WEIGHT_DOCUMENT = {
    "core": weight_document(CORE_NUMERICAL_VARIABLES),
    "dram": weight_document(DRAM_NUMERICAL_VARIABLES),
}


@pytest.fixture
def feature_schema() -> FeatureSchema:
    """Schema of the sample container features on a Sandy Bridge host."""
    return FeatureSchema.from_sequences(
        CONTAINER_FEATURE_NAMES,
        SYSTEM_FEATURE_NAMES,
        SYSTEM_FEATURE_VALUES,
    )


@pytest.fixture
def node_feature_values() -> list[float]:
    return list(NODE_FEATURE_VALUES)


@pytest.fixture
def container_feature_values() -> list[list[float]]:
    return [list(values) for values in CONTAINER_FEATURE_VALUES]


@pytest.fixture
def power_weight_document() -> dict[str, Any]:
    """Single-model document: bias 1, cpu_cycles weight 1, Sandy Bridge weight 1."""
    return POWER_WEIGHT_DOCUMENT


@pytest.fixture
def component_weight_document() -> dict[str, Any]:
    """Component document with "core" on cpu_cycles and "dram" on cache_miss."""
    return COMPONENT_WEIGHT_DOCUMENT
