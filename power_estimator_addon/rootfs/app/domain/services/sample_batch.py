"""Sample batch domain service.

Accumulates observations between collection cycles.
"""

import logging
from typing import Iterator, Sequence

import numpy as np

from domain.exceptions import ShapeError

_LOGGER = logging.getLogger(__name__)


class SampleBatch:
    """Ordered, growable collection of observation vectors.

    The insertion order is the contract used to align predictions back to
    their source, e.g. the index of a container. The batch is never reset
    implicitly: callers reset it at the start of every collection cycle.
    """

    def __init__(self, width: int) -> None:
        """Initialize an empty batch.

        Args:
            width: Number of numerical features in every observation

        Raises:
            ValueError: If width is negative
        """
        if width < 0:
            raise ValueError(f"width must be non-negative, got {width}")
        self._width = width
        self._observations: list[tuple[float, ...]] = []

    @property
    def width(self) -> int:
        """Return the expected observation length."""
        return self._width

    def reset(self) -> None:
        """Discard all accumulated observations."""
        self._observations.clear()

    def append(self, observation: Sequence[float]) -> None:
        """Append an observation at the end of the batch.

        Args:
            observation: One value per numerical feature, in schema order

        Raises:
            ShapeError: If the observation length does not match the schema
        """
        if len(observation) != self._width:
            raise ShapeError(
                f"Observation has {len(observation)} values, expected {self._width}"
            )
        self._observations.append(tuple(float(value) for value in observation))
        _LOGGER.debug("Appended observation #%d", len(self._observations))

    def as_matrix(self) -> np.ndarray:
        """Return the batch as a (n_observations, width) float64 array."""
        matrix = np.empty((len(self._observations), self._width), dtype=np.float64)
        for row, observation in enumerate(self._observations):
            matrix[row] = observation
        return matrix

    def __len__(self) -> int:
        return len(self._observations)

    def __iter__(self) -> Iterator[tuple[float, ...]]:
        return iter(self._observations)
