"""Ratio policy interface.

Contract for turning raw power estimates into ratios of a total.
"""

from abc import ABC, abstractmethod

import numpy as np


class IRatioPolicy(ABC):
    """Contract for converting absolute power estimates into ratios.

    Policies are applied after the linear prediction and must not modify
    their input arrays.
    """

    @abstractmethod
    def platform_ratios(self, powers: np.ndarray) -> np.ndarray:
        """Convert one platform power per observation into ratios.

        Args:
            powers: Array of shape (n_observations,)

        Returns:
            Array of the same shape
        """
        pass

    @abstractmethod
    def component_ratios(self, powers: np.ndarray) -> np.ndarray:
        """Convert per-component powers into ratios.

        Args:
            powers: Array of shape (n_observations, n_components)

        Returns:
            Array of the same shape
        """
        pass
