"""Share-of-total ratio policy."""

import numpy as np

from domain.interfaces import IRatioPolicy


class ShareOfTotalRatioPolicy(IRatioPolicy):
    """Express every estimate as its share of the summed estimates.

    Platform powers are divided by the batch total, so each workload gets
    its fraction of the power predicted for the whole batch. Component
    powers are divided by the total of their own observation. A zero total
    yields zero ratios.
    """

    def platform_ratios(self, powers: np.ndarray) -> np.ndarray:
        total = powers.sum()
        if total == 0:
            return np.zeros_like(powers)
        return powers / total

    def component_ratios(self, powers: np.ndarray) -> np.ndarray:
        totals = powers.sum(axis=1, keepdims=True)
        return np.divide(
            powers,
            totals,
            out=np.zeros_like(powers),
            where=totals != 0,
        )
