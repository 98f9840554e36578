"""Domain services for power estimation.

Services contain pure business logic and operate on value objects.
"""

from .linear_prediction_service import LinearPredictionService
from .sample_batch import SampleBatch
from .share_of_total_ratio_policy import ShareOfTotalRatioPolicy

__all__ = [
    "LinearPredictionService",
    "SampleBatch",
    "ShareOfTotalRatioPolicy",
]
