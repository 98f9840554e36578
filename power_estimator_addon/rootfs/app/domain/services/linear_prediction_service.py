"""Linear prediction domain service.

Pure linear-regression math turning observation batches into power
estimates. Each weight set standardizes the numerical features with the
mean and variance seen at training time:

    power = bias
            + sum(weight * (x - mean) / sqrt(variance))   for matched features
            + sum(categorical weight)                     for matched categories

Features or categories missing from a weight set contribute nothing.
Ensembles average the predictions of their members.
"""

import numpy as np

from domain.value_objects import (
    ComponentModelWeights,
    FeatureSchema,
    ModelWeights,
    WeightSet,
)


class LinearPredictionService:
    """Service computing linear power predictions for a feature schema.

    This service never mutates the observations or the weights it is given.
    """

    def __init__(self, schema: FeatureSchema) -> None:
        """Initialize the prediction service.

        Args:
            schema: Positional meaning of observation columns and the fixed
                host metadata values
        """
        self._schema = schema

    def predict_weight_set(self, observations: np.ndarray, weight_set: WeightSet) -> np.ndarray:
        """Predict one value per observation with a single weight set.

        Args:
            observations: Array of shape (n_observations, n_features)
            weight_set: Trained coefficients

        Returns:
            Array of shape (n_observations,)
        """
        columns, weights, means, scales = self._numerical_coefficients(weight_set)
        offset = weight_set.bias + self._categorical_offset(weight_set)

        predictions = np.full(observations.shape[0], offset, dtype=np.float64)
        if columns:
            standardized = (observations[:, columns] - means) / scales
            predictions += standardized @ weights
        return predictions

    def predict(self, observations: np.ndarray, model_weights: ModelWeights) -> np.ndarray:
        """Predict one value per observation with an ensemble.

        Returns:
            Array of shape (n_observations,) holding the mean of the member
            predictions
        """
        member_predictions = np.stack(
            [self.predict_weight_set(observations, weight_set) for weight_set in model_weights]
        )
        return member_predictions.mean(axis=0)

    def predict_components(
        self,
        observations: np.ndarray,
        component_weights: ComponentModelWeights,
    ) -> np.ndarray:
        """Predict every component independently.

        Returns:
            Array of shape (n_observations, n_components), columns in
            component_weights.component_names order
        """
        columns = [
            self.predict(observations, model_weights)
            for _, model_weights in component_weights.items()
        ]
        return np.column_stack(columns).reshape(observations.shape[0], len(columns))

    def _numerical_coefficients(
        self, weight_set: WeightSet
    ) -> tuple[list[int], np.ndarray, np.ndarray, np.ndarray]:
        """Align the numerical coefficients of a weight set with the schema.

        Returns:
            Tuple of (matched column indexes, weights, means, scales)
        """
        columns: list[int] = []
        weights: list[float] = []
        means: list[float] = []
        scales: list[float] = []
        for index, name in enumerate(self._schema.numerical_feature_names):
            coefficient = weight_set.numerical_weights.get(name)
            if coefficient is None:
                continue
            columns.append(index)
            weights.append(coefficient.weight)
            means.append(coefficient.mean)
            # Non-positive variance means the feature was not standardized
            scales.append(np.sqrt(coefficient.variance) if coefficient.variance > 0 else 1.0)
        return (
            columns,
            np.asarray(weights, dtype=np.float64),
            np.asarray(means, dtype=np.float64),
            np.asarray(scales, dtype=np.float64),
        )

    def _categorical_offset(self, weight_set: WeightSet) -> float:
        """Sum the weights of the host metadata categories."""
        return sum(
            weight_set.categorical_weight(name, value)
            for name, value in zip(
                self._schema.metadata_feature_names,
                self._schema.metadata_feature_values,
            )
        )
