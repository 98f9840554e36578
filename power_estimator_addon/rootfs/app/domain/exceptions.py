"""Domain exceptions for power estimation."""


class PowerEstimatorError(Exception):
    """Base class for all power estimator errors."""

    pass


class ConfigurationError(PowerEstimatorError):
    """Raised when the estimator or its weight sources are misconfigured.

    Also raised when the fetched weights do not match the requested output
    type, e.g. component weights were requested but a single model was
    returned.
    """

    pass


class EstimatorNotStartedError(ConfigurationError):
    """Raised when a prediction is requested before weights were loaded."""

    pass


class TransportError(PowerEstimatorError):
    """Raised when a weight source cannot be reached or answers with an error."""

    pass


class DecodeError(PowerEstimatorError):
    """Raised when a weight document cannot be parsed."""

    pass


class ShapeError(PowerEstimatorError, ValueError):
    """Raised when an observation does not match the feature schema."""

    pass
