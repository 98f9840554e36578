"""Weight source configuration value object."""

from dataclasses import dataclass


@dataclass(frozen=True)
class WeightSourceConfig:
    """Where model weights are obtained from.

    The model server is tried when it is enabled and has an endpoint,
    otherwise the static initial model URL is used.

    Attributes:
        model_server_enabled: Whether the model server should be queried
        model_server_endpoint: URL weight requests are POSTed to
        initial_model_url: URL of a static weight document
        timeout: Request timeout in seconds
    """

    model_server_enabled: bool = False
    model_server_endpoint: str | None = None
    initial_model_url: str | None = None
    timeout: float = 30.0

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    @property
    def use_model_server(self) -> bool:
        """True if weights should be requested from the model server."""
        return self.model_server_enabled and bool(self.model_server_endpoint)

    @property
    def has_source(self) -> bool:
        """True if at least one weight source is configured."""
        return self.use_model_server or bool(self.initial_model_url)
