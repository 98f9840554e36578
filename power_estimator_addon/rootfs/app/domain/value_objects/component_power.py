"""Component power value object."""

from dataclasses import dataclass
from typing import Iterator, Mapping


@dataclass(frozen=True)
class ComponentPowerRecord:
    """Estimated power of each hardware component for one observation.

    Attributes:
        powers: Component name -> estimated power
    """

    powers: Mapping[str, float]

    def __getitem__(self, component: str) -> float:
        return self.powers[component]

    def __iter__(self) -> Iterator[str]:
        return iter(self.powers)

    def __len__(self) -> int:
        return len(self.powers)

    def get(self, component: str, default: float = 0.0) -> float:
        """Return the power of a component or default if it was not modelled."""
        return self.powers.get(component, default)

    @property
    def core(self) -> float:
        return self.get("core")

    @property
    def dram(self) -> float:
        return self.get("dram")

    @property
    def uncore(self) -> float:
        return self.get("uncore")

    @property
    def pkg(self) -> float:
        """Package power, published as either "pkg" or "package"."""
        return self.powers.get("pkg", self.get("package"))

    @property
    def total(self) -> float:
        """Sum over all components."""
        return float(sum(self.powers.values()))

    def to_dict(self) -> dict[str, float]:
        return dict(self.powers)
