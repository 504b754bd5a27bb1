"""Discovery configuration."""

import os
from dataclasses import dataclass

from ammsim.constants import DEFAULT_DISCOVERY_STEP, DEFAULT_MAX_CONCURRENT_PAGES

STEP_ENV_VAR = "AMMSIM_DISCOVERY_STEP"
MAX_CONCURRENT_PAGES_ENV_VAR = "AMMSIM_MAX_CONCURRENT_PAGES"


def _positive_int_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as err:
        raise ValueError(f"{name} must be an integer, got '{raw}'") from err
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class DiscoveryConfig:
    """Configuration for batched factory discovery.

    Attributes:
        step: Pools per batched getter call, and blocks per log query
            window (default: 766)
        max_concurrent_pages: Page fetches allowed in flight at once
            (default: 8)
    """

    step: int = DEFAULT_DISCOVERY_STEP
    max_concurrent_pages: int = DEFAULT_MAX_CONCURRENT_PAGES

    def __post_init__(self) -> None:
        if self.step <= 0:
            raise ValueError(f"step must be positive, got {self.step}")
        if self.max_concurrent_pages <= 0:
            raise ValueError(f"max_concurrent_pages must be positive, got {self.max_concurrent_pages}")

    @classmethod
    def from_env(cls) -> "DiscoveryConfig":
        """Build a config from environment variables with sensible defaults.

        Configuration via environment variables:
        - AMMSIM_DISCOVERY_STEP: Page size (default: 766)
        - AMMSIM_MAX_CONCURRENT_PAGES: Concurrent page fetches (default: 8)

        Raises:
            ValueError: If a variable is set to a non-positive or non-integer value
        """
        return cls(
            step=_positive_int_from_env(STEP_ENV_VAR, DEFAULT_DISCOVERY_STEP),
            max_concurrent_pages=_positive_int_from_env(
                MAX_CONCURRENT_PAGES_ENV_VAR, DEFAULT_MAX_CONCURRENT_PAGES
            ),
        )


# Default configuration instance
DEFAULT_DISCOVERY_CONFIG = DiscoveryConfig()
