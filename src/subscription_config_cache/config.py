"""
Configuration management for the subscription configuration cache.

Resolves environment variables and default values following the
precedence rules used across the package:

1. Explicit argument (highest precedence)
2. Environment variable
3. Default value (lowest precedence)
"""

import os
from collections.abc import Callable

_TRUTHY = frozenset({"1", "true", "yes", "on"})


class SubscriptionConfigSettings:
    """Configuration manager for the subscription configuration cache."""

    # Environment variable names
    ENV_DONATIONS_ENABLED = "DONATIONS_ENABLED"
    ENV_BASE_URL = "SUBSCRIPTION_CONFIG_URL"
    ENV_TIMEOUT = "SUBSCRIPTION_CONFIG_TIMEOUT"

    # Default values
    DEFAULT_BASE_URL = "https://chat.signal.org"
    DEFAULT_TIMEOUT_SECONDS = 5.0
    CACHE_TTL_SECONDS = 3600

    @classmethod
    def resolve_base_url(cls, explicit_value: str | None = None) -> str:
        """Resolve upstream base URL following precedence rules.

        Args:
            explicit_value: Explicit URL from the caller

        Returns:
            Resolved base URL without trailing slash
        """
        if explicit_value:
            return explicit_value.rstrip("/")

        env_value = os.getenv(cls.ENV_BASE_URL)
        if env_value:
            return env_value.rstrip("/")

        return cls.DEFAULT_BASE_URL

    @classmethod
    def resolve_timeout(cls, explicit_value: float | None = None) -> float:
        """Resolve HTTP timeout in seconds.

        Args:
            explicit_value: Explicit timeout from the caller

        Returns:
            Resolved timeout

        Raises:
            ValueError: If the resolved timeout is not positive
        """
        if explicit_value is not None:
            timeout = float(explicit_value)
        else:
            env_value = os.getenv(cls.ENV_TIMEOUT)
            timeout = float(env_value) if env_value else cls.DEFAULT_TIMEOUT_SECONDS

        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        return timeout

    @classmethod
    def donations_enabled(cls) -> bool:
        """Read the local enablement flag from the environment."""
        return os.getenv(cls.ENV_DONATIONS_ENABLED, "").strip().lower() in _TRUTHY


def env_feature_check() -> Callable[[], bool]:
    """Return a check that re-reads ``DONATIONS_ENABLED`` on every call."""
    return SubscriptionConfigSettings.donations_enabled
