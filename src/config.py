"""
Centralized configuration for the mail host resolver.
All environment variables are read and validated here.
"""

import os


def _optional(name: str) -> str | None:
    value = os.getenv(name, "").strip()
    return value or None


class Config:
    """Resolver configuration with validation."""

    # Library version (single source of truth)
    VERSION: str = "1.0.0"

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Upstream nameserver (hostname or IP literal); unset = platform default
    DNS_NAMESERVER: str | None = _optional("DNS_NAMESERVER")

    # Per-query lifetime handed to dnspython
    DNS_TIMEOUT_SECONDS: float = float(os.getenv("DNS_TIMEOUT_SECONDS", "5.0"))

    # Cache tunables (internal constants, not read from the environment)
    DNS_CACHE_MAX_ENTRIES: int = 128
    DNS_CACHE_TTL_SECONDS: int = 30 * 60

    # Priority given to A records lifted into mail-exchange entries
    MX_FALLBACK_PRIORITY: int = 100

    @classmethod
    def validate(cls) -> None:
        """Validate configuration values."""
        if cls.LOG_LEVEL not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"LOG_LEVEL must be valid logging level, got '{cls.LOG_LEVEL}'")

        if cls.DNS_TIMEOUT_SECONDS <= 0 or cls.DNS_TIMEOUT_SECONDS > 300:
            raise ValueError(
                f"DNS_TIMEOUT_SECONDS must be between 0 and 300, got {cls.DNS_TIMEOUT_SECONDS}"
            )


# Validate on import
Config.validate()
