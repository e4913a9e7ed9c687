"""Logging and observability setup."""

from fefelina_access.infrastructure.observability.json_logging import (
    JSONFormatter,
    configure_logging,
)

__all__ = ["JSONFormatter", "configure_logging"]
