"""Fefelina access - authorization and data-visibility engine."""

__version__ = "0.1.0"
