"""Authentication transport adapters."""
