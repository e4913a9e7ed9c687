"""PostgreSQL adapters for the backing-store ports."""
