"""Sharing use cases."""
