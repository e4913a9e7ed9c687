"""Application layer - ports, authorization components, use cases."""
