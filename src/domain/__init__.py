"""Domain layer: models, exceptions and pure text processing."""
