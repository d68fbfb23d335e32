"""Serializers for the problem archive document."""

from .yaml_writer import build_yaml, render_literal_field

__all__ = ["build_yaml", "render_literal_field"]
