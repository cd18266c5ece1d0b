"""Core foundational models and utilities."""

from .models import StrictBaseModel

__all__ = [
    "StrictBaseModel",
]
