"""Hover linking across panels."""

from .coordinator import LinkCoordinator

__all__ = ["LinkCoordinator"]
