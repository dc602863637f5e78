"""Camera module for primary ray generation."""

from .pinhole import PinholeCamera

__all__ = ["PinholeCamera"]
