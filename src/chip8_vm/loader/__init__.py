"""ROM loader module."""

from .rom import read_rom

__all__ = ["read_rom"]
