"""Synthetic panel generators with known treatment effects."""

from .staggered import StaggeredSimulator, generate

__all__ = ["StaggeredSimulator", "generate"]
