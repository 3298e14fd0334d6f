"""Route group exports."""

from . import boundaries, coverage, health, offices

__all__ = ["coverage", "offices", "boundaries", "health"]
