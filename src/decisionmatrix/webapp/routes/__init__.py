"""Route blueprints for the webapp."""

from . import api, matrix

__all__ = ["api", "matrix"]
