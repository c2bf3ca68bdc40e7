"""A tile-based puzzle game: collect every crystal, then reach the exit.

Holds map validation, game rules, an XPM reader and a pygame front end.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]