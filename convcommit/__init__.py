"""Interactive Conventional Commits helper."""

__version__ = "1.0.0"
