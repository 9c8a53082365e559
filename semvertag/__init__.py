"""Create semantic version tags in git repositories."""

__version__ = "0.1.0"
