"""Risk Policy Gate - CI preflight for pull request risk tiering."""

__version__ = "0.1.0"
