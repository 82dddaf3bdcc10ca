"""Read-only HTTP query API over MongoDB-hosted F1 race data."""

__version__ = "1.0.0"
