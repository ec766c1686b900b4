"""HTTP API for the review scheduler."""

__version__ = "0.1.0"
