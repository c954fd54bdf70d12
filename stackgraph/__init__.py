"""Build and export resource dependency graphs from deployment snapshots."""

__version__ = "0.1.0"
