"""Unix socket bridge for Windows toast notifications from WSL."""

__version__ = "0.1.0"
