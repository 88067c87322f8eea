"""npmcleaner - find and remove large, stale node_modules folders."""

__version__ = "0.1.0"
