"""drafter: release draft generator."""

__version__ = "0.1.0"
