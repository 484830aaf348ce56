"""Client, protocol helpers, state model and entities for Balboa spa controllers on RS-485."""

__version__ = "0.1.0"