"""Time-trial vehicle classification calculator."""

__version__ = "0.1.0"
