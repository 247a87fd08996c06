"""Two-player hotseat chess with pseudo-legal move checking."""

__version__ = "0.1.0"
