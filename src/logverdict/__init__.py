"""logverdict - contract-driven verification of captured run logs."""

__version__ = "0.1.0"
