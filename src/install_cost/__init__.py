"""install-cost: measure the isolated install cost of every npm dependency."""

__version__ = "0.1.0"
