"""Bank keeper, contract wrappers, address tools and test helpers for a simulated chain."""

__version__ = "0.20.0"