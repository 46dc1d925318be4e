"""Product opportunity research for Amazon India sellers."""

__version__ = "0.1.0"
