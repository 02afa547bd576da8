"""timerpie: a radial countdown-timer engine."""

__version__ = "0.1.0"
