"""F1 Manager setup optimisation engine."""

__version__ = "0.1.0"
