"""create-t3-fire -- scaffold T3 apps with optional Firebase support."""

__version__ = "0.1.0"
