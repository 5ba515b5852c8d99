"""smoothjs-scaffold -- project generator and structure validator for SmoothJS apps."""

__version__ = "1.0.0"
