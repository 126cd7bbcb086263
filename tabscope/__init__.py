"""tabscope - a keyboard-driven terminal viewer for tabular data."""

__version__ = "0.1.0"
