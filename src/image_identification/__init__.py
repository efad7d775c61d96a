"""Image identification function: classify uploaded images and store the result."""

__version__ = "0.1.0"
