"""Text compression by PPM context modelling with adaptive Huffman codes."""

__version__ = "1.0.0"
__all__ = ["__version__"]