"""
Swatch

Reduces an image to a small palette with the median-cut algorithm and
orders the result for presentation.
"""

__version__ = "1.0.0"
