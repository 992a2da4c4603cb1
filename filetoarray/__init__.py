"""Convert binary files into C source arrays."""

__version__ = '1.0'
