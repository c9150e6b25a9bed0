"""Encoding and decoding of FIX tag-value messages."""

__version__ = "0.1.0"