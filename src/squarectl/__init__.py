"""squarectl — spiral grid placement for colored squares."""

__version__ = "0.1.0"
