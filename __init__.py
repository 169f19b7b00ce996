"""Visited / planned countries map and the checks for the post that describes it"""

__version__ = "0.1.0"
