"""Kindred - genealogy record management backend"""

__version__ = "2.1.0"
