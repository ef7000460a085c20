"""Learnmap - mindmap of learning entries."""

__version__ = "0.1.0"
