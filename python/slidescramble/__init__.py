"""Verified scramble sheets for sliding tile puzzles."""

__version__ = "0.1.0"
