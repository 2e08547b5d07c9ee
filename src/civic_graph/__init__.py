"""Integrity and migration toolchain for the civic government-structure graph."""

__version__ = "0.1.0"
