"""Storage layer for the D&D game backend: schema catalog, connection resolver, migration runner."""

__version__ = "0.1.0"
