"""Configuration, logging, SQLite storage and menu operations for a small ordering system."""

__version__ = "0.1.0"