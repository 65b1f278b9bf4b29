"""Core module - settings and error taxonomy."""
