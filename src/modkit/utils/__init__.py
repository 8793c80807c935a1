"""Utility modules for modkit."""
