"""Core modules for Tasky."""
