"""Pydantic schemas for Tasky."""
