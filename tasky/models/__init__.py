"""Document mappings for Tasky."""
