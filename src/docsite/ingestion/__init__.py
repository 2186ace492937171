"""Document metadata extraction."""
