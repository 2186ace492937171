"""Menu index building, persistence and watching."""
