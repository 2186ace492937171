"""AsciiDoc rendering and preview reload."""
