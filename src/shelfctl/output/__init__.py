"""Output layer: command envelope, Rich rendering and JSON formatting."""
