"""Infrastructure layer: database access and book repositories."""
