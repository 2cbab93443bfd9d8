"""Infrastructure layer: SQL statement synthesis."""
