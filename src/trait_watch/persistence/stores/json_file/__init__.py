"""JSON-file key-value store."""
