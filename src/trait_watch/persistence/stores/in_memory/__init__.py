"""In-memory key-value store."""
