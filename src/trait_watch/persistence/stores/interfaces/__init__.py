"""Key-value store interface."""
