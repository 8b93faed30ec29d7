"""Event types and the listener registry."""
