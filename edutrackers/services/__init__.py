"""Domain helpers layered over the scoped store."""
