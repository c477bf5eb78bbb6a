"""HR API module — typed async client for the external HR backend."""
