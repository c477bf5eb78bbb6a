"""Proxy module — forwards employee and attendance writes to the HR API."""
