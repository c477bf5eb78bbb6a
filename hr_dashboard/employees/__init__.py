"""Employees module — editable all-employees roster."""
