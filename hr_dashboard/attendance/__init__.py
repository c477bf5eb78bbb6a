"""Attendance module — status maps, availability counts, attendance cache."""
