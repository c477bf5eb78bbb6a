"""Dashboard module — summary cards, attendance trend, and trend chart."""
