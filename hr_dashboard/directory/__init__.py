"""Directory module — searchable, filterable, paginated employee availability views."""
