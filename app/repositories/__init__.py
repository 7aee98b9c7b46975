"""Query builders for persisted entities."""
