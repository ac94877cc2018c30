"""Feature modules (vertical slices)."""
