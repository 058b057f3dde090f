"""HTTP service for marketplace sponsored listings."""
