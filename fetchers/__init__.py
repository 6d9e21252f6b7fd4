"""Per-site job fetchers."""
