"""Per-test CI gating status for an artifact dashboard."""
