"""HTTP surface of the Identity API (blueprints mounted under /api/v1)."""
