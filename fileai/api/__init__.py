"""External interaction boundary (CLI)."""
