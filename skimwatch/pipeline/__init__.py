"""End-to-end analysis runs."""
