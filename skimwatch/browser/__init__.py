"""Playwright traffic capture."""
