"""Logging, errors, URL and serialization helpers."""
