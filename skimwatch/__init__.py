"""Skimwatch: flag web-skimming requests in a page's network traffic."""

__version__ = "1.0.0"
