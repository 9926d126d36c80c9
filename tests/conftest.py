"""Shared fixtures for the test suite."""

from __future__ import annotations

import json
import pathlib

import pytest

from skimwatch.analysis import patterns
from skimwatch.models import traffic

# ── Request Entry Factories ─────────────────────────────────────


@pytest.fixture()
def image_entry() -> traffic.RequestEntry:
    """A first-party PNG image."""
    return traffic.RequestEntry(
        request_url="https://shop.example.com/img/logo.png?v=3",
        response_headers=(("Content-Type", "image/png"), ("Cache-Control", "max-age=600")),
        status=200,
    )


@pytest.fixture()
def skimmer_entry() -> traffic.RequestEntry:
    """An HTML response served from a known skimmer CDN."""
    return traffic.RequestEntry(
        request_url="https://evil-cdn.net/checkout/loader.html",
        response_headers=(("content-type", "text/html; charset=utf-8"),),
        status=200,
    )


@pytest.fixture()
def failed_entry() -> traffic.RequestEntry:
    """A request that never received a response."""
    return traffic.RequestEntry(request_url="https://cdn.example.org/app.js")


@pytest.fixture()
def scenario_log(
    image_entry: traffic.RequestEntry,
    skimmer_entry: traffic.RequestEntry,
    failed_entry: traffic.RequestEntry,
) -> traffic.TrafficLog:
    """Three entries: PNG image, skimmer HTML, header-less failed request."""
    return traffic.TrafficLog(entries=(image_entry, skimmer_entry, failed_entry))


def _make_log(*urls: str) -> traffic.TrafficLog:
    return traffic.TrafficLog(entries=tuple(traffic.RequestEntry(request_url=u) for u in urls))


@pytest.fixture()
def make_log():
    """Factory building a header-less traffic log from raw URLs."""
    return _make_log


# ── Pattern Set Fixtures ────────────────────────────────────────


@pytest.fixture()
def indicator_set() -> patterns.PatternSet:
    """A single skimmer CDN indicator."""
    return patterns.PatternSet.compile(["evil-cdn"])


@pytest.fixture()
def expectation_set() -> patterns.PatternSet:
    """The shop's own domains plus its payment provider."""
    return patterns.PatternSet.compile([r"example\.com", r"payments\.example\.net"])


# ── File Fixtures ───────────────────────────────────────────────


def _har_document(*entries: tuple[str, list[tuple[str, str]]]) -> dict:
    """Build a minimal HAR 1.2 document from ``(url, headers)`` pairs."""
    return {
        "log": {
            "version": "1.2",
            "entries": [
                {
                    "request": {"method": "GET", "url": url},
                    "response": {
                        "status": 200 if headers else 0,
                        "headers": [{"name": n, "value": v} for n, v in headers],
                    },
                }
                for url, headers in entries
            ],
        }
    }


@pytest.fixture()
def har_file(tmp_path: pathlib.Path) -> pathlib.Path:
    """A saved HAR file matching ``scenario_log``."""
    path = tmp_path / "checkout.har"
    document = _har_document(
        ("https://shop.example.com/img/logo.png?v=3", [("Content-Type", "image/png")]),
        ("https://evil-cdn.net/checkout/loader.html", [("content-type", "text/html")]),
        ("https://cdn.example.org/app.js", []),
    )
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


@pytest.fixture()
def indicators_file(tmp_path: pathlib.Path) -> pathlib.Path:
    """An indicator list file with a comment and a blank line."""
    path = tmp_path / "url-patterns.txt"
    path.write_text("# skimmer CDNs\nevil-cdn\n\nbad-analytics\\.com\n", encoding="utf-8")
    return path


@pytest.fixture()
def har_document():
    """Factory building a minimal HAR document from ``(url, headers)`` pairs."""
    return _har_document
