"""Tests for skimwatch.analysis.projection: the request listing."""

from __future__ import annotations

import pytest

from skimwatch.analysis.projection import passes_content_type, project, shape_url
from skimwatch.models import traffic, view


def _entry(url: str, *headers: tuple[str, str]) -> traffic.RequestEntry:
    return traffic.RequestEntry(request_url=url, response_headers=headers)


# ── content-type filter ─────────────────────────────────────────


class TestPassesContentType:
    """Tests for passes_content_type()."""

    def test_no_filter_passes_everything(self, failed_entry: traffic.RequestEntry) -> None:
        assert passes_content_type(failed_entry, None) is True

    def test_substring_match(self, image_entry: traffic.RequestEntry) -> None:
        assert passes_content_type(image_entry, frozenset({"png"})) is True

    def test_case_insensitive_value(self) -> None:
        entry = _entry("https://a.com/x", ("content-type", "IMAGE/PNG"))
        assert passes_content_type(entry, frozenset({"png"})) is True

    def test_case_insensitive_header_name(self) -> None:
        entry = _entry("https://a.com/x", ("CONTENT-TYPE", "image/png"))
        assert passes_content_type(entry, frozenset({"png"})) is True

    def test_non_matching_type_excluded(self, skimmer_entry: traffic.RequestEntry) -> None:
        assert passes_content_type(skimmer_entry, frozenset({"png"})) is False

    def test_no_headers_excluded(self, failed_entry: traffic.RequestEntry) -> None:
        assert passes_content_type(failed_entry, frozenset({"png"})) is False

    def test_other_headers_ignored(self) -> None:
        entry = _entry("https://a.com/x", ("x-note", "png"))
        assert passes_content_type(entry, frozenset({"png"})) is False

    def test_any_term_suffices(self, skimmer_entry: traffic.RequestEntry) -> None:
        assert passes_content_type(skimmer_entry, frozenset({"png", "html"})) is True


# ── URL shaping ─────────────────────────────────────────────────


class TestShapeUrl:
    """Tests for shape_url()."""

    @pytest.mark.parametrize(
        ("shape", "expected"),
        [
            ("full", "https://a.com/x/y?z=1"),
            ("no-params", "https://a.com/x/y"),
            ("domain", "https://a.com"),
        ],
    )
    def test_shapes(self, shape: view.UrlShape, expected: str) -> None:
        assert shape_url("https://a.com/x/y?z=1", shape) == expected

    def test_domain_keeps_port(self) -> None:
        assert shape_url("http://a.com:8080/x?q", "domain") == "http://a.com:8080"

    def test_no_params_drops_fragment(self) -> None:
        assert shape_url("https://a.com/x#top", "no-params") == "https://a.com/x"

    def test_domain_drops_credentials(self) -> None:
        assert shape_url("https://user:pw@a.com/x", "domain") == "https://a.com"

    def test_ipv6_host(self) -> None:
        assert shape_url("http://[::1]:3000/x", "domain") == "http://[::1]:3000"

    @pytest.mark.parametrize("url", ["not a url", "data:image/png;base64,AAAA", "https://a.com:99999/"])
    def test_unparseable_raises(self, url: str) -> None:
        with pytest.raises(ValueError):
            shape_url(url, "full")


# ── project ─────────────────────────────────────────────────────


class TestProject:
    """Tests for project()."""

    def test_filter_scenario(self, scenario_log: traffic.TrafficLog) -> None:
        cfg = view.ViewConfig(content_type_filter={"png"}, url_shape="full")
        assert project(scenario_log, cfg) == ["https://shop.example.com/img/logo.png?v=3"]

    def test_unfiltered_lists_everything_sorted(self, scenario_log: traffic.TrafficLog) -> None:
        assert project(scenario_log, view.ViewConfig()) == [
            "https://cdn.example.org/app.js",
            "https://evil-cdn.net/checkout/loader.html",
            "https://shop.example.com/img/logo.png?v=3",
        ]

    def test_deduplicates_after_shaping(self, make_log) -> None:
        log = make_log("https://a.com/1?x", "https://a.com/2", "https://a.com/1?y", "https://b.com/")
        result = project(log, view.ViewConfig(url_shape="domain"))
        assert result == ["https://a.com", "https://b.com"]

    def test_no_params_dedupes_on_path(self, make_log) -> None:
        log = make_log("https://a.com/1?x", "https://a.com/1?y")
        assert project(log, view.ViewConfig(url_shape="no-params")) == ["https://a.com/1"]

    def test_code_point_order(self, make_log) -> None:
        log = make_log("https://b.com/", "https://B.com/", "https://a.com/")
        result = project(log, view.ViewConfig())
        assert result == ["https://B.com/", "https://a.com/", "https://b.com/"]

    def test_no_duplicates_and_sorted(self, make_log) -> None:
        log = make_log(*["https://z.com/", "https://a.com/", "https://z.com/", "https://m.com/"] * 3)
        result = project(log, view.ViewConfig())
        assert len(result) == len(set(result))
        assert result == sorted(result)

    def test_deterministic(self, scenario_log: traffic.TrafficLog) -> None:
        cfg = view.ViewConfig(url_shape="no-params")
        assert project(scenario_log, cfg) == project(scenario_log, cfg)

    def test_unparseable_entry_skipped(self, make_log) -> None:
        log = make_log("https://a.com/x", "not a url")
        assert project(log, view.ViewConfig()) == ["https://a.com/x"]

    def test_empty_log(self) -> None:
        assert project(traffic.TrafficLog(), view.ViewConfig()) == []
