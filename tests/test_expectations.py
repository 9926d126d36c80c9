"""Tests for skimwatch.analysis.expectations: expected-destination classification."""

from __future__ import annotations

from skimwatch.analysis.expectations import classify_unexpected
from skimwatch.analysis.patterns import PatternSet
from skimwatch.models import traffic


class TestClassifyUnexpected:
    """Tests for classify_unexpected()."""

    def test_absent_set_returns_none(self, scenario_log: traffic.TrafficLog) -> None:
        assert classify_unexpected(scenario_log, None) is None

    def test_inverse_logic(self, make_log) -> None:
        log = make_log("https://trusted.com/a", "https://evil.com/b")
        ps = PatternSet.compile(["trusted.com"])
        assert classify_unexpected(log, ps) == ["https://evil.com/b"]

    def test_nothing_unexpected_is_empty_list(self, make_log, expectation_set: PatternSet) -> None:
        result = classify_unexpected(make_log("https://shop.example.com/"), expectation_set)
        assert result == []
        assert result is not None

    def test_duplicates_preserved_in_order(self, make_log, expectation_set: PatternSet) -> None:
        log = make_log("https://x.io/1", "https://shop.example.com/", "https://y.io/", "https://x.io/1")
        assert classify_unexpected(log, expectation_set) == ["https://x.io/1", "https://y.io/", "https://x.io/1"]

    def test_request_can_be_both_flagged_and_unexpected(
        self, scenario_log: traffic.TrafficLog, expectation_set: PatternSet
    ) -> None:
        result = classify_unexpected(scenario_log, expectation_set)
        assert result == ["https://evil-cdn.net/checkout/loader.html", "https://cdn.example.org/app.js"]
