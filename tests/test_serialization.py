"""Tests for skimwatch.utils.serialization: camelCase aliases and JSON output."""

from __future__ import annotations

import json

import pytest

from skimwatch.models.report import Report
from skimwatch.utils.serialization import snake_to_camel, to_json


class TestSnakeToCamel:
    @pytest.mark.parametrize(
        ("input_str", "expected"),
        [
            ("filtered_requests", "filteredRequests"),
            ("matched_indicators", "matchedIndicators"),
            ("unexpected_requests", "unexpectedRequests"),
            ("single", "single"),
            ("", ""),
        ],
    )
    def test_conversion(self, input_str: str, expected: str) -> None:
        assert snake_to_camel(input_str) == expected


class TestToJson:
    def test_indent(self) -> None:
        text = to_json(Report(matched_indicators=["x"]), indent=4)
        assert text.startswith('{\n    "matchedIndicators"')
        assert json.loads(text) == {"matchedIndicators": ["x"]}
