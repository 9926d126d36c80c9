"""
Report assembly and text rendering.

Assembly is pure aggregation of the projector and classifier outputs;
rendering turns a report into the console text an analyst reads,
keeping "no check performed" distinct from "nothing found".
"""

from __future__ import annotations

from skimwatch.models import report as report_models


def assemble(
    projected: list[str] | None,
    indicator_result: list[str],
    expectation_result: list[str] | None,
) -> report_models.Report:
    """Combine the three analysis results into a single report."""
    return report_models.Report(
        filtered_requests=projected,
        matched_indicators=indicator_result,
        unexpected_requests=expectation_result,
    )


def render_text(report: report_models.Report) -> str:
    """Render *report* as plain console text."""
    lines: list[str] = []

    if report.filtered_requests is not None:
        lines.append(f"\nRequests ({len(report.filtered_requests)}):\n")
        lines.extend(report.filtered_requests)

    if report.matched_indicators:
        lines.append("\nUnauthorised url(s) found.\n")
        lines.extend(report.matched_indicators)
    else:
        lines.append("\nNo threats found")

    if not report.expectation_checked:
        lines.append("\nExpected-domain check not performed (no expectation list configured)")
    elif report.unexpected_requests:
        lines.append("\nUnexpected request(s) found.\n")
        lines.extend(report.unexpected_requests)
    else:
        lines.append("\nNo unexpected requests found")

    return "\n".join(lines)
