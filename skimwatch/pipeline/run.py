"""
Analysis pipeline: one complete run over a single page or HAR file.

Pattern lists are loaded first so that configuration errors abort the
run before any browser is launched.  The traffic log is then obtained
(captured or loaded), persisted, and handed to the three independent
analysis steps whose results are assembled into the report.
"""

from __future__ import annotations

import pathlib

import pydantic
from skimwatch import config
from skimwatch.analysis import expectations, indicators, patterns, projection
from skimwatch.analysis import report as report_mod
from skimwatch.browser import session as browser_session
from skimwatch.data import har, loader
from skimwatch.models import report as report_models
from skimwatch.models import traffic
from skimwatch.models import view as view_models
from skimwatch.utils import logger
from skimwatch.utils import url as url_mod

log = logger.create_logger("Pipeline")


class RunOptions(pydantic.BaseModel):
    """Per-run choices derived from the command line.

    Attributes:
        target: Page URL to capture, or path of a saved HAR file.
        force_file: Treat *target* as a file even if it looks like a URL.
        view: Request listing options, or ``None`` when no listing
            was asked for.
        save_har: Persist the traffic log under the configured HAR directory.
    """

    target: str
    force_file: bool = False
    view: view_models.ViewConfig | None = None
    save_har: bool = True

    @property
    def is_capture(self) -> bool:
        return not self.force_file and url_mod.is_web_url(self.target)


class AnalysisOutcome(pydantic.BaseModel):
    """Everything a run produces for the presentation layer."""

    source: str
    report: report_models.Report
    traffic_log: traffic.TrafficLog
    har_path: pathlib.Path | None = None


def analyse(
    traffic_log: traffic.TrafficLog,
    indicator_set: patterns.Matcher,
    expectation_set: patterns.Matcher | None,
    view_config: view_models.ViewConfig | None,
) -> report_models.Report:
    """Run projection and both classifiers over *traffic_log* and assemble the report.

    The three steps share no state; each only reads the immutable log.
    """
    projected = projection.project(traffic_log, view_config) if view_config is not None else None
    matched = indicators.classify_indicators(traffic_log, indicator_set)
    unexpected = expectations.classify_unexpected(traffic_log, expectation_set)
    return report_mod.assemble(projected, matched, unexpected)


async def obtain_traffic_log(options: RunOptions, settings: config.Settings) -> traffic.TrafficLog:
    """Capture the target page, or load the target HAR file."""
    if options.is_capture:
        log.subsection(f"Capturing {options.target}")
        return await browser_session.capture_traffic(
            options.target,
            headless=settings.headless,
            wait_until=settings.wait_until,
            timeout=settings.navigation_timeout_ms,
        )
    log.subsection(f"Loading {options.target}")
    return har.load_traffic_log(pathlib.Path(options.target))


def _persist(options: RunOptions, settings: config.Settings, traffic_log: traffic.TrafficLog) -> pathlib.Path | None:
    """Save the traffic log unless disabled or it would overwrite its own source."""
    if not options.save_har:
        return None
    destination = settings.har_dir / f"{url_mod.har_name_for(options.target)}.har"
    if not options.is_capture and destination.resolve() == pathlib.Path(options.target).resolve():
        log.debug("Traffic log already stored at its destination", {"path": str(destination)})
        return destination
    return har.save_traffic_log(traffic_log, settings.har_dir, destination.stem)


async def run_analysis(options: RunOptions, settings: config.Settings) -> AnalysisOutcome:
    """Execute one analysis run.

    Raises:
        ConfigurationError: If the indicator list (or an existing
            expectation list) is missing, empty, or invalid.
        InputError: If a HAR target is missing or malformed.
        AcquisitionError: If the target page cannot be loaded.
    """
    if settings.write_log_file:
        logger.start_log_file(url_mod.har_name_for(options.target))
    try:
        log.section(f"Skimwatch analysis: {options.target}")
        indicator_set = loader.load_indicator_set(settings.indicators_file, ignore_case=settings.ignore_case)
        expectation_set = loader.load_expectation_set(settings.expectations_file, ignore_case=settings.ignore_case)

        traffic_log = await obtain_traffic_log(options, settings)
        har_path = _persist(options, settings, traffic_log)

        log.start_timer("analysis")
        result = analyse(traffic_log, indicator_set, expectation_set, options.view)
        log.end_timer("analysis", "Analysis complete")

        return AnalysisOutcome(
            source=options.target,
            report=result,
            traffic_log=traffic_log,
            har_path=har_path,
        )
    finally:
        logger.end_log_file()
