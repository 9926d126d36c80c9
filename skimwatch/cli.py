"""Command line interface for skimwatch.

Captures (or loads) the network traffic of one page, flags requests
matching known skimmer indicators and, when an expectation list is
available, requests to unexpected destinations.
"""

from __future__ import annotations

import asyncio
import pathlib

import click
import dotenv
from skimwatch import __version__, config
from skimwatch.analysis import report as report_mod
from skimwatch.models import view
from skimwatch.pipeline import run
from skimwatch.utils import errors, logger, serialization

log = logger.create_logger("CLI")


def _split_terms(values: tuple[str, ...]) -> frozenset[str] | None:
    """Flatten repeated and comma-separated ``--content-type`` values."""
    terms = frozenset(t.strip() for value in values for t in value.split(",") if t.strip())
    return terms or None


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("target")
@click.option("--har", "force_file", is_flag=True, help="Treat TARGET as a saved HAR file.")
@click.option("-r", "--requests", "list_requests", is_flag=True, help="List the requests made by the page.")
@click.option(
    "-t",
    "--content-type",
    "content_types",
    multiple=True,
    metavar="TERM",
    help="Only list requests whose content-type contains TERM (repeatable, comma-separated). Implies -r.",
)
@click.option(
    "--shape",
    type=click.Choice(["full", "no-params", "domain"]),
    default="full",
    show_default=True,
    help="How listed request URLs are rendered.",
)
@click.option("--indicators", type=click.Path(path_type=pathlib.Path), help="Indicator list (one fragment per line).")
@click.option("--expected", type=click.Path(path_type=pathlib.Path), help="Expected-destination list.")
@click.option("--ignore-case", is_flag=True, help="Match list fragments case-insensitively.")
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON.")
@click.option("-o", "--output", type=click.Path(path_type=pathlib.Path), help="Write the JSON report to a file.")
@click.option("--har-dir", type=click.Path(path_type=pathlib.Path), help="Directory for saved traffic logs.")
@click.option("--no-save", is_flag=True, help="Do not save the traffic log.")
@click.option("--timeout", type=click.IntRange(min=1), help="Page load timeout in milliseconds.")
@click.version_option(__version__, prog_name="skimwatch")
def cli(
    target: str,
    force_file: bool,
    list_requests: bool,
    content_types: tuple[str, ...],
    shape: view.UrlShape,
    indicators: pathlib.Path | None,
    expected: pathlib.Path | None,
    ignore_case: bool,
    as_json: bool,
    output: pathlib.Path | None,
    har_dir: pathlib.Path | None,
    no_save: bool,
    timeout: int | None,
) -> None:
    """Flag skimmer requests in the traffic of TARGET (a page URL or HAR file)."""
    dotenv.load_dotenv()

    overrides: dict[str, object] = {}
    if indicators is not None:
        overrides["indicators_file"] = indicators
    if expected is not None:
        overrides["expectations_file"] = expected
    if ignore_case:
        overrides["ignore_case"] = True
    if har_dir is not None:
        overrides["har_dir"] = har_dir
    if timeout is not None:
        overrides["navigation_timeout_ms"] = timeout
    settings = config.Settings(**overrides)

    terms = _split_terms(content_types)
    view_config = None
    if list_requests or terms is not None:
        view_config = view.ViewConfig(content_type_filter=terms, url_shape=shape)

    options = run.RunOptions(target=target, force_file=force_file, view=view_config, save_har=not no_save)

    try:
        outcome = asyncio.run(run.run_analysis(options, settings))
    except errors.SkimwatchError as exc:
        log.error(errors.get_error_message(exc))
        raise SystemExit(1) from exc

    if output is not None:
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(serialization.to_json(outcome.report) + "\n", encoding="utf-8")
        except OSError as exc:
            log.error(f"Report could not be written to {output}: {exc.strerror or exc}")
            raise SystemExit(1) from exc
        log.success("Report saved", {"path": str(output)})

    if as_json:
        click.echo(serialization.to_json(outcome.report))
        return

    click.echo(report_mod.render_text(outcome.report))
    if outcome.har_path is not None:
        click.echo(f"\nThe full request HAR can be found at {outcome.har_path.resolve()}\n")


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
