"""
Run configuration.

Uses ``pydantic_settings.BaseSettings`` for environment variable
binding (``SKIMWATCH_*``), type coercion, and validation.  Command
line options override these values for a single run.
"""

from __future__ import annotations

import pathlib
from typing import Literal

import pydantic
import pydantic_settings
from skimwatch.data import loader

WaitUntil = Literal["commit", "domcontentloaded", "load", "networkidle"]


class Settings(pydantic_settings.BaseSettings):
    """Configuration for an analysis run.

    Attributes:
        indicators_file: Known-malicious fragment list (required to exist).
        expectations_file: Expected-destination list (optional; a missing
            file disables the expected-domain check).
        har_dir: Directory captured traffic logs are written to.
        ignore_case: Match indicator and expectation fragments
            case-insensitively.
        navigation_timeout_ms: Page load timeout for browser capture.
        wait_until: Page load state that ends a capture.
        headless: Run the capture browser without a window.
        write_log_file: Also write each run's log to ``.logs/``.
    """

    model_config = pydantic_settings.SettingsConfigDict(env_prefix="SKIMWATCH_")

    indicators_file: pathlib.Path = loader.DEFAULT_INDICATORS_FILE
    expectations_file: pathlib.Path | None = pathlib.Path("expected-urls.txt")
    har_dir: pathlib.Path = pathlib.Path("har_files")
    ignore_case: bool = False
    navigation_timeout_ms: int = pydantic.Field(default=30000, gt=0)
    wait_until: WaitUntil = "load"
    headless: bool = True
    write_log_file: bool = False
