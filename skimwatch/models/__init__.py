# Models package: re-export the core data model.
# Prefer importing from the specific submodule (e.g. skimwatch.models.traffic).

from skimwatch.models.browser import NavigationResult as NavigationResult
from skimwatch.models.report import Report as Report
from skimwatch.models.traffic import (
    RequestEntry as RequestEntry,
    TrafficLog as TrafficLog,
)
from skimwatch.models.view import (
    UrlShape as UrlShape,
    ViewConfig as ViewConfig,
)
