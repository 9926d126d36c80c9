"""
Error types and helpers for consistent error reporting.

Configuration and input errors are fatal: they abort the run before any
report is produced.  Malformed individual entries are not errors at this
level and are handled where they occur.
"""


class SkimwatchError(Exception):
    """Base class for every fatal analysis error."""


class ConfigurationError(SkimwatchError):
    """A pattern set is missing, empty, or does not compile."""


class InputError(SkimwatchError):
    """The supplied traffic log is missing or structurally invalid."""


class AcquisitionError(SkimwatchError):
    """The browser could not load the page under test."""


class OutputError(SkimwatchError):
    """A traffic log or report could not be written."""


def get_error_message(error: BaseException | object) -> str:
    """
    Safely extract an error message from an unknown error type.
    """
    if isinstance(error, Exception):
        return str(error) or type(error).__name__
    return "Unknown error"
