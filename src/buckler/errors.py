# src/buckler/errors.py
"""
Error taxonomy for the Buckler acquisition pipeline.

Missing data and missed interactions are not errors: extraction returns
empty lists or sentinel values and navigation returns False. Only the
conditions below abort an operation.
"""


class BucklerError(Exception):
    """Base class for failures surfaced to the route layer."""

    status_code = 500


class ClientInputError(BucklerError):
    """Raised when a required request parameter is missing or blank."""

    status_code = 400


class ConfigurationError(BucklerError):
    """Raised when the session cookie is not configured."""

    status_code = 500


class NavigationTimeoutError(BucklerError):
    """Raised when a page does not load within the navigation timeout."""

    status_code = 500


class SearchUnavailableError(BucklerError):
    """Raised when the fighters page has no usable search input."""

    status_code = 404


class UnexpectedScrapeError(BucklerError):
    """Raised for any other failure during an acquisition."""

    status_code = 500
