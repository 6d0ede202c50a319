"""Exceptions raised by the restock engine.

Missing costs and unmatched promotions are not errors; they resolve to
configured fallbacks. Everything here is raised to the caller, never logged
and swallowed inside the engine.
"""


class RestockError(Exception):
    """Base class for restock engine failures."""


class InvalidInputError(RestockError, ValueError):
    """A collaborator supplied data the engine cannot analyze (negative stock, inverted dates, ...)."""


class EmptySelectionError(RestockError):
    """No recommendation with a positive quantity was selected for an order."""

    def __init__(self, message: str = "No items require restocking") -> None:
        super().__init__(message)


class AnalysisCancelledError(RestockError):
    """The caller cancelled an analysis between stages."""
