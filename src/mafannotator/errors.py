"""Exception hierarchy shared by the annotation and merge front ends."""

from __future__ import annotations


class MafAnnotatorError(Exception):
    """Base class for structural failures that end one invocation."""


class MergeFailed(MafAnnotatorError):
    """Raised when fewer than two mergeable input files remain."""


class ValidationFailed(MafAnnotatorError):
    """Raised when an input header lacks required columns."""

    def __init__(self, message: str, *, missing: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.missing = missing


class MalformedRowError(ValidationFailed):
    """Raised when a data row does not have one cell per header column."""

    def __init__(self, path: str, line_number: int, expected: int, found: int) -> None:
        super().__init__(
            f"{path}:{line_number}: expected {expected} tab-separated fields, found {found}"
        )
        self.path = path
        self.line_number = line_number
        self.expected = expected
        self.found = found


class AnnotationCallFailed(MafAnnotatorError):
    """Raised by the service client for any failed or empty remote call.

    The annotation pipeline catches this per record and never lets it abort a
    run.
    """
