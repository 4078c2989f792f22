"""
Error taxonomy.

- ValidationError: request parameters rejected before any upstream call (400)
- NotFoundError:   well-formed request, target course/section does not exist (404)
- UpstreamError:   the course data provider failed or sent garbage (502)
"""

from __future__ import annotations


class CourseUpError(Exception):
    """Base class for all errors raised by this package."""


class ValidationError(CourseUpError):
    pass


class NotFoundError(CourseUpError):
    pass


class UpstreamError(CourseUpError):
    pass


class MalformedEntryError(UpstreamError):
    """
    A catalog identifier could not be split into a plausible (subject, code).
    """

    def __init__(self, identifier: str, subject_name: str) -> None:
        super().__init__(
            f"Cannot split catalog identifier {identifier!r} using subject name {subject_name!r}"
        )
        self.identifier = identifier
        self.subject_name = subject_name
