"""
Catalog identifier decomposition.

Upstream catalog ids glue subject and code together without a delimiter:

    "CSC110"  -> ("CSC", "110")
    "MATH100" -> ("MATH", "100")
    "ED-D101" -> ("ED-D", "101")

The split point is the length of the entry's reference subject name. This is a
fixed-width prefix split, not a pattern match.
"""

from __future__ import annotations

import re

from courseup.errors import MalformedEntryError
from courseup.model import CourseIdentity, RawCatalogEntry

SUBJECT_PATTERN = re.compile(r"^[A-Za-z][A-Za-z-]*$")


def decompose(entry: RawCatalogEntry, strict: bool = True) -> CourseIdentity:
    """
    Split entry.catalog_course_id into (subject, code).

    With strict=True the result is checked: both halves must be non-empty and
    the subject must look like a subject code. Otherwise MalformedEntryError.
    With strict=False the raw split is returned as-is.
    """
    identifier = entry.catalog_course_id
    width = len(entry.subject_name)

    subject = identifier[:width]
    code = identifier[width:]

    if strict and (not code or not SUBJECT_PATTERN.match(subject)):
        raise MalformedEntryError(identifier, entry.subject_name)

    return CourseIdentity(subject=subject, code=code)
