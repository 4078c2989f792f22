"""
Parameter validation.

Every request parameter passes through here before a resolver may talk to the
course data provider, so a rejected request never costs an upstream call.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from pydantic import PositiveInt, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from courseup.errors import ValidationError
from courseup.model import CourseKey, CourseQuery

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

_POSITIVE_INT = TypeAdapter(PositiveInt)

SUBJECT_LENGTH = (2, 4)
CODE_LENGTH = (3, 4)
SECTION_LENGTH = (1, 4)


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _check_length(name: str, value: Optional[str], bounds: tuple[int, int]) -> str:
    lo, hi = bounds
    if value is None or not (lo <= len(value) <= hi):
        raise ValidationError(f"{name} must be {lo}-{hi} characters long")
    return value


def validate_term(term: Optional[str], terms: Sequence[str]) -> str:
    """
    The term must be one of the known terms. Nothing is defaulted.
    """
    if term is None or term not in terms:
        raise ValidationError(f"Unknown term: {term!r} (expected one of {', '.join(terms)})")
    return term


def validate_page(value: Any, name: str, default: int) -> int:
    """
    Coerce a pagination value (None, int or integer string) into an int >= 1.
    """
    if value is None:
        return default

    # pydantic's lax mode would turn True into 1
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a positive integer")

    try:
        return _POSITIVE_INT.validate_python(value)
    except PydanticValidationError as exc:
        raise ValidationError(f"{name} must be a positive integer") from exc


def validate_course_query(
    term: Optional[str],
    subject: Optional[str],
    code: Optional[str],
    page: Any,
    limit: Any,
    terms: Sequence[str],
    default_limit: int = DEFAULT_LIMIT,
) -> CourseQuery:
    """
    Build a CourseQuery for the list endpoint.

    subject and code are plain optional filters here (no length bounds),
    blank values count as "no filter".
    """
    return CourseQuery(
        term=validate_term(term, terms),
        subject=_blank_to_none(subject),
        code=_blank_to_none(code),
        page=validate_page(page, "page", DEFAULT_PAGE),
        limit=validate_page(limit, "limit", default_limit),
    )


def validate_course_key(
    term: Optional[str],
    subject: Optional[str],
    code: Optional[str],
    terms: Sequence[str],
    section: Optional[str] = None,
) -> CourseKey:
    """
    Build a CourseKey for the detail endpoints.

    subject: 2-4 chars, code: 3-4 chars, section (when given): 1-4 chars.
    """
    valid_term = validate_term(term, terms)
    valid_subject = _check_length("subject", subject, SUBJECT_LENGTH)
    valid_code = _check_length("code", code, CODE_LENGTH)

    valid_section = None
    if section is not None:
        valid_section = _check_length("section", section, SECTION_LENGTH)

    return CourseKey(term=valid_term, subject=valid_subject, code=valid_code, section=valid_section)
