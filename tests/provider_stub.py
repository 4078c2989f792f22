"""
In-memory course data provider for tests.

Records every call so tests can assert how many upstream requests were made.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from courseup.model import RawCatalogEntry, RawSectionEntry


def entry(catalog_course_id: str, subject_name: str) -> RawCatalogEntry:
    return RawCatalogEntry(catalog_course_id=catalog_course_id, subject_name=subject_name)


def section(crn: str, section_code: str, section_type: str = "lecture") -> RawSectionEntry:
    return RawSectionEntry(crn=crn, section_code=section_code, section_type=section_type)


class StubProvider:
    def __init__(
        self,
        courses: Optional[List[RawCatalogEntry]] = None,
        details: Optional[Dict[str, Mapping[str, Any]]] = None,
        sections: Optional[Dict[str, List[RawSectionEntry]]] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.courses = courses or []
        self.details = details or {}
        self.sections = sections or {}
        self.error = error
        self.calls: List[tuple] = []

    def _record(self, *call: Any) -> None:
        self.calls.append(call)
        if self.error is not None:
            raise self.error

    async def get_courses(self, term: str) -> List[RawCatalogEntry]:
        self._record("get_courses", term)
        return list(self.courses)

    async def get_course_details(self, term: str, subject: str, code: str) -> Optional[Mapping[str, Any]]:
        self._record("get_course_details", term, subject, code)
        return self.details.get(subject + code)

    async def get_course_sections(self, term: str, subject: str, code: str) -> List[RawSectionEntry]:
        self._record("get_course_sections", term, subject, code)
        return list(self.sections.get(subject + code, []))


SAMPLE_COURSES = [
    entry("CSC110", "CSC"),
    entry("CSC225", "CSC"),
    entry("MATH100", "MATH"),
]
