"""
Central data model definitions used across the project.

This module defines the canonical structure of catalog entries, course
identities, queries and sections so that:
- providers, resolvers and the HTTP layer share the same field names
- upstream records are kept apart from the normalized view we serve
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional


@dataclass(frozen=True)
class RawCatalogEntry:
    """
    One course as delivered by the upstream catalog.

    catalog_course_id is subject + code glued together (e.g. "CSC110"),
    subject_name is the reference subject code used to find the split point.
    """

    catalog_course_id: str
    subject_name: str
    pid: Optional[str] = None
    title: Optional[str] = None


@dataclass(frozen=True)
class CourseIdentity:
    """
    Normalized (subject, code) pair derived from a RawCatalogEntry.
    """

    subject: str
    code: str

    def to_dict(self) -> dict[str, str]:
        return {"subject": self.subject, "code": self.code}


@dataclass(frozen=True)
class CourseQuery:
    """
    Validated list query. page and limit are always >= 1.
    """

    term: str
    subject: Optional[str] = None
    code: Optional[str] = None
    page: int = 1
    limit: int = 10


@dataclass(frozen=True)
class CourseKey:
    """
    Validated detail lookup: one course, optionally one of its sections.
    """

    term: str
    subject: str
    code: str
    section: Optional[str] = None


@dataclass(frozen=True)
class RawSectionEntry:
    """
    One registration section as delivered by the upstream provider.
    """

    crn: str
    section_code: str
    section_type: str
    title: Optional[str] = None


@dataclass(frozen=True)
class SectionSummary:
    crn: str
    section: str
    section_type: str

    @classmethod
    def from_raw(cls, raw: RawSectionEntry) -> "SectionSummary":
        return cls(crn=raw.crn, section=raw.section_code, section_type=raw.section_type)

    def to_dict(self) -> dict[str, str]:
        return {"crn": self.crn, "section": self.section, "sectionType": self.section_type}


@dataclass
class CourseDetail:
    """
    Upstream course detail record merged with its ordered section summaries.

    The upstream record is opaque: we pass its fields through untouched and
    only add the "sections" key.
    """

    record: Mapping[str, Any]
    sections: List[SectionSummary] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        out = dict(self.record)
        out["sections"] = [s.to_dict() for s in self.sections]
        return out
