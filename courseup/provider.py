"""
Course data providers.

A provider is anything with these three coroutine methods:

    get_courses(term)                         -> list[RawCatalogEntry]
    get_course_details(term, subject, code)   -> mapping or None
    get_course_sections(term, subject, code)  -> list[RawSectionEntry]

Two implementations live here:
- KualiProvider:    live data (Kuali catalog JSON + Banner section listing HTML)
- SnapshotProvider: JSON files on disk, handy for development and offline use

Any failure to get usable data is raised as UpstreamError, never turned into an
empty result.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol

import requests

from courseup.errors import UpstreamError
from courseup.model import RawCatalogEntry, RawSectionEntry
from courseup.sections import parse_sections_html, section_type_for

logger = logging.getLogger(__name__)

KUALI_HOST = "https://uvic.kuali.co"
BANNER_URL = "https://www.uvic.ca/BAN1P/bwckctlg.p_disp_listcrse"


class CourseDataProvider(Protocol):
    async def get_courses(self, term: str) -> List[RawCatalogEntry]: ...

    async def get_course_details(self, term: str, subject: str, code: str) -> Optional[Mapping[str, Any]]: ...

    async def get_course_sections(self, term: str, subject: str, code: str) -> List[RawSectionEntry]: ...


# ---------------------------------------------------------------------------
# Record helpers
# ---------------------------------------------------------------------------


def entry_from_record(record: Any) -> RawCatalogEntry:
    """
    Convert one Kuali course record into a RawCatalogEntry.
    """
    try:
        catalog_course_id = record["__catalogCourseId"]
        subject_name = record["subjectCode"]["name"]
    except (KeyError, TypeError) as exc:
        raise UpstreamError(f"Unexpected course record: missing {exc}") from exc

    if not isinstance(catalog_course_id, str) or not isinstance(subject_name, str):
        raise UpstreamError(f"Unexpected course record: {catalog_course_id!r} / {subject_name!r}")

    return RawCatalogEntry(
        catalog_course_id=catalog_course_id,
        subject_name=subject_name,
        pid=record.get("pid"),
        title=record.get("title"),
    )


def section_from_record(record: Any) -> RawSectionEntry:
    """
    Convert one snapshot section record ({crn, sectionCode, sectionType?, title?}).
    """
    try:
        crn = str(record["crn"]).strip()
        section_code = str(record["sectionCode"]).strip()
    except (KeyError, TypeError) as exc:
        raise UpstreamError(f"Unexpected section record: missing {exc}") from exc

    return RawSectionEntry(
        crn=crn,
        section_code=section_code,
        section_type=record.get("sectionType") or section_type_for(section_code),
        title=record.get("title"),
    )


def _expect_list(data: Any, what: str) -> List[Any]:
    if not isinstance(data, list):
        raise UpstreamError(f"Expected a list of {what}, got {type(data).__name__}")
    return data


# ---------------------------------------------------------------------------
# Live provider
# ---------------------------------------------------------------------------


class KualiProvider:
    """
    Reads the course catalog from Kuali and sections from Banner.

    requests is blocking, so every fetch runs in a worker thread.
    catalogs maps a term ("202109") to its Kuali catalog id.
    """

    def __init__(
        self,
        catalogs: Mapping[str, str],
        kuali_host: str = KUALI_HOST,
        banner_url: str = BANNER_URL,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.catalogs = dict(catalogs)
        self.kuali_host = kuali_host.rstrip("/")
        self.banner_url = banner_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def _catalog_id(self, term: str) -> str:
        catalog_id = self.catalogs.get(term)
        if not catalog_id:
            raise UpstreamError(f"No Kuali catalog configured for term {term}")
        return catalog_id

    def _get(self, url: str, params: Optional[Dict[str, str]] = None) -> requests.Response:
        logger.debug("GET %s %s", url, params or "")
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise UpstreamError(f"GET {url} failed: {exc}") from exc
        return resp

    def _get_json(self, url: str) -> Any:
        resp = self._get(url)
        try:
            return resp.json()
        except ValueError as exc:
            raise UpstreamError(f"GET {url} returned invalid JSON") from exc

    def _fetch_course_records(self, term: str) -> List[Any]:
        url = f"{self.kuali_host}/api/v1/catalog/courses/{self._catalog_id(term)}"
        return _expect_list(self._get_json(url), "courses")

    def _fetch_course_details(self, term: str, subject: str, code: str) -> Optional[Mapping[str, Any]]:
        target = subject + code
        pid = None
        for record in self._fetch_course_records(term):
            if entry_from_record(record).catalog_course_id == target:
                pid = record.get("pid")
                break

        if not pid:
            return None

        url = f"{self.kuali_host}/api/v1/catalog/course/byId/{self._catalog_id(term)}/{pid}"
        details = self._get_json(url)
        if not isinstance(details, dict):
            raise UpstreamError(f"Expected a course object from {url}")
        return details

    def _fetch_sections_html(self, term: str, subject: str, code: str) -> str:
        params = {"term_in": term, "subj_in": subject, "crse_in": code, "schd_in": ""}
        return self._get(self.banner_url, params=params).text

    async def get_courses(self, term: str) -> List[RawCatalogEntry]:
        records = await asyncio.to_thread(self._fetch_course_records, term)
        return [entry_from_record(r) for r in records]

    async def get_course_details(self, term: str, subject: str, code: str) -> Optional[Mapping[str, Any]]:
        return await asyncio.to_thread(self._fetch_course_details, term, subject, code)

    async def get_course_sections(self, term: str, subject: str, code: str) -> List[RawSectionEntry]:
        html = await asyncio.to_thread(self._fetch_sections_html, term, subject, code)
        return parse_sections_html(html)


# ---------------------------------------------------------------------------
# Snapshot provider
# ---------------------------------------------------------------------------


class SnapshotProvider:
    """
    Serves data from JSON files:

        <root>/<term>/courses.json    list of Kuali-shaped course records (required)
        <root>/<term>/details.json    {"CSC110": {...}, ...}
        <root>/<term>/sections.json   {"CSC110": [{"crn", "sectionCode", ...}], ...}
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def _load(self, term: str, filename: str, required: bool) -> Any:
        path = self.root / term / filename
        if not path.exists():
            if required:
                raise UpstreamError(f"Snapshot file missing: {path}")
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise UpstreamError(f"Snapshot file unreadable: {path}") from exc

    def _keyed(self, term: str, filename: str) -> Dict[str, Any]:
        data = self._load(term, filename, required=False)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise UpstreamError(f"Expected an object in {self.root / term / filename}")
        return data

    async def get_courses(self, term: str) -> List[RawCatalogEntry]:
        data = await asyncio.to_thread(self._load, term, "courses.json", True)
        return [entry_from_record(r) for r in _expect_list(data, "courses")]

    async def get_course_details(self, term: str, subject: str, code: str) -> Optional[Mapping[str, Any]]:
        details = await asyncio.to_thread(self._keyed, term, "details.json")
        return details.get(subject + code)

    async def get_course_sections(self, term: str, subject: str, code: str) -> List[RawSectionEntry]:
        sections = await asyncio.to_thread(self._keyed, term, "sections.json")
        records = _expect_list(sections.get(subject + code, []), "sections")
        return [section_from_record(r) for r in records]


def build_provider(settings: Any) -> CourseDataProvider:
    """
    Create the provider selected by settings.provider ("kuali" or "snapshot").
    """
    if settings.provider == "snapshot":
        logger.info("Using snapshot provider at %s", settings.snapshot_dir)
        return SnapshotProvider(settings.snapshot_dir)

    logger.info("Using Kuali provider for terms %s", ", ".join(sorted(settings.kuali_catalogs)) or "(none)")
    return KualiProvider(
        catalogs=settings.kuali_catalogs,
        kuali_host=settings.kuali_host,
        banner_url=settings.banner_url,
        timeout=settings.request_timeout,
    )
