"""
Course detail and section resolution.

The detail lookup needs two independent upstream reads (course record and
section list). Both run concurrently inside a TaskGroup: if one fails the other
is cancelled and the failure propagates as-is.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, List

from courseup.errors import NotFoundError
from courseup.model import CourseDetail, CourseKey, SectionSummary
from courseup.provider import CourseDataProvider

logger = logging.getLogger(__name__)

COURSE_NOT_FOUND = "Course not found"


async def join(*awaitables: Awaitable[Any]) -> List[Any]:
    """
    Run awaitables concurrently and return their results in order.

    On failure the remaining tasks are cancelled and the first error is
    re-raised unwrapped (not as an ExceptionGroup).
    """
    try:
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(aw) for aw in awaitables]
    except BaseExceptionGroup as group:
        raise group.exceptions[0]
    return [t.result() for t in tasks]


class DetailResolver:
    def __init__(self, provider: CourseDataProvider) -> None:
        self.provider = provider

    async def get_course_detail(self, key: CourseKey) -> CourseDetail:
        """
        Course record + ordered section summaries, or NotFoundError.
        """
        details, sections = await join(
            self.provider.get_course_details(key.term, key.subject, key.code),
            self.provider.get_course_sections(key.term, key.subject, key.code),
        )

        if details is None:
            logger.info("Course %s %s not found in term %s", key.subject, key.code, key.term)
            raise NotFoundError(COURSE_NOT_FOUND)

        return CourseDetail(record=details, sections=[SectionSummary.from_raw(s) for s in sections])

    async def get_section(self, key: CourseKey) -> SectionSummary:
        """
        First section whose code equals key.section exactly, or NotFoundError.
        """
        sections = await self.provider.get_course_sections(key.term, key.subject, key.code)

        for s in sections:
            if s.section_code == key.section:
                return SectionSummary.from_raw(s)

        logger.info(
            "Section %s of %s %s not found in term %s", key.section, key.subject, key.code, key.term
        )
        raise NotFoundError(COURSE_NOT_FOUND)
