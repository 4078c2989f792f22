"""
Catalog query resolution: fetch -> decompose -> filter -> paginate.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from courseup.decompose import decompose
from courseup.model import CourseIdentity, CourseQuery
from courseup.provider import CourseDataProvider

logger = logging.getLogger(__name__)


def filter_identities(
    identities: Iterable[CourseIdentity],
    subject: Optional[str] = None,
    code: Optional[str] = None,
) -> List[CourseIdentity]:
    """
    Keep identities matching every given filter (exact match). Order is preserved.
    """
    return [
        c
        for c in identities
        if (subject is None or c.subject == subject) and (code is None or c.code == code)
    ]


def paginate(items: List[CourseIdentity], page: int, limit: int) -> List[CourseIdentity]:
    """
    1-based page of size limit: items[(page-1)*limit : page*limit].
    """
    return items[(page - 1) * limit : page * limit]


class CatalogResolver:
    """
    Answers list queries against one course data provider.

    One upstream call per query, nothing is cached between queries.
    """

    def __init__(self, provider: CourseDataProvider, strict: bool = True) -> None:
        self.provider = provider
        self.strict = strict

    async def list_courses(self, query: CourseQuery) -> List[CourseIdentity]:
        logger.info("Fetching courses for term %s", query.term)
        entries = await self.provider.get_courses(query.term)
        logger.info("Found %d courses", len(entries))

        identities = [decompose(entry, strict=self.strict) for entry in entries]
        matches = filter_identities(identities, subject=query.subject, code=query.code)

        return paginate(matches, query.page, query.limit)
