"""
Parsing (Banner section listing HTML -> RawSectionEntry list).

The Banner "list sections" page has one outer table with a title row per
section:

    <th class="ddtitle"><a ...>Algorithms and Data Structures I - 10782 - CSC 225 - A01</a></th>

followed by a details row we do not need here.

Important rules:
- 1 ddtitle row = 1 section
- the title itself may contain " - ", so the line is split from the right
"""

from __future__ import annotations

from typing import List, Optional

from bs4 import BeautifulSoup

from courseup.model import RawSectionEntry

# Section codes start with a letter that encodes the kind of meeting
SECTION_TYPES = {
    "A": "lecture",
    "B": "lab",
    "T": "tutorial",
}


def section_type_for(section_code: str) -> str:
    if not section_code:
        return "other"
    return SECTION_TYPES.get(section_code[0].upper(), "other")


def parse_title_line(line: str) -> Optional[RawSectionEntry]:
    """
    Parses one ddtitle text into a section, or None if it does not look like one.
    """
    raw = line.strip()
    if not raw:
        return None

    # title - crn - "SUBJ CODE" - section
    parts = [p.strip() for p in raw.rsplit(" - ", 3)]
    if len(parts) != 4:
        return None

    title, crn, _course, section_code = parts
    if not crn.isdigit() or not section_code:
        return None

    return RawSectionEntry(
        crn=crn,
        section_code=section_code,
        section_type=section_type_for(section_code),
        title=title or None,
    )


def parse_sections_html(html: str) -> List[RawSectionEntry]:
    """
    Parses a whole listing page. A page without sections yields [].
    """
    soup = BeautifulSoup(html, "html.parser")

    sections: List[RawSectionEntry] = []
    for th in soup.select("table.datadisplaytable th.ddtitle"):
        entry = parse_title_line(th.get_text(" ", strip=True))
        if entry:
            sections.append(entry)

    return sections
