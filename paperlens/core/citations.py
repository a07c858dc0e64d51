"""
Page citation markers.

The agent cites document pages with the literal marker ``[[Page N]]``;
this module is the single definition of that contract.

Dependencies: re
System role: Citation format shared by the agent prompt and consumers
"""

import re

PAGE_CITATION_PATTERN = re.compile(r"\[\[Page (\d+)\]\]")


def page_citation(page_number: int) -> str:
    """Marker for a page, e.g. ``[[Page 3]]``."""
    return f"[[Page {page_number}]]"


def extract_page_citations(text: str) -> list[int]:
    """
    Distinct cited pages in first-seen order.

    Page 0 is not a valid page and is ignored.
    """
    pages: list[int] = []
    for match in PAGE_CITATION_PATTERN.finditer(text or ""):
        page = int(match.group(1))
        if page >= 1 and page not in pages:
            pages.append(page)
    return pages
