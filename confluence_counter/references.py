"""
Page reference helpers.

Confluence page URLs carry the numeric page id right after "/pages/":
  https://example.atlassian.net/wiki/spaces/DEV/pages/229378/Test+Table+01
"""

import re
from typing import Iterable

PAGE_ID_PATTERN = re.compile(r'/pages/(\d+)/')


def extract_ids_from_references(references: Iterable[str]) -> list[str]:
    """Return the page id of each reference, in order; references without one are dropped."""
    page_ids = []
    for reference in references:
        match = PAGE_ID_PATTERN.search(reference)
        if match:
            page_ids.append(match.group(1))
    return page_ids


def split_references(raw: str) -> list[str]:
    """Split a comma-separated reference list (as found in CONFLUENCE_PAGE_URLS)."""
    return [ref.strip() for ref in raw.split(',') if ref.strip()]
