"""
Table Classifier: turns a page's storage-format markup into per-category counts.

Each table row is read as a two-column (label, count) pair:
  <tr><th>Unit Tests</th><td>12</td></tr>  →  unit += 12

Pipeline position: called by the Aggregator once per fetched page.
Input:  raw markup string (may be empty, malformed, or contain no tables)
Output: PageCounts with every configured category present

Design principle: NEVER FAIL on bad markup. A page we cannot read counts zero.
"""

import re
from typing import Iterable, Optional

from bs4 import BeautifulSoup, Comment, NavigableString

from .schemas import DEFAULT_CATEGORIES, PageCounts
from .logger import get_module_logger

logger = get_module_logger("classifier")

CELL_TAGS = ['td', 'th']

# Leading numeric prefix, the way a human-written count cell reads:
# "12" → 12, "3.5" → 3.5, ".5" → 0.5, "12 tests" → 12, "1e3" → 1000.
NUMBER_PREFIX_PATTERN = re.compile(r'[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?')

# Only these entities are decoded in cell text; any other "&" is kept literally.
UNDECODED_AMPERSAND_PATTERN = re.compile(r"&(?!(?:nbsp|lt|gt|amp);)")


def parse_count(text: str) -> Optional[float]:
    """Parse the leading number of a cell, or None if it doesn't start with one."""
    match = NUMBER_PREFIX_PATTERN.match(text.strip())
    if not match:
        return None
    return float(match.group(0))


class Classifier:
    """
    Structural table classifier.

    Categories map a bucket name to the substrings that select it. A row whose
    lowercase label contains any substring of a category adds its count to
    that category; one label can feed several categories ("unit-wdio-combo").
    """

    def __init__(self, categories: Optional[dict[str, Iterable[str]]] = None):
        source = categories if categories is not None else DEFAULT_CATEGORIES
        # Keywords are compared against lowercase labels; an empty keyword
        # would match every row, so it is dropped.
        self.categories: dict[str, set[str]] = {
            name: {kw.lower() for kw in keywords if kw}
            for name, keywords in source.items()
        }

    def empty_counts(self) -> dict[str, float]:
        return {name: 0.0 for name in self.categories}

    def classify(self, content: Optional[str]) -> PageCounts:
        """
        Classify every table row in the markup.

        Args:
            content: Page body in storage format (HTML-like)

        Returns:
            PageCounts, all-zero when there is nothing to count
        """
        counts = self.empty_counts()
        if not content:
            return PageCounts(counts=counts)

        soup = self._parse(UNDECODED_AMPERSAND_PATTERN.sub("&amp;", content))
        if soup is None:
            return PageCounts(counts=counts)

        table_count = 0
        for table in soup.find_all('table'):
            table_count += 1
            for cells in self._iter_rows(table):
                self._accumulate(cells, counts)

        logger.debug(f"Classified {table_count} tables: {counts}")
        return PageCounts(counts=counts)

    def _parse(self, content: str) -> Optional[BeautifulSoup]:
        """Parse with the same html5lib → lxml → html.parser fallback chain."""
        try:
            return BeautifulSoup(content, 'html5lib')
        except Exception as e:
            logger.warning(f"html5lib parsing failed, trying lxml: {e}")

        try:
            return BeautifulSoup(content, 'lxml')
        except Exception as e:
            logger.warning(f"lxml parsing also failed: {e}")

        try:
            return BeautifulSoup(content, 'html.parser')
        except Exception as e:
            logger.error(f"Markup parsing failed, counting page as empty: {e}")
            return None

    def _iter_rows(self, table):
        """
        Yield the cell texts of each row that belongs to this table.

        Rows of a nested table are yielded when that inner table is visited,
        never as part of the outer one, so each row is counted exactly once.
        """
        for row in table.find_all('tr'):
            if row.find_parent('table') is not table:
                continue
            yield [self._cell_text(cell) for cell in row.find_all(CELL_TAGS, recursive=False)]

    def _cell_text(self, elem) -> str:
        """Visible text of a cell with nested markup removed, nbsp as space, trimmed."""
        return self._collect_text(elem).replace('\xa0', ' ').strip()

    def _collect_text(self, elem) -> str:
        texts = []
        for child in elem.children:
            if isinstance(child, Comment):
                continue
            if isinstance(child, NavigableString):
                texts.append(str(child))
            elif child.name == 'table':
                continue  # Counted on its own
            else:
                texts.append(self._collect_text(child))
        return ''.join(texts)

    def _accumulate(self, cells: list[str], counts: dict[str, float]) -> None:
        # Rows need at least a label and a count column
        if len(cells) < 2:
            return

        label = cells[0].lower().strip()
        value = parse_count(cells[1])
        if value is None or value < 0:
            return  # "N/A", "-", empty, negative: routine noise, not an error

        for name, keywords in self.categories.items():
            if any(keyword in label for keyword in keywords):
                counts[name] += value


def classify(content: Optional[str], categories: Optional[dict[str, Iterable[str]]] = None) -> PageCounts:
    """Convenience function to classify one page's markup."""
    return Classifier(categories=categories).classify(content)
