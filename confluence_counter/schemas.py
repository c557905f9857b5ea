"""
Pydantic schemas defining the contracts between modules.

Data flow through the pipeline:
  DocumentSource → DocumentSummary / DocumentMetadata + content string
  content string → Classifier → PageCounts
  PageCounts (one per page) → Aggregator → AggregateResult (with PageDetail list)
"""

from pydantic import BaseModel, Field


# Category buckets every result carries even when nothing matched.
UNIT = "unit"
WDIO = "wdio"

# Category name → substrings that select it in a lowercase row label.
DEFAULT_CATEGORIES: dict[str, set[str]] = {
    UNIT: {"unit"},
    WDIO: {"wdio"},
}


# --- Documents as returned by a DocumentSource ---

class DocumentSummary(BaseModel):
    """One entry of a paginated space listing."""
    id: str
    title: str = ""


class DocumentMetadata(BaseModel):
    """Page metadata fetched independently of its body."""
    id: str
    title: str = "Unknown"


class RawDocument(BaseModel):
    """A fetched page: content is storage-format markup, only the classifier reads it."""
    id: str
    title: str = ""
    content: str = ""


# --- Classification output ---

class PageCounts(BaseModel):
    """Per-category totals for a single page."""
    counts: dict[str, float] = Field(default_factory=dict)

    def get(self, category: str) -> float:
        return self.counts.get(category, 0.0)

    @property
    def unit_count(self) -> float:
        return self.get(UNIT)

    @property
    def wdio_count(self) -> float:
        return self.get(WDIO)

    @property
    def total(self) -> float:
        return sum(self.counts.values())


class PageDetail(BaseModel):
    """A page's contribution, as shown in the per-page table."""
    page_id: str
    title: str
    counts: dict[str, float] = Field(default_factory=dict)

    @property
    def unit_count(self) -> float:
        return self.counts.get(UNIT, 0.0)

    @property
    def wdio_count(self) -> float:
        return self.counts.get(WDIO, 0.0)


class AggregateResult(BaseModel):
    """Output of one aggregator run; returned to the caller, never persisted."""
    total_pages: int = 0                                        # Pages considered, not pages with counts
    totals: dict[str, float] = Field(default_factory=dict)
    page_details: list[PageDetail] = Field(default_factory=list)  # Processing order

    @property
    def total_unit_tests(self) -> float:
        return self.totals.get(UNIT, 0.0)

    @property
    def total_wdio_tests(self) -> float:
        return self.totals.get(WDIO, 0.0)

    @classmethod
    def empty(cls, categories) -> "AggregateResult":
        """Zero pages, zero counts for every category, no details."""
        return cls(total_pages=0, totals={name: 0.0 for name in categories})
