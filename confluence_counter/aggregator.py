"""
Aggregator: fetches pages, classifies them, and sums the counts.

Two traversal modes:
  analyze_by_ids(ids)          — explicit page list; every processed page gets a detail row
  analyze_space(collection_key) — whole space via paginated listing; only pages
                                  with a non-zero count get a detail row

Pages are processed strictly one at a time, in input/listing order, so
page_details order always matches the traversal order.
"""

from typing import Optional, Sequence

from .classifier import Classifier
from .document_source import BaseDocumentSource
from .schemas import AggregateResult, DocumentSummary, PageCounts, PageDetail, RawDocument
from .config import DEFAULT_PAGE_SIZE
from .exceptions import EnumerationError
from .logger import get_module_logger

logger = get_module_logger("aggregator")

# Log a progress line every N pages while scanning a space
PROGRESS_INTERVAL = 10


class Aggregator:
    """Runs the classifier over a set of pages and folds the results together."""

    def __init__(
        self,
        source: BaseDocumentSource,
        classifier: Optional[Classifier] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        strict_listing: bool = False
    ):
        """
        Args:
            source: Where pages come from
            classifier: Table classifier (default categories if omitted)
            page_size: Listing page size for analyze_space
            strict_listing: Raise EnumerationError when a space cannot be listed,
                            instead of reporting it as an empty space
        """
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        self.source = source
        self.classifier = classifier or Classifier()
        self.page_size = page_size
        self.strict_listing = strict_listing

    # --- Mode A: explicit page ids ---

    def analyze_by_ids(self, ids: Sequence[str]) -> AggregateResult:
        """
        Analyze specific pages.

        A page whose metadata cannot be fetched is logged and skipped; it adds
        no counts and no detail row but is still counted in total_pages.
        """
        if not ids:
            return self._empty_result()

        totals = self.classifier.empty_counts()
        page_details = []

        for page_id in ids:
            try:
                metadata = self.source.get_document_metadata(page_id)
            except Exception as e:
                logger.error(f"Error processing page {page_id}: {e}")
                continue

            document = self._fetch(page_id, metadata.title)
            counts = self.classifier.classify(document.content)
            self._add(totals, counts)
            page_details.append(self._detail(document, counts))

        return AggregateResult(
            total_pages=len(ids),
            totals=totals,
            page_details=page_details
        )

    # --- Mode B: whole space ---

    def analyze_space(self, collection_key: str) -> AggregateResult:
        """Analyze every page of a space; only pages with counts get a detail row."""
        logger.info(f"Analyzing space: {collection_key}")
        pages = self.list_all_documents(collection_key)

        if not pages:
            logger.info(f"No pages found in space '{collection_key}'")
            return self._empty_result()

        totals = self.classifier.empty_counts()
        page_details = []

        logger.info(f"Found {len(pages)} pages. Scanning...")

        for idx, page in enumerate(pages, start=1):
            document = self._fetch(page.id, page.title)
            counts = self.classifier.classify(document.content)
            self._add(totals, counts)

            if any(value > 0 for value in counts.counts.values()):
                page_details.append(self._detail(document, counts))

            if idx % PROGRESS_INTERVAL == 0:
                logger.info(f"Processed {idx}/{len(pages)} pages...")

        return AggregateResult(
            total_pages=len(pages),
            totals=totals,
            page_details=page_details
        )

    def list_all_documents(self, collection_key: str) -> list[DocumentSummary]:
        """
        Enumerate a space with offset/limit pagination.

        Keeps requesting while the previous page came back full and stops on
        the first short (or empty) page.

        Raises:
            EnumerationError: only when strict_listing is set
        """
        pages: list[DocumentSummary] = []
        offset = 0

        try:
            while True:
                batch = self.source.list_documents(collection_key, offset, self.page_size)
                pages.extend(batch)
                if len(batch) < self.page_size:
                    break
                offset += self.page_size
        except Exception as e:
            if self.strict_listing:
                raise EnumerationError(
                    f"Error fetching pages from space '{collection_key}': {e}",
                    collection_key=collection_key
                ) from e
            # Lenient mode: a failed listing looks exactly like an empty space
            logger.error(f"Error fetching pages from space '{collection_key}': {e}")
            return []

        return pages

    # --- helpers ---

    def _fetch(self, page_id: str, title: str) -> RawDocument:
        """Fetch one page body; a fetch failure yields an empty page."""
        try:
            content = self.source.get_document_content(page_id)
        except Exception as e:
            logger.error(f"Error fetching page content for page_id '{page_id}': {e}")
            content = ""
        return RawDocument(id=page_id, title=title, content=content)

    @staticmethod
    def _add(totals: dict[str, float], counts: PageCounts) -> None:
        for name, value in counts.counts.items():
            totals[name] = totals.get(name, 0.0) + value

    @staticmethod
    def _detail(document: RawDocument, counts: PageCounts) -> PageDetail:
        return PageDetail(page_id=document.id, title=document.title, counts=dict(counts.counts))

    def _empty_result(self) -> AggregateResult:
        return AggregateResult.empty(self.classifier.categories)
