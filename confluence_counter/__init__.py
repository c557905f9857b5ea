"""
Confluence Test Counter

Counts the tests recorded in Confluence page tables and totals them per
category (Unit, WDIO, ...) across a space or an explicit list of pages.
- Classifier: structural table parsing, label/count rows → category buckets
- Aggregator: explicit-id mode and whole-space mode
- DocumentSource: Confluence REST access (swappable for tests)

Public API surface:
  Core pipeline classes — Classifier, Aggregator, ConfluenceCounter
  Functions             — classify, extract_ids_from_references, format_results
  Data models           — PageCounts, PageDetail, AggregateResult, ...
  Configuration         — CounterConfig, load_config
  Error types           — ConfigurationError (fatal), DocumentFetchError, EnumerationError
"""

# --- Pipeline classes ---
from .classifier import Classifier, classify
from .aggregator import Aggregator
from .main import ConfluenceCounter
from .document_source import BaseDocumentSource, ConfluenceClient, DocumentSource

# --- Data models ---
from .schemas import (
    RawDocument,
    DocumentSummary,
    DocumentMetadata,
    PageCounts,
    PageDetail,
    AggregateResult,
    DEFAULT_CATEGORIES,
)

# --- Configuration and helpers ---
from .config import CounterConfig, load_config
from .references import extract_ids_from_references
from .report import format_results

# --- Exceptions ---
from .exceptions import CounterError, ConfigurationError, DocumentFetchError, EnumerationError

__version__ = "0.1.0"
__all__ = [
    "Classifier",
    "classify",
    "Aggregator",
    "ConfluenceCounter",
    "BaseDocumentSource",
    "ConfluenceClient",
    "DocumentSource",
    "RawDocument",
    "DocumentSummary",
    "DocumentMetadata",
    "PageCounts",
    "PageDetail",
    "AggregateResult",
    "DEFAULT_CATEGORIES",
    "CounterConfig",
    "load_config",
    "extract_ids_from_references",
    "format_results",
    "CounterError",
    "ConfigurationError",
    "DocumentFetchError",
    "EnumerationError",
]
