"""
Main orchestrator for the Confluence test counter.

Wires the pieces together: CounterConfig → DocumentSource → Aggregator.
Configuration is validated here, before any request is made.
"""

from typing import Iterable, Optional, Sequence

from .aggregator import Aggregator
from .classifier import Classifier
from .config import CounterConfig, load_config
from .document_source import BaseDocumentSource, DocumentSource
from .references import extract_ids_from_references
from .schemas import AggregateResult
from .exceptions import ConfigurationError
from .logger import get_module_logger, setup_logger

logger = get_module_logger("main")


class ConfluenceCounter:
    """
    Main orchestrator for counting tests across Confluence pages.

    Chooses the traversal mode from the configuration:
    1. page_urls set → explicit pages (ids parsed from the URLs)
    2. else space_key set → whole space
    """

    def __init__(
        self,
        config: CounterConfig,
        source: Optional[BaseDocumentSource] = None,
        categories: Optional[dict[str, Iterable[str]]] = None,
        strict_listing: bool = False,
        log_level: Optional[int] = None
    ):
        if log_level is not None:
            setup_logger(level=log_level)

        # Fail before any I/O: a source is only built from valid credentials
        config.validate_credentials()
        self.config = config

        self.source = source or DocumentSource.create(config)
        self.aggregator = Aggregator(
            source=self.source,
            classifier=Classifier(categories=categories),
            page_size=config.page_size,
            strict_listing=strict_listing
        )

        logger.info("ConfluenceCounter initialized")

    def run(self) -> AggregateResult:
        """
        Analyze whatever the configuration points at.

        Raises:
            ConfigurationError: no target, or page URLs without any page id
        """
        self.config.validate_target()

        if self.config.page_urls:
            page_ids = extract_ids_from_references(self.config.page_urls)
            if not page_ids:
                raise ConfigurationError(
                    "No valid page URLs found.",
                    details={"page_urls": self.config.page_urls}
                )
            logger.info(f"Analyzing {len(page_ids)} pages")
            return self.aggregator.analyze_by_ids(page_ids)

        return self.aggregator.analyze_space(self.config.space_key)

    def analyze_by_ids(self, ids: Sequence[str]) -> AggregateResult:
        return self.aggregator.analyze_by_ids(ids)

    def analyze_space(self, collection_key: str) -> AggregateResult:
        return self.aggregator.analyze_space(collection_key)


def count_tests(**overrides) -> AggregateResult:
    """Convenience function: load config from the environment and run once."""
    return ConfluenceCounter(load_config(**overrides)).run()
