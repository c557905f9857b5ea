"""
Document sources: where pages and their bodies come from.

BaseDocumentSource is the contract the Aggregator depends on; ConfluenceClient
implements it against the Confluence Cloud REST API. Tests plug in in-memory
sources so the aggregator can be exercised without a network.
"""

from abc import ABC, abstractmethod
from typing import Optional

import requests

from .schemas import DocumentSummary, DocumentMetadata
from .config import CounterConfig, DEFAULT_TIMEOUT
from .exceptions import DocumentFetchError
from .logger import get_module_logger

logger = get_module_logger("document_source")


class BaseDocumentSource(ABC):
    """Abstract base class for document sources."""

    @abstractmethod
    def list_documents(self, collection_key: str, offset: int, limit: int) -> list[DocumentSummary]:
        """
        Return one page of a space listing.

        Args:
            collection_key: Space key
            offset: Index of the first document to return
            limit: Maximum number of documents to return

        Returns:
            Up to `limit` summaries; fewer means the listing is exhausted
        """
        pass

    @abstractmethod
    def get_document_content(self, document_id: str) -> str:
        """Return the page body, or "" if the page has none."""
        pass

    @abstractmethod
    def get_document_metadata(self, document_id: str) -> DocumentMetadata:
        """Return page metadata (title) without relying on the body."""
        pass


class ConfluenceClient(BaseDocumentSource):
    """Confluence Cloud REST client (basic auth with an API token)."""

    def __init__(
        self,
        base_url: str,
        username: str,
        api_token: str,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None
    ):
        self.base_url = base_url.rstrip('/')
        # Confluence Cloud serves the REST API under the /wiki prefix
        self.api_url = f"{self.base_url}/wiki/rest/api"
        self.timeout = timeout

        self.session = session or requests.Session()
        self.session.auth = (username, api_token)
        self.session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
        })

    def _get(self, path: str, params: dict, document_id: Optional[str] = None) -> dict:
        """GET a JSON resource, raising DocumentFetchError on any failure."""
        url = f"{self.api_url}{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise DocumentFetchError(
                f"Request to {path} failed: {e}",
                document_id=document_id
            ) from e

        if response.status_code >= 300:
            raise DocumentFetchError(
                f"Request to {path} failed: HTTP {response.status_code}",
                document_id=document_id,
                status_code=response.status_code,
                details={"body": response.text[:400]}
            )

        try:
            return response.json()
        except ValueError as e:
            raise DocumentFetchError(
                f"Response from {path} is not JSON",
                document_id=document_id,
                status_code=response.status_code
            ) from e

    def list_documents(self, collection_key: str, offset: int, limit: int) -> list[DocumentSummary]:
        data = self._get(
            "/content",
            params={"spaceKey": collection_key, "limit": limit, "start": offset}
        )
        results = data.get("results") or []
        logger.debug(f"Listed {len(results)} pages of '{collection_key}' at offset {offset}")
        return [
            DocumentSummary(id=str(item["id"]), title=item.get("title") or "")
            for item in results
        ]

    def get_document_content(self, document_id: str) -> str:
        data = self._get(
            f"/content/{document_id}",
            params={"expand": "body.storage,version"},
            document_id=document_id
        )
        storage = (data.get("body") or {}).get("storage") or {}
        return storage.get("value") or ""

    def get_document_metadata(self, document_id: str) -> DocumentMetadata:
        data = self._get(
            f"/content/{document_id}",
            params={"expand": "version"},
            document_id=document_id
        )
        return DocumentMetadata(id=document_id, title=data.get("title") or "Unknown")


class DocumentSource:
    """Factory for document sources."""

    @staticmethod
    def create(config: CounterConfig) -> BaseDocumentSource:
        """
        Build a Confluence client from a validated configuration.

        Raises:
            ConfigurationError: if URL, username or token is missing
        """
        config.validate_credentials()
        logger.info(f"Using Confluence at {config.base_url}")
        return ConfluenceClient(
            base_url=config.base_url,
            username=config.username,
            api_token=config.api_token,
            timeout=config.timeout
        )
