"""Shared test fixtures: an in-memory document source and a clean environment."""

import pytest

from confluence_counter.document_source import BaseDocumentSource
from confluence_counter.schemas import DocumentSummary, DocumentMetadata
from confluence_counter.exceptions import DocumentFetchError

ENV_VARS = [
    "CONFLUENCE_URL",
    "CONFLUENCE_USERNAME",
    "CONFLUENCE_API_TOKEN",
    "CONFLUENCE_SPACE_KEY",
    "CONFLUENCE_PAGE_URLS",
]


def table(*rows) -> str:
    """Build a storage-format table from (label, count) pairs."""
    body = "".join(f"<tr><td>{label}</td><td>{count}</td></tr>" for label, count in rows)
    return f"<table><tbody>{body}</tbody></table>"


class FakeSource(BaseDocumentSource):
    """
    In-memory pages keyed by id.

    Records every call so tests can check ordering and pagination, and can be
    told to fail metadata, content, or listing requests.
    """

    def __init__(self, pages=None, fail_metadata=(), fail_content=(), fail_listing=False):
        self.pages = dict(pages or {})          # id -> (title, content)
        self.fail_metadata = set(fail_metadata)
        self.fail_content = set(fail_content)
        self.fail_listing = fail_listing
        self.calls = []

    def list_documents(self, collection_key, offset, limit):
        self.calls.append(("list", collection_key, offset, limit))
        if self.fail_listing:
            raise DocumentFetchError("HTTP 500", status_code=500)
        items = list(self.pages.items())[offset:offset + limit]
        return [DocumentSummary(id=page_id, title=title) for page_id, (title, _) in items]

    def get_document_content(self, document_id):
        self.calls.append(("content", document_id))
        if document_id in self.fail_content or document_id not in self.pages:
            raise DocumentFetchError("HTTP 404", document_id=document_id, status_code=404)
        return self.pages[document_id][1]

    def get_document_metadata(self, document_id):
        self.calls.append(("metadata", document_id))
        if document_id in self.fail_metadata or document_id not in self.pages:
            raise DocumentFetchError("HTTP 404", document_id=document_id, status_code=404)
        return DocumentMetadata(id=document_id, title=self.pages[document_id][0])


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Remove Confluence settings from the environment and run from an empty directory."""
    for name in ENV_VARS:
        # setenv first so monkeypatch also removes values a .env load adds later
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path
