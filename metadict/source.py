"""Retrieval of the vocabulary graph.

``GraphSourceInterface`` is the boundary between the dictionary build and
wherever the vocabulary comes from. ``HttpGraphSource`` downloads the TERN
JSON-LD export, compacts it against the hand-written context and indexes it.
"""

import asyncio
import copy
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx
from pyld import jsonld

from metadict.context import COMPACTION_CONTEXT
from metadict.errors import FetchFailed
from metadict.graph import GraphIndex
from metadict.logging import setup_logging

logger = setup_logging()


class GraphSourceInterface(ABC):
    """Produce an indexed vocabulary graph."""

    @abstractmethod
    async def fetch_graph(self) -> GraphIndex:
        """Fetch and index the whole vocabulary graph.

        Raises:
            FetchFailed: if the source is unreachable or its content malformed.
        """


class HttpGraphSource(GraphSourceInterface):
    """Download a JSON-LD document over HTTP and compact it.

    Compaction is CPU bound and runs in a worker thread so the event loop
    keeps serving cached requests meanwhile.

    Args:
        url: Location of the JSON-LD export.
        context: Compaction context mapping short names to vocabulary IRIs.
        timeout_seconds: Timeout applied to the HTTP request.
        transport: Optional httpx transport (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        url: str,
        context: Optional[dict] = None,
        timeout_seconds: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.context = context or COMPACTION_CONTEXT
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def fetch_document(self) -> Any:
        """GET the source URL and decode the JSON body."""
        logger.debug(f"Using JSON-LD source URL: {self.url}")
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                response = await client.get(self.url, headers={"Accept": "application/ld+json, application/json"})
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchFailed(self.url, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise FetchFailed(self.url, f"{type(e).__name__}: {e}") from e
        try:
            document = response.json()
        except ValueError as e:
            raise FetchFailed(self.url, f"response is not valid JSON: {e}") from e
        if not isinstance(document, (dict, list)):
            raise FetchFailed(self.url, "response is not a JSON-LD document")
        return document

    def compact(self, document: Any) -> dict[str, Any]:
        """Compact a JSON-LD document against the configured context."""
        try:
            compacted = jsonld.compact(document, copy.deepcopy(self.context))
        except jsonld.JsonLdError as e:
            raise FetchFailed(self.url, f"JSON-LD compaction failed: {e}") from e
        if not isinstance(compacted, dict):
            raise FetchFailed(self.url, "JSON-LD compaction did not produce a document")
        return compacted

    async def fetch_graph(self) -> GraphIndex:
        document = await self.fetch_document()
        compacted = await asyncio.to_thread(self.compact, document)
        graph = GraphIndex.from_compacted(compacted)
        if not len(graph):
            raise FetchFailed(self.url, "JSON-LD document contains no identified nodes")
        logger.debug(f"Indexed {len(graph)} vocabulary entities from {self.url}")
        return graph
