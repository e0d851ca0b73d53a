"""Glue between the graph source, the builder and the cache."""

from typing import Callable, Optional

from metadict.builder import Dictionary, DictionaryBuilder
from metadict.cache import RebuildCache
from metadict.source import GraphSourceInterface


class DictionaryService:
    """Fetch the vocabulary graph and build the dictionary from it."""

    def __init__(self, source: GraphSourceInterface, builder: DictionaryBuilder):
        self.source = source
        self.builder = builder

    async def rebuild(self) -> Dictionary:
        """Run one full rebuild; any RebuildError propagates unchanged."""
        graph = await self.source.fetch_graph()
        return self.builder.build(graph)

    def cache(
        self,
        ttl_seconds: float,
        on_failure: Optional[Callable[[BaseException], None]] = None,
    ) -> RebuildCache:
        """Return a RebuildCache fronting this service's rebuild."""
        return RebuildCache(self.rebuild, ttl_seconds=ttl_seconds, on_failure=on_failure)
