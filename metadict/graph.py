"""Identifier index over a compacted vocabulary graph."""

from typing import Any, Iterable, Iterator, Optional

from metadict.entity import VocabEntity
from metadict.errors import EntityNotFound
from metadict.logging import setup_logging

logger = setup_logging()


class GraphIndex:
    """Look up vocabulary entities by identifier.

    The index is built once per rebuild from every node of the graph. It never
    follows references, so cycles in the source graph are harmless. If an
    identifier repeats, the first node is kept.

    Example:
        ```python
        graph = GraphIndex.from_compacted(compacted_document)
        container = graph.resolve(container_id)
        variable = graph.require(variable_id)  # raises EntityNotFound
        ```
    """

    def __init__(self, entities: Iterable[VocabEntity] = ()):
        self._entities: dict[str, VocabEntity] = {}
        for entity in entities:
            self._entities.setdefault(entity.id, entity)

    @classmethod
    def from_nodes(cls, nodes: Iterable[dict[str, Any]]) -> "GraphIndex":
        """Index compacted nodes; nodes without an @id (blank, context-only) are skipped."""
        entities = []
        skipped = 0
        for node in nodes:
            if not isinstance(node, dict) or "@id" not in node:
                skipped += 1
                continue
            entities.append(VocabEntity.from_node(node))
        if skipped:
            logger.debug(f"Skipped {skipped} graph nodes without an @id")
        return cls(entities)

    @classmethod
    def from_compacted(cls, document: dict[str, Any]) -> "GraphIndex":
        """Index a compacted JSON-LD document.

        Compaction only emits ``@graph`` when there is more than one top-level
        node; a lone node is the document itself.
        """
        if "@graph" in document:
            nodes = document["@graph"]
            if not isinstance(nodes, list):
                nodes = [nodes]
        else:
            nodes = [{k: v for k, v in document.items() if k != "@context"}]
        return cls.from_nodes(nodes)

    def resolve(self, entity_id: str) -> Optional[VocabEntity]:
        """Return the entity with this identifier, or None."""
        return self._entities.get(entity_id)

    def require(self, entity_id: str, referenced_by: str | None = None) -> VocabEntity:
        """Return the entity with this identifier or raise EntityNotFound."""
        entity = self._entities.get(entity_id)
        if entity is None:
            raise EntityNotFound(entity_id, referenced_by=referenced_by)
        return entity

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._entities

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[VocabEntity]:
        return iter(self._entities.values())
