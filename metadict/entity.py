"""Vocabulary entities read from a compacted JSON-LD graph."""

from typing import Any, Optional

from pydantic import BaseModel, Field


def _literal(value: Any) -> Optional[str]:
    """Reduce a compacted JSON-LD property value to a single string.

    Compaction leaves plain strings for untyped literals, value objects for
    language-tagged or typed literals, and arrays when a property repeats.
    """
    if value is None:
        return None
    if isinstance(value, list):
        for item in value:
            literal = _literal(item)
            if literal is not None:
                return literal
        return None
    if isinstance(value, dict):
        inner = value.get("@value", value.get("@id"))
        return None if inner is None else str(inner)
    return str(value)


def _identifiers(value: Any) -> tuple[str, ...]:
    """Normalise a ``member`` value (single id, list of ids or node refs) to a tuple."""
    if value is None:
        return ()
    if not isinstance(value, list):
        value = [value]
    ids = []
    for item in value:
        if isinstance(item, dict):
            item = item.get("@id")
        if item is not None:
            ids.append(str(item))
    return tuple(ids)


class VocabEntity(BaseModel):
    """A concept, collection or value from the controlled vocabulary.

    Entities are immutable for the lifetime of one rebuild. Only the fields
    named in the compaction context are kept.
    """

    model_config = {"frozen": True}

    id: str = Field(description="Vocabulary identifier (the node's @id).")
    label: Optional[str] = Field(default=None, description="rdfs:label")
    pref_label: Optional[str] = Field(default=None, description="skos:prefLabel")
    notation: Optional[str] = Field(default=None, description="skos:notation")
    definition: Optional[str] = Field(default=None, description="skos:definition")
    description: Optional[str] = Field(default=None, description="dcterms:description")
    members: tuple[str, ...] = Field(
        default=(),
        description="skos:member identifiers, in source order.",
    )

    @classmethod
    def from_node(cls, node: dict[str, Any]) -> "VocabEntity":
        """Build an entity from a compacted graph node."""
        return cls(
            id=node["@id"],
            label=_literal(node.get("label")),
            pref_label=_literal(node.get("prefLabel")),
            notation=_literal(node.get("notation")),
            definition=_literal(node.get("definition")),
            description=_literal(node.get("description")),
            members=_identifiers(node.get("member")),
        )

    def display_label(self) -> Optional[str]:
        """Return rdfs:label, falling back to skos:prefLabel."""
        return self.label or self.pref_label
