"""Test fixtures and a small synthetic vocabulary.

This module provides:
- A compacted vocabulary graph exercising every build path: plain 1:1
  variables, a fan-out variable, a label-as-code variable, an ignored and an
  unmapped container member, a cross-referenced variable, non-vocabulary
  variables and a domain-only variable
- ``make_tables()`` returning matching VocabularyTables
- ``InMemoryGraphSource``, a graph source that counts fetches and can be held
  open or made to fail
- Pytest fixtures wiring these together
"""

import asyncio
from typing import Any, Optional

import pytest

from metadict.aliases import Alias, build_alias_table
from metadict.errors import DataQualityWarning, FetchFailed
from metadict.graph import GraphIndex
from metadict.source import GraphSourceInterface
from metadict.tables import VocabularyTables

CV = "http://example.org/cv"

CONTAINER_ID = f"{CV}/container"
SOIL_COLOUR_ID = f"{CV}/soil-colour"
OBSERVER_ID = f"{CV}/observer"
DATUM_ID = f"{CV}/datum"
IGNORED_ID = f"{CV}/miscellaneous"
UNMAPPED_ID = f"{CV}/unmapped"
STATE_ID = f"{CV}/state"
HEIGHT_ID = f"{CV}/height"
UNLABELLED_ID = f"{CV}/unlabelled"


def node(entity_id: str, **fields: Any) -> dict[str, Any]:
    """A compacted graph node."""
    return {"@id": entity_id, **fields}


def vocabulary_nodes() -> list[dict[str, Any]]:
    """Compacted nodes of the test vocabulary."""
    return [
        node(
            CONTAINER_ID,
            label="Categorical variables",
            member=[SOIL_COLOUR_ID, OBSERVER_ID, DATUM_ID, IGNORED_ID, UNMAPPED_ID],
        ),
        node(
            SOIL_COLOUR_ID,
            label="Soil colour",
            definition="Colour of the soil",
            member=[f"{SOIL_COLOUR_ID}/red", f"{SOIL_COLOUR_ID}/black"],
        ),
        node(f"{SOIL_COLOUR_ID}/red", label="Red", notation="R", definition="Red soil"),
        node(f"{SOIL_COLOUR_ID}/black", label="Black", notation="B", definition="Black soil"),
        node(
            OBSERVER_ID,
            prefLabel="Observer",
            definition="Person making the observation",
            member=[f"{OBSERVER_ID}/1", f"{OBSERVER_ID}/2"],
        ),
        node(f"{OBSERVER_ID}/1", label="Jane Smith", notation="JS"),
        node(f"{OBSERVER_ID}/2", label="Ali Khan", notation="AK"),
        node(DATUM_ID, label="Datum", definition="Geodetic datum", member=[f"{DATUM_ID}/gda94"]),
        node(f"{DATUM_ID}/gda94", label="GDA94", definition="Geocentric Datum of Australia 1994"),
        node(IGNORED_ID, label="Miscellaneous", member=[f"{IGNORED_ID}/missing-value"]),
        node(UNMAPPED_ID, label="Unmapped", member=[f"{UNMAPPED_ID}/x"]),
        node(f"{UNMAPPED_ID}/x", label="X", notation="x"),
        node(STATE_ID, label="State", definition="Australian state", member=[f"{STATE_ID}/nsw"]),
        node(f"{STATE_ID}/nsw", label="New South Wales", notation="NSW"),
        node(HEIGHT_ID, label="Height", definition="Height of the plant"),
        node(UNLABELLED_ID, definition="A variable with no label"),
    ]


def make_tables(**overrides: Any) -> VocabularyTables:
    """VocabularyTables for the test vocabulary."""
    fields: dict[str, Any] = {
        "container_id": CONTAINER_ID,
        "cross_referenced_ids": (STATE_ID,),
        "ignore_ids": frozenset({IGNORED_ID}),
        "label_as_code_ids": frozenset({DATUM_ID}),
        "aliases": build_alias_table(
            {
                SOIL_COLOUR_ID: ["soil_colour"],
                OBSERVER_ID: [
                    Alias(code="observer_veg", label="Observer veg"),
                    Alias(code="observer_soil", label="Observer soil"),
                ],
                DATUM_ID: [Alias(code="pit_marker_datum", label="Pit marker datum")],
                STATE_ID: ["state"],
            }
        ),
        "non_vocab_variables": ((HEIGHT_ID, "height"), (UNLABELLED_ID, "unlabelled")),
        "domain_only_variables": (("genus", "plant genus"),),
    }
    fields.update(overrides)
    return VocabularyTables(**fields)


class InMemoryGraphSource(GraphSourceInterface):
    """Graph source serving fixed nodes, for cache and server tests.

    Args:
        nodes: Compacted nodes to index on every fetch.
        gate: If set, each fetch waits for this event before returning.
        fail: If True, every fetch raises FetchFailed.
    """

    def __init__(
        self,
        nodes: Optional[list[dict[str, Any]]] = None,
        gate: Optional[asyncio.Event] = None,
        fail: bool = False,
    ) -> None:
        self.nodes = vocabulary_nodes() if nodes is None else nodes
        self.gate = gate
        self.fail = fail
        self.fetch_count = 0

    async def fetch_graph(self) -> GraphIndex:
        self.fetch_count += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.fail:
            raise FetchFailed("memory://vocabulary", "source unavailable")
        return GraphIndex.from_nodes(self.nodes)


class WarningCollector:
    """Callable collecting data-quality warnings."""

    def __init__(self) -> None:
        self.warnings: list[DataQualityWarning] = []

    def __call__(self, warning: DataQualityWarning) -> None:
        self.warnings.append(warning)

    def of_kind(self, kind: str) -> list[DataQualityWarning]:
        return [w for w in self.warnings if w.kind == kind]


@pytest.fixture
def graph() -> GraphIndex:
    return GraphIndex.from_nodes(vocabulary_nodes())


@pytest.fixture
def tables() -> VocabularyTables:
    return make_tables()


@pytest.fixture
def collector() -> WarningCollector:
    return WarningCollector()


@pytest.fixture
def source() -> InMemoryGraphSource:
    return InMemoryGraphSource()
