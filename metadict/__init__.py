"""
Ausplots Metadata Dictionary - a flat dictionary over a JSON-LD vocabulary.

Builds a sorted table of variable codes, value codes, labels and definitions
from the AusPlots controlled-vocabulary graph, and serves it over HTTP from a
time-expiring cache.

    from metadict import DictionaryBuilder, GraphIndex, ausplots_tables

    builder = DictionaryBuilder(ausplots_tables())
    dictionary = builder.build(GraphIndex.from_compacted(compacted))
"""

from metadict.aliases import Alias, AliasResolver
from metadict.ausplots import ausplots_tables
from metadict.builder import Dictionary, DictionaryBuilder, DictionaryEntry
from metadict.cache import RebuildCache
from metadict.entity import VocabEntity
from metadict.errors import (
    ContainerNotFound,
    EntityNotFound,
    FetchFailed,
    MetadictError,
    MissingValueCode,
    RebuildError,
    UnmappedVariable,
)
from metadict.graph import GraphIndex
from metadict.service import DictionaryService
from metadict.source import GraphSourceInterface, HttpGraphSource
from metadict.tables import VocabularyTables
from metadict.values import ExpandedValue, ValueExpander

__all__ = [
    "Alias",
    "AliasResolver",
    "ausplots_tables",
    "Dictionary",
    "DictionaryBuilder",
    "DictionaryEntry",
    "DictionaryService",
    "RebuildCache",
    "VocabEntity",
    "ContainerNotFound",
    "EntityNotFound",
    "FetchFailed",
    "MetadictError",
    "MissingValueCode",
    "RebuildError",
    "UnmappedVariable",
    "GraphIndex",
    "GraphSourceInterface",
    "HttpGraphSource",
    "VocabularyTables",
    "ExpandedValue",
    "ValueExpander",
]

__version__ = "0.1.0"
