"""Build the flat metadata dictionary from a vocabulary graph.

The build walks the categorical-variable container (plus a few variables
referenced from elsewhere), expands each variable's permitted values, fans
them out to every output alias of the variable, then appends valueless rows
for free-text/numeric variables and for variables that only exist in the
ausplotsR package. The result is sorted by variable code and value code.

Typical usage:
    ```python
    builder = DictionaryBuilder(ausplots_tables(), on_warning=report_warning)
    dictionary = builder.build(graph)
    ```
"""

from typing import Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from metadict.aliases import AliasResolver
from metadict.errors import ContainerNotFound, WarningCallback
from metadict.graph import GraphIndex
from metadict.logging import setup_logging
from metadict.tables import VocabularyTables
from metadict.telemetry import report_warning
from metadict.values import ValueExpander

logger = setup_logging()


class DictionaryEntry(BaseModel):
    """One row of the metadata dictionary.

    The value fields are None for variables without enumerated values.
    Serialised with camelCase keys (``variableCode``, ``variableValueCode``...).
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    variable_code: str = Field(description="Output variable (column) code.")
    variable_label: str = Field(description="Human readable variable name.")
    variable_definition: Optional[str] = Field(default=None, description="Definition of the variable.")
    variable_value_code: Optional[str] = Field(default=None, description="Code of a permitted value.")
    variable_value_label: Optional[str] = Field(default=None, description="Label of a permitted value.")
    variable_value_definition: Optional[str] = Field(default=None, description="Definition of a permitted value.")

    def sort_key(self) -> tuple[str, bool, str]:
        """Order by variable code, then value code with None first."""
        value_code = self.variable_value_code
        return (self.variable_code, value_code is not None, value_code or "")


Dictionary = tuple[DictionaryEntry, ...]


class DictionaryBuilder:
    """Turn a vocabulary graph into a sorted ``Dictionary``.

    The builder is a pure function of the graph and its tables: building twice
    from the same graph gives equal dictionaries. Data-quality problems go to
    ``on_warning``; structural problems (missing container or referenced
    entity) raise and abort the build.
    """

    def __init__(self, tables: VocabularyTables, on_warning: WarningCallback = report_warning):
        self.tables = tables
        self.on_warning = on_warning

    def worklist(self, graph: GraphIndex) -> list[str]:
        """Return the vocabulary identifiers to expand, minus the ignore list.

        Raises:
            ContainerNotFound: if the container is not in the graph.
        """
        container = graph.resolve(self.tables.container_id)
        if container is None:
            raise ContainerNotFound(self.tables.container_id)
        ordered = dict.fromkeys((*container.members, *self.tables.cross_referenced_ids))
        variable_ids = []
        for variable_id in ordered:
            if variable_id in self.tables.ignore_ids:
                logger.debug(f"Ignoring variable with ID={variable_id}")
                continue
            variable_ids.append(variable_id)
        return variable_ids

    def build(self, graph: GraphIndex) -> Dictionary:
        """Build the dictionary.

        Raises:
            ContainerNotFound: if the categorical-variable container is missing.
            EntityNotFound: if a variable, value or non-vocabulary variable
                identifier is missing from the graph.
        """
        entries = [
            *self._vocabulary_entries(graph),
            *self._non_vocab_entries(graph),
            *self._domain_only_entries(),
        ]
        # list.sort is stable, so rows with equal keys keep insertion order.
        entries.sort(key=DictionaryEntry.sort_key)
        return tuple(entries)

    def _vocabulary_entries(self, graph: GraphIndex) -> Iterator[DictionaryEntry]:
        expander = ValueExpander(graph, self.on_warning, self.tables.label_as_code_ids)
        resolver = AliasResolver(self.tables.aliases, self.on_warning)
        variable_ids = self.worklist(graph)
        members = set(graph.require(self.tables.container_id).members)
        for variable_id in variable_ids:
            # Cross-referenced variables are not container members.
            referenced_by = self.tables.container_id if variable_id in members else None
            variable = graph.require(variable_id, referenced_by=referenced_by)
            values = expander.expand(variable)
            for alias in resolver.resolve(variable_id):
                label = alias.display_label(variable)
                for value in values:
                    yield DictionaryEntry(
                        variable_code=alias.code,
                        variable_label=label,
                        variable_definition=variable.definition,
                        variable_value_code=value.code,
                        variable_value_label=value.label,
                        variable_value_definition=value.definition,
                    )

    def _non_vocab_entries(self, graph: GraphIndex) -> Iterator[DictionaryEntry]:
        for variable_id, code in self.tables.non_vocab_variables:
            variable = graph.require(variable_id)
            yield DictionaryEntry(
                variable_code=code,
                variable_label=variable.display_label() or code,
                variable_definition=variable.definition,
            )

    def _domain_only_entries(self) -> Iterator[DictionaryEntry]:
        for code, definition in self.tables.domain_only_variables:
            yield DictionaryEntry(
                variable_code=code,
                variable_label=code,
                variable_definition=definition,
            )
