"""Mapping of vocabulary identifiers to output variable codes.

Most vocabularies back exactly one output variable. Some are shared: the
AusPlots observer vocabulary, for instance, backs four output variables
(``observer_veg``, ``observer_soil``, ``described_by``, ``collected_by``),
each of which receives the full value list. Identifiers missing from the
table are reported and dropped, never raised.
"""

from typing import Mapping, Optional, Sequence

from pydantic import BaseModel, Field

from metadict.entity import VocabEntity
from metadict.errors import UnmappedVariable, WarningCallback


class Alias(BaseModel, frozen=True):
    """An output variable produced from a vocabulary identifier."""

    code: str = Field(min_length=1, description="Output variable code, e.g. 'soil_colour'.")
    label: Optional[str] = Field(
        default=None,
        description="Display label override; None falls back to the vocabulary's own label.",
    )

    def display_label(self, variable: VocabEntity) -> str:
        """Alias label, else the vocabulary's label/prefLabel, else the alias code."""
        return self.label or variable.display_label() or self.code


AliasTable = Mapping[str, tuple[Alias, ...]]


def build_alias_table(entries: Mapping[str, Sequence[str | Alias]]) -> dict[str, tuple[Alias, ...]]:
    """Normalise a hand-written table where a bare string means ``Alias(code=...)``.

    Raises:
        ValueError: if an identifier maps to an empty sequence.
    """
    table: dict[str, tuple[Alias, ...]] = {}
    for variable_id, targets in entries.items():
        aliases = tuple(t if isinstance(t, Alias) else Alias(code=t) for t in targets)
        if not aliases:
            raise ValueError(f"Alias table entry for {variable_id} is empty")
        table[variable_id] = aliases
    return table


class AliasResolver:
    """Static lookup from vocabulary identifier to output aliases."""

    def __init__(self, table: AliasTable, on_warning: WarningCallback):
        for variable_id, aliases in table.items():
            if not aliases:
                raise ValueError(f"Alias table entry for {variable_id} is empty")
        self._table = dict(table)
        self.on_warning = on_warning

    def lookup(self, variable_id: str) -> Optional[tuple[Alias, ...]]:
        """Return the aliases for an identifier, or None if it is unmapped."""
        return self._table.get(variable_id)

    def resolve(self, variable_id: str) -> tuple[Alias, ...]:
        """Return the aliases for an identifier.

        Unknown identifiers produce an ``UnmappedVariable`` warning and an
        empty tuple, so the variable is left out of the dictionary.
        """
        aliases = self.lookup(variable_id)
        if aliases is None:
            self.on_warning(UnmappedVariable(variable_id=variable_id))
            return ()
        return aliases

    def __len__(self) -> int:
        return len(self._table)
