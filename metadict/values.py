"""Expansion of a variable's permitted values."""

from typing import AbstractSet, Optional

from pydantic import BaseModel

from metadict.entity import VocabEntity
from metadict.errors import MissingValueCode, WarningCallback
from metadict.graph import GraphIndex


class ExpandedValue(BaseModel, frozen=True):
    """One permitted value of a categorical variable."""

    code: Optional[str] = None
    label: Optional[str] = None
    definition: Optional[str] = None


class ValueExpander:
    """Resolve a variable's member list into ``ExpandedValue`` records.

    Values are coded by their skos:notation. Some vocabularies (the AusPlots
    datum list) have no notations, so for variables in ``label_as_code_ids``
    the value's label is the code instead. A value with no code is still
    emitted with ``code=None`` and reported through ``on_warning``.
    """

    def __init__(
        self,
        graph: GraphIndex,
        on_warning: WarningCallback,
        label_as_code_ids: AbstractSet[str] = frozenset(),
    ):
        self.graph = graph
        self.on_warning = on_warning
        self.label_as_code_ids = frozenset(label_as_code_ids)

    def expand(self, variable: VocabEntity) -> tuple[ExpandedValue, ...]:
        """Return the variable's values in member-list order.

        Raises:
            EntityNotFound: if a member identifier is not in the graph.
        """
        use_label = variable.id in self.label_as_code_ids
        values = []
        for member_id in variable.members:
            member = self.graph.require(member_id, referenced_by=variable.id)
            code = member.label if use_label else member.notation
            if not code:
                self.on_warning(MissingValueCode(variable_id=variable.id, member_id=member_id))
                code = None
            values.append(
                ExpandedValue(
                    code=code,
                    label=member.label,
                    definition=member.definition,
                )
            )
        return tuple(values)
