"""Static tables that drive the dictionary build."""

from pydantic import BaseModel, Field

from metadict.aliases import Alias


class VocabularyTables(BaseModel):
    """Everything about a vocabulary that is configured rather than discovered.

    Attributes:
        container_id: Collection whose members are the categorical variables.
        cross_referenced_ids: Variables used by the dataset but not listed as
            container members, processed after the members.
        ignore_ids: Vocabularies skipped entirely (no expansion, no warnings).
        label_as_code_ids: Variables whose values have no notation; the value
            label is used as the code.
        aliases: Vocabulary identifier to output aliases.
        non_vocab_variables: ``(identifier, code)`` pairs for variables that
            have a vocabulary definition but no enumerated values.
        domain_only_variables: ``(code, definition)`` pairs for variables with
            no authoritative definition anywhere in the vocabulary.
    """

    model_config = {"frozen": True}

    container_id: str
    cross_referenced_ids: tuple[str, ...] = ()
    ignore_ids: frozenset[str] = frozenset()
    label_as_code_ids: frozenset[str] = frozenset()
    aliases: dict[str, tuple[Alias, ...]] = Field(default_factory=dict)
    non_vocab_variables: tuple[tuple[str, str], ...] = ()
    domain_only_variables: tuple[tuple[str, str], ...] = ()
