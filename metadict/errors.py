"""Failures and data-quality events raised while building the dictionary.

Two families live here:

- **Rebuild errors** (``RebuildError`` subclasses) abort the current rebuild.
  Nothing is published to the cache and every caller waiting on that rebuild
  sees the exception.
- **Data-quality warnings** (``MissingValueCode``, ``UnmappedVariable``) are
  plain event records. They are handed to a warning callback, logged and sent
  to telemetry, and never raised.
"""

from typing import Callable, Literal, Union

from pydantic import BaseModel, Field


class MetadictError(Exception):
    """Base class for all metadict exceptions."""


class RebuildError(MetadictError):
    """A failure that aborts a dictionary rebuild."""


class ContainerNotFound(RebuildError):
    """The categorical-variable container is absent from the graph."""

    def __init__(self, container_id: str):
        self.container_id = container_id
        super().__init__(f"Could not find categorical variable container with ID={container_id}")


class EntityNotFound(RebuildError):
    """An identifier referenced during the rebuild is absent from the graph."""

    def __init__(self, entity_id: str, referenced_by: str | None = None):
        self.entity_id = entity_id
        self.referenced_by = referenced_by
        msg = f"Could not find record with @id={entity_id}"
        if referenced_by:
            msg += f" (referenced by {referenced_by})"
        super().__init__(msg)


class FetchFailed(RebuildError):
    """The source graph could not be retrieved or was malformed."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch vocabulary graph from {url}: {reason}")


class MissingValueCode(BaseModel, frozen=True):
    """A permitted value of a variable has neither a notation nor a usable label."""

    kind: Literal["missing_value_code"] = "missing_value_code"
    variable_id: str = Field(description="Vocabulary identifier of the variable.")
    member_id: str = Field(description="Identifier of the value without a code.")

    def message(self) -> str:
        return f"Missing code for member ID={self.member_id} as part of variable with ID={self.variable_id}"


class UnmappedVariable(BaseModel, frozen=True):
    """A vocabulary variable has no entry in the alias table; its rows are dropped."""

    kind: Literal["unmapped_variable"] = "unmapped_variable"
    variable_id: str = Field(description="Vocabulary identifier with no alias entry.")

    def message(self) -> str:
        return f"Programmer problem: Could not find variable code mapping for ID={self.variable_id}"


DataQualityWarning = Union[MissingValueCode, UnmappedVariable]

WarningCallback = Callable[[DataQualityWarning], None]
