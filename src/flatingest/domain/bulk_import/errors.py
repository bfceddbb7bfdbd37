"""Errors raised while interpreting a batch.

``BatchSourceError`` and its subclasses abort the whole run before any operation
executes. ``OperationError`` and its subclasses are confined to one operation:
the batch runner records them and moves on to the next operation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID

    from flatingest.domain.model import EntityType, ReferenceKind


class BatchSourceError(RuntimeError):
    """The batch description could not be obtained or understood."""


class BatchNotFoundError(BatchSourceError):
    """The batch description does not exist."""


class InvalidBatchError(BatchSourceError):
    """The batch description is unreadable, unparsable or lacks its operations list."""


class OperationError(Exception):
    """A single operation failed; the rest of the batch is unaffected."""


class UnknownOperationError(OperationError):
    def __init__(self, kind: object) -> None:
        super().__init__(f"Unknown operation: {kind}")
        self.kind = kind


class ValidationError(OperationError):
    """An operation lacks a required field or carries an invalid one."""


class ReferenceKindError(ValidationError):
    """A temp_id names a record of another kind than the reference expects."""

    def __init__(self, temp_id: str, *, expected: EntityType, actual: EntityType) -> None:
        super().__init__(
            f"temp_id {temp_id} refers to a {_label(actual).lower()}, "
            f"not a {_label(expected).lower()}"
        )
        self.temp_id = temp_id
        self.expected = expected
        self.actual = actual


class UnresolvedReferenceError(OperationError):
    """A temp_id was not produced by an earlier successful operation."""

    def __init__(self, temp_id: str, *, label: str = "Record") -> None:
        super().__init__(f"{label} not found for temp_id {temp_id}")
        self.temp_id = temp_id


class ReferenceNotFoundError(OperationError):
    """A durable uuid reference does not match any stored record."""

    def __init__(self, kind: ReferenceKind | EntityType, uuid: UUID) -> None:
        super().__init__(f"{_label(kind)} not found for UUID {uuid}")
        self.kind = kind
        self.uuid = uuid


class NotFoundError(OperationError):
    """The record targeted by an update is missing from the store."""

    def __init__(self, kind: EntityType, uuid: UUID) -> None:
        super().__init__(f"{_label(kind)} not found for UUID {uuid}")
        self.kind = kind
        self.uuid = uuid


class ConflictError(OperationError):
    """A temp_id is already bound to a different durable record."""

    def __init__(self, temp_id: str) -> None:
        super().__init__(f"temp_id {temp_id} is already bound to another record")
        self.temp_id = temp_id


def _label(kind: ReferenceKind | EntityType) -> str:
    return str(kind).replace("_", " ").capitalize()
