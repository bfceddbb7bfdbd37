"""Typed batch operations.

Operations are immutable inputs: handlers read them and never write back.
Cross-record references use :class:`IdRef`, which carries either the durable
uuid of a stored record or the temp_id of a record created earlier in the batch.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from flatingest.domain.bulk_import.errors import ValidationError
from flatingest.domain.model import MediaFileField, OperationKind

if TYPE_CHECKING:
    from uuid import UUID


@dataclass(frozen=True, slots=True)
class IdRef:
    """Reference to a record by durable uuid or by batch temp_id, never both."""

    uuid: UUID | None = None
    temp_id: str | None = None

    def __post_init__(self) -> None:
        if (self.uuid is None) == (self.temp_id is None):
            raise ValidationError("reference needs exactly one of uuid or temp_id")

    @classmethod
    def optional(cls, *, uuid: UUID | None, temp_id: str | None) -> IdRef | None:
        """Return ``None`` when neither half is given, else a validated reference."""

        if uuid is None and temp_id is None:
            return None
        return cls(uuid=uuid, temp_id=temp_id)


@dataclass(frozen=True, slots=True, kw_only=True)
class CreateNode:
    KIND: ClassVar[OperationKind] = OperationKind.CREATE_NODE

    temp_id: str
    title: str
    pid: str
    model_uuid: UUID
    parent: IdRef | None = None

    @property
    def kind(self) -> OperationKind:
        return self.KIND


@dataclass(frozen=True, slots=True, kw_only=True)
class UpdateNode:
    """Update of a node created earlier in the batch; ``None`` keeps the current value."""

    KIND: ClassVar[OperationKind] = OperationKind.UPDATE_NODE

    temp_id: str
    title: str | None = None
    pid: str | None = None
    model_uuid: UUID | None = None
    parent: IdRef | None = None

    @property
    def kind(self) -> OperationKind:
        return self.KIND


@dataclass(frozen=True, slots=True, kw_only=True)
class CreateFile:
    KIND: ClassVar[OperationKind] = OperationKind.CREATE_FILE

    temp_id: str
    filename: str
    uri: str
    filemime: str

    @property
    def kind(self) -> OperationKind:
        return self.KIND


@dataclass(frozen=True, slots=True, kw_only=True)
class CreateMedia:
    KIND: ClassVar[OperationKind] = OperationKind.CREATE_MEDIA

    temp_id: str
    bundle: str
    name: str
    media_use_uuid: UUID
    file: IdRef
    node: IdRef
    relation_field: MediaFileField

    @property
    def kind(self) -> OperationKind:
        return self.KIND


type Operation = CreateNode | UpdateNode | CreateFile | CreateMedia
