"""
Base building blocks:
store-assigned identity and the durable reference handed back after persistence.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from flatingest.domain.model.enums import EntityType


def new_uuid() -> UUID:
    return uuid4()


@dataclass(frozen=True, slots=True)
class StoredRef:
    """Durable identifiers of a persisted record."""

    id: int
    uuid: UUID
    revision_id: int | None = None


class NotPersistedError(RuntimeError):
    """Raised when durable identifiers are requested before the store assigned them."""


@dataclass(eq=False, kw_only=True)
class Record:
    """The uuid exists immediately; the numeric id is assigned by the store."""

    id: int | None = None
    uuid: UUID = field(default_factory=new_uuid)

    # class-level discriminator; subclasses must override
    ENTITY_TYPE: ClassVar[EntityType]

    @property
    def entity_type(self) -> EntityType:
        return self.ENTITY_TYPE

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    def stored_ref(self) -> StoredRef:
        if self.id is None:
            raise NotPersistedError(f"{self.entity_type} {self.uuid} has no durable id yet")
        return StoredRef(id=self.id, uuid=self.uuid)
