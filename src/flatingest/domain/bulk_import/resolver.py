"""Batch-scoped mapping from temp_ids to durable identifiers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from flatingest.domain.bulk_import.errors import ConflictError

if TYPE_CHECKING:
    from uuid import UUID

    from flatingest.domain.model import EntityType

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Binding:
    """Durable identifiers and kind of the record a temp_id was bound to."""

    id: int
    uuid: UUID
    entity_type: EntityType


@dataclass(slots=True)
class IdentifierResolver:
    """Registry of records created during one run, keyed by their temp_id.

    A temp_id is bound once; later operations always observe that binding.
    """

    _bindings: dict[str, Binding] = field(default_factory=dict[str, Binding])

    def __contains__(self, temp_id: object) -> bool:
        return temp_id in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def ensure_unbound(self, temp_id: str) -> None:
        if temp_id in self._bindings:
            raise ConflictError(temp_id)

    def record(
        self,
        temp_id: str,
        durable_id: int,
        durable_uuid: UUID,
        entity_type: EntityType,
    ) -> None:
        binding = Binding(id=durable_id, uuid=durable_uuid, entity_type=entity_type)
        existing = self._bindings.get(temp_id)
        if existing is not None:
            if existing == binding:
                return
            raise ConflictError(temp_id)
        self._bindings[temp_id] = binding
        log.debug(
            "Bound temp_id %s to %s id=%s uuid=%s", temp_id, entity_type, durable_id, durable_uuid
        )

    def binding(self, temp_id: str) -> Binding | None:
        return self._bindings.get(temp_id)

    def resolve_id(self, temp_id: str) -> int | None:
        binding = self._bindings.get(temp_id)
        return binding.id if binding is not None else None

    def resolve_uuid(self, temp_id: str) -> UUID | None:
        binding = self._bindings.get(temp_id)
        return binding.uuid if binding is not None else None
