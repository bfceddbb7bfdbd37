"""Per-run memo of classification lookups."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from flatingest.domain.bulk_import.errors import ReferenceNotFoundError

if TYPE_CHECKING:
    from collections.abc import Callable
    from uuid import UUID

    from flatingest.domain.model import ReferenceKind

log = logging.getLogger(__name__)

type ReferenceLookup = Callable[[UUID], int | None]


@dataclass(slots=True)
class ReferenceCache:
    """Resolve auxiliary references by uuid, querying the store at most once per key.

    The first resolution of a key is kept for the rest of the run; batches never
    modify classification records, so later store changes are not observed.
    """

    _entries: dict[ReferenceKind, dict[UUID, int]] = field(
        default_factory=dict["ReferenceKind", dict["UUID", int]]
    )
    lookups: int = 0

    def resolve(self, kind: ReferenceKind, uuid: UUID, lookup: ReferenceLookup) -> int:
        bucket = self._bucket(kind)
        cached = bucket.get(uuid)
        if cached is not None:
            return cached

        self.lookups += 1
        resolved = lookup(uuid)
        if resolved is None:
            raise ReferenceNotFoundError(kind, uuid)
        bucket[uuid] = resolved
        log.debug("Cached %s %s -> %s", kind, uuid, resolved)
        return resolved

    def cached(self, kind: ReferenceKind, uuid: UUID) -> int | None:
        return self._bucket(kind).get(uuid)

    def _bucket(self, kind: ReferenceKind) -> dict[UUID, int]:
        if kind not in self._entries:
            self._entries[kind] = {}
        return self._entries[kind]
