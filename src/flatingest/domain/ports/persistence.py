"""Ports for persisting repository records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from flatingest.domain.model import FileRecord, MediaRecord, Record, RepositoryObject, Term

if TYPE_CHECKING:
    from uuid import UUID

    from flatingest.domain.model import StoredRef


@runtime_checkable
class Repository[TRecord: Record](Protocol):
    """Minimal repository contract for a persistent record store.

    ``add`` persists a new record and returns the durable identifiers the store
    assigned to it.
    """

    def add(self, record: TRecord) -> StoredRef: ...

    def get_by_uuid(self, uuid: UUID) -> TRecord | None: ...


@runtime_checkable
class ObjectRepository(Repository[RepositoryObject], Protocol):
    """Repository contract for repository objects (nodes) with revision history."""

    def save_revision(self, record: RepositoryObject) -> StoredRef: ...


@runtime_checkable
class FileRepository(Repository[FileRecord], Protocol):
    """Repository contract for files."""


@runtime_checkable
class MediaRepository(Repository[MediaRecord], Protocol):
    """Repository contract for media."""


@runtime_checkable
class TermRepository(Repository[Term], Protocol):
    """Repository contract for classification terms."""
