"""Repository records created and updated by bulk imports."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import ClassVar

from flatingest.domain.model.entity import NotPersistedError, Record, StoredRef
from flatingest.domain.model.enums import EntityType, FileStatus, MediaFileField


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(eq=False, kw_only=True)
class Term(Record):
    """Classification record (controlled-vocabulary term)."""

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.TAXONOMY_TERM

    vocabulary: str
    name: str


@dataclass(eq=False, kw_only=True)
class ObjectRevision:
    """Snapshot of a repository object at one point of its history."""

    id: int | None = None
    object_id: int
    title: str
    pid: str
    model_id: int
    member_of_id: int | None = None
    created_at: datetime = field(default_factory=_utcnow)


@dataclass(eq=False, kw_only=True)
class RepositoryObject(Record):
    """Repository object (node) with revision history."""

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.NODE

    bundle: str
    title: str
    pid: str
    model_id: int
    member_of_id: int | None = None
    revision_id: int | None = None

    def snapshot(self) -> ObjectRevision:
        if self.id is None:
            raise NotPersistedError(f"node {self.uuid} must be persisted before a revision")
        return ObjectRevision(
            object_id=self.id,
            title=self.title,
            pid=self.pid,
            model_id=self.model_id,
            member_of_id=self.member_of_id,
        )

    def stored_ref(self) -> StoredRef:
        ref = super().stored_ref()
        return StoredRef(id=ref.id, uuid=ref.uuid, revision_id=self.revision_id)


@dataclass(eq=False, kw_only=True)
class FileRecord(Record):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.FILE

    filename: str
    uri: str
    filemime: str
    status: FileStatus = FileStatus.TEMPORARY

    def set_permanent(self) -> None:
        self.status = FileStatus.PERMANENT


@dataclass(eq=False, kw_only=True)
class MediaRecord(Record):
    """Media record owned by a node; the file relation lives under ``file_field``."""

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.MEDIA

    bundle: str
    name: str
    media_use_id: int
    media_of_id: int
    file_field: MediaFileField
    file_id: int
