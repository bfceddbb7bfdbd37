"""Public domain model surface."""

from __future__ import annotations

from flatingest.domain.model.entity import NotPersistedError, Record, StoredRef
from flatingest.domain.model.enums import (
    EntityType,
    FileStatus,
    MediaFileField,
    OperationKind,
    ReferenceKind,
)
from flatingest.domain.model.records import (
    FileRecord,
    MediaRecord,
    ObjectRevision,
    RepositoryObject,
    Term,
)

__all__ = [  # noqa: RUF022
    # base
    "Record",
    "StoredRef",
    "NotPersistedError",
    # enums
    "EntityType",
    "FileStatus",
    "MediaFileField",
    "OperationKind",
    "ReferenceKind",
    # records
    "FileRecord",
    "MediaRecord",
    "ObjectRevision",
    "RepositoryObject",
    "Term",
]
