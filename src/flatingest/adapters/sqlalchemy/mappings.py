"""SQLAlchemy mapping metadata for the repository records."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from enum import StrEnum
from functools import cache
from typing import Final

from sqlalchemy import (
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Integer,
    String,
    Table,
    TypeDecorator,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers

from flatingest.domain.model import (
    FileRecord,
    FileStatus,
    MediaFileField,
    MediaRecord,
    ObjectRevision,
    Record,
    RepositoryObject,
    Term,
)

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


def _enum_values(enum_cls: type[StrEnum]) -> list[str]:
    return [member.value for member in enum_cls]


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Tables ----------------------------------------------------------------------

taxonomy_term_table = Table(
    "taxonomy_term",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("uuid", UUIDColumnType, nullable=False, unique=True, default=uuid.uuid4),
    Column("vocabulary", String, nullable=False),
    Column("name", String, nullable=False),
)

node_table = Table(
    "node",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("uuid", UUIDColumnType, nullable=False, unique=True, default=uuid.uuid4),
    Column("bundle", String, nullable=False),
    Column("title", String, nullable=False),
    Column("pid", String, nullable=False),
    Column("model_id", Integer, ForeignKey("taxonomy_term.id"), nullable=False),
    Column("member_of_id", Integer, ForeignKey("node.id"), nullable=True),
    Column("revision_id", Integer, nullable=True),
)

node_revision_table = Table(
    "node_revision",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("object_id", Integer, ForeignKey("node.id"), nullable=False, index=True),
    Column("title", String, nullable=False),
    Column("pid", String, nullable=False),
    Column("model_id", Integer, nullable=False),
    Column("member_of_id", Integer, nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
)

file_table = Table(
    "file",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("uuid", UUIDColumnType, nullable=False, unique=True, default=uuid.uuid4),
    Column("filename", String, nullable=False),
    Column("uri", String, nullable=False),
    Column("filemime", String, nullable=False),
    Column(
        "status",
        Enum(FileStatus, native_enum=False, values_callable=_enum_values, length=16),
        nullable=False,
    ),
)

media_table = Table(
    "media",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("uuid", UUIDColumnType, nullable=False, unique=True, default=uuid.uuid4),
    Column("bundle", String, nullable=False),
    Column("name", String, nullable=False),
    Column("media_use_id", Integer, ForeignKey("taxonomy_term.id"), nullable=False),
    Column("media_of_id", Integer, ForeignKey("node.id"), nullable=False),
    Column(
        "file_field",
        Enum(MediaFileField, native_enum=False, values_callable=_enum_values, length=32),
        nullable=False,
    ),
    Column("file_id", Integer, ForeignKey("file.id"), nullable=False),
)

TABLE_BY_CLASS: Final[dict[type[Record], Table]] = {
    RepositoryObject: node_table,
    FileRecord: file_table,
    MediaRecord: media_table,
    Term: taxonomy_term_table,
}


@cache
def start_mappers() -> orm.registry:
    """Map the domain records onto their tables (idempotent)."""

    mapper_registry.map_imperatively(Term, taxonomy_term_table)
    mapper_registry.map_imperatively(RepositoryObject, node_table)
    mapper_registry.map_imperatively(ObjectRevision, node_revision_table)
    mapper_registry.map_imperatively(FileRecord, file_table)
    mapper_registry.map_imperatively(MediaRecord, media_table)

    configure_mappers()
    return mapper_registry

