"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from sqlalchemy import select

from flatingest.adapters.sqlalchemy.mappings import TABLE_BY_CLASS, node_revision_table
from flatingest.domain.model import (
    FileRecord,
    MediaRecord,
    NotPersistedError,
    ObjectRevision,
    Record,
    RepositoryObject,
    Term,
)

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.orm import Session

    from flatingest.domain.model import StoredRef


class SqlAlchemyRecordRepository[TRecord: Record]:
    """Shared helpers for repositories that look records up by uuid.

    ``add`` flushes so the store assigns the numeric id before it is returned.
    """

    def __init__(self, session: Session, record_cls: type[TRecord]) -> None:
        self.session = session
        self._record_cls = record_cls
        self._table = TABLE_BY_CLASS[record_cls]

    def add(self, record: TRecord) -> StoredRef:
        self.session.add(record)
        self.session.flush()
        return record.stored_ref()

    def get_by_uuid(self, uuid: uuid.UUID) -> TRecord | None:
        stmt = select(self._record_cls).where(self._table.c.uuid == uuid).limit(1)
        return self.session.execute(stmt).scalars().first()


class SqlAlchemyObjectRepository(SqlAlchemyRecordRepository[RepositoryObject]):
    """Nodes keep one revision row per save; ``revision_id`` points at the newest."""

    def __init__(self, session: Session) -> None:
        super().__init__(session, RepositoryObject)

    def add(self, record: RepositoryObject) -> StoredRef:
        self.session.add(record)
        self.session.flush()
        return self._write_revision(record)

    def save_revision(self, record: RepositoryObject) -> StoredRef:
        if record.id is None:
            raise NotPersistedError(f"node {record.uuid} was never created")
        self.session.flush()
        return self._write_revision(record)

    def list_revisions(self, record: RepositoryObject) -> list[ObjectRevision]:
        stmt = (
            select(ObjectRevision)
            .where(node_revision_table.c.object_id == record.id)
            .order_by(node_revision_table.c.id)
        )
        return list(self.session.execute(stmt).scalars())

    def _write_revision(self, record: RepositoryObject) -> StoredRef:
        revision = record.snapshot()
        self.session.add(revision)
        self.session.flush()
        record.revision_id = revision.id
        self.session.flush()
        return record.stored_ref()


class SqlAlchemyFileRepository(SqlAlchemyRecordRepository[FileRecord]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, FileRecord)


class SqlAlchemyMediaRepository(SqlAlchemyRecordRepository[MediaRecord]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, MediaRecord)


class SqlAlchemyTermRepository(SqlAlchemyRecordRepository[Term]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Term)


if TYPE_CHECKING:
    from flatingest.domain.ports.persistence import (
        FileRepository,
        MediaRepository,
        ObjectRepository,
        TermRepository,
    )

    _session_stub = cast("Session", object())
    _object_repo: ObjectRepository = SqlAlchemyObjectRepository(_session_stub)
    _file_repo: FileRepository = SqlAlchemyFileRepository(_session_stub)
    _media_repo: MediaRepository = SqlAlchemyMediaRepository(_session_stub)
    _term_repo: TermRepository = SqlAlchemyTermRepository(_session_stub)
