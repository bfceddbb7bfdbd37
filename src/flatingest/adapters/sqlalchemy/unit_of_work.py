"""SQLAlchemy-backed unit of work for bulk imports."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from flatingest.adapters.sqlalchemy.mappings import start_mappers
from flatingest.adapters.sqlalchemy.migrations import upgrade_head
from flatingest.adapters.sqlalchemy.repositories import (
    SqlAlchemyFileRepository,
    SqlAlchemyMediaRepository,
    SqlAlchemyObjectRepository,
    SqlAlchemyTermRepository,
)
from flatingest.config import get_database_config
from flatingest.domain.ports.unit_of_work import BulkImportRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the store is used before :func:`startup` or configured twice."""


@dataclass(slots=True)
class _StoreState:
    engine: Engine | None = None
    sessions: sessionmaker[Session] | None = None

    def bind(self, engine: Engine | None) -> None:
        self.engine = engine
        self.sessions = (
            sessionmaker(bind=engine, expire_on_commit=False) if engine is not None else None
        )

    def session_factory(self) -> sessionmaker[Session]:
        if self.sessions is None:
            raise StartupError(
                "Store not started. Call flatingest.adapters.sqlalchemy.startup() "
                "before opening a bulk import unit of work."
            )
        return self.sessions


_STATE = _StoreState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Bind the store to ``engine`` (or a new one) and migrate its schema to head."""

    if _STATE.engine is not None and not force:
        raise StartupError("Store already started. Pass force=True to rebind it.")

    resolved_engine = engine or create_engine(
        database_uri or get_database_config().uri, future=True
    )
    start_mappers()
    upgrade_head(engine=resolved_engine)
    _STATE.bind(resolved_engine)
    log.info("Store ready at %s", resolved_engine.url.render_as_string(hide_password=True))


def configured_engine() -> Engine | None:
    return _STATE.engine


def is_started() -> bool:
    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the bound engine and forget it."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.bind(None)


class SqlAlchemyBulkImportUnitOfWork:
    """One session per batch; operations commit or roll back individually.

    The session outlives each commit (``expire_on_commit=False``) so ids and
    uuids read from records after a commit never trigger a reload.
    """

    def __init__(self) -> None:
        self._session_factory = _STATE.session_factory()
        self._session: Session | None = None
        self._repositories: BulkImportRepositories | None = None

    def __enter__(self) -> SqlAlchemyBulkImportUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work already entered")
        session = self._session_factory()
        self._session = session
        self._repositories = BulkImportRepositories(
            objects=SqlAlchemyObjectRepository(session),
            files=SqlAlchemyFileRepository(session),
            media=SqlAlchemyMediaRepository(session),
            terms=SqlAlchemyTermRepository(session),
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        if exc_type is not None:
            session.rollback()
        session.close()
        self._session = None
        self._repositories = None
        return False

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work is not open")
        return self._session

    @property
    def repositories(self) -> BulkImportRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work is not open")
        return self._repositories

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


if TYPE_CHECKING:
    from flatingest.domain.ports.unit_of_work import BulkImportUnitOfWork

    _uow_check: BulkImportUnitOfWork = SqlAlchemyBulkImportUnitOfWork()
