from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine

from flatingest.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyBulkImportUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)
from flatingest.domain.model import FileRecord

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def _file(name: str) -> FileRecord:
    return FileRecord(filename=name, uri=f"public://{name}", filemime="text/plain")


def test_unit_of_work_requires_startup() -> None:
    assert not is_started()

    with pytest.raises(StartupError):
        SqlAlchemyBulkImportUnitOfWork()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:", future=True)
    engine_b = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine_a, force=True)

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert configured_engine() is engine_b
    assert is_started()


def test_repositories_require_an_open_unit_of_work(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    uow = SqlAlchemyBulkImportUnitOfWork()

    with pytest.raises(StartupError):
        _ = uow.repositories


def test_committed_records_survive_the_unit_of_work(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    record = _file("kept.txt")

    with SqlAlchemyBulkImportUnitOfWork() as uow:
        uow.repositories.files.add(record)
        uow.commit()

    with SqlAlchemyBulkImportUnitOfWork() as uow:
        loaded = uow.repositories.files.get_by_uuid(record.uuid)
        assert loaded is not None
        assert loaded.filename == "kept.txt"


def test_rollback_discards_only_uncommitted_work(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    kept = _file("kept.txt")
    dropped = _file("dropped.txt")

    with SqlAlchemyBulkImportUnitOfWork() as uow:
        uow.repositories.files.add(kept)
        uow.commit()
        uow.repositories.files.add(dropped)
        uow.rollback()

        assert uow.repositories.files.get_by_uuid(kept.uuid) is not None
        assert uow.repositories.files.get_by_uuid(dropped.uuid) is None


def test_exception_inside_block_rolls_back(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    record = _file("lost.txt")

    with pytest.raises(RuntimeError), SqlAlchemyBulkImportUnitOfWork() as uow:
        uow.repositories.files.add(record)
        raise RuntimeError("boom")

    with SqlAlchemyBulkImportUnitOfWork() as uow:
        assert uow.repositories.files.get_by_uuid(record.uuid) is None
