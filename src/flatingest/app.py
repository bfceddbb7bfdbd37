"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from flatingest.adapters.batch_file import decode_operation, load_batch
from flatingest.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyBulkImportUnitOfWork,
    is_started,
    startup,
)
from flatingest.config import get_ingest_config
from flatingest.domain.bulk_import import BatchRunner
from flatingest.domain.model import Term
from flatingest.domain.ports.unit_of_work import BulkImportUnitOfWork

if TYPE_CHECKING:
    from pathlib import Path
    from uuid import UUID

    from flatingest.config import IngestConfig
    from flatingest.domain.bulk_import import BatchReport

UnitOfWorkFactory = Callable[[], BulkImportUnitOfWork]
Clock = Callable[[], float]


log = getLogger(__name__)


def _default_unit_of_work_factory() -> UnitOfWorkFactory:
    if not is_started():
        startup()
    return SqlAlchemyBulkImportUnitOfWork


def bulk_import(
    path: str | Path,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    config: IngestConfig | None = None,
    clock: Clock | None = None,
) -> BatchReport:
    """Run the batch described in ``path`` and return its report.

    The batch file is loaded before the store is touched, so a missing or
    malformed file fails the whole call without running any operation.
    """

    batch = load_batch(path)
    effective_config = config or get_ingest_config()
    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    log.info(
        "Starting bulk import: source=%s, operations=%s, node_bundle=%s",
        batch.source,
        len(batch),
        effective_config.node_bundle,
    )

    with effective_uow() as uow:
        runner = BatchRunner(
            uow,
            decode=decode_operation,
            node_bundle=effective_config.node_bundle,
            clock=clock,
        )
        return runner.run(batch.operations)


def create_term(
    *,
    vocabulary: str,
    name: str,
    uuid: UUID | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Term:
    """Create a classification term that batches can reference by uuid."""

    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    term = Term(vocabulary=vocabulary, name=name)
    if uuid is not None:
        term.uuid = uuid

    with effective_uow() as uow:
        uow.repositories.terms.add(term)
        uow.commit()

    log.info("Created term %s (%s/%s)", term.uuid, vocabulary, name)
    return term
