"""SQLAlchemy adapter package for flatingest."""

from __future__ import annotations

from .mappings import TABLE_BY_CLASS, mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyFileRepository,
    SqlAlchemyMediaRepository,
    SqlAlchemyObjectRepository,
    SqlAlchemyRecordRepository,
    SqlAlchemyTermRepository,
)
from .unit_of_work import (
    SqlAlchemyBulkImportUnitOfWork,
    StartupError,
    shutdown,
    startup,
)

__all__ = [
    "TABLE_BY_CLASS",
    "SqlAlchemyBulkImportUnitOfWork",
    "SqlAlchemyFileRepository",
    "SqlAlchemyMediaRepository",
    "SqlAlchemyObjectRepository",
    "SqlAlchemyRecordRepository",
    "SqlAlchemyTermRepository",
    "StartupError",
    "mapper_registry",
    "shutdown",
    "startup",
    "start_mappers",
]
