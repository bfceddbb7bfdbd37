"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import (
    FileRepository,
    MediaRepository,
    ObjectRepository,
    Repository,
    TermRepository,
)
from .unit_of_work import BulkImportRepositories, BulkImportUnitOfWork

__all__ = [
    "BulkImportRepositories",
    "BulkImportUnitOfWork",
    "FileRepository",
    "MediaRepository",
    "ObjectRepository",
    "Repository",
    "TermRepository",
]
