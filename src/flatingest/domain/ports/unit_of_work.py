"""Transaction boundary of a bulk import run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from flatingest.domain.ports.persistence import (
        FileRepository,
        MediaRepository,
        ObjectRepository,
        TermRepository,
    )


@dataclass(slots=True)
class BulkImportRepositories:
    """Repositories touched by a bulk import run."""

    objects: ObjectRepository
    files: FileRepository
    media: MediaRepository
    terms: TermRepository


@runtime_checkable
class BulkImportUnitOfWork(Protocol):
    """One store session shared by every operation of a batch.

    ``commit`` makes the work of the current operation durable; ``rollback``
    discards whatever the current operation wrote since the last commit.
    """

    @property
    def repositories(self) -> BulkImportRepositories: ...

    def __enter__(self) -> BulkImportUnitOfWork: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
