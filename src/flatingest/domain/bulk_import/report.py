"""Structured result of a batch run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, cast
from uuid import UUID

from flatingest.domain.model import OperationKind

if TYPE_CHECKING:
    from collections.abc import Mapping

UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class ProcessedEntry:
    temp_id: str
    uuid: UUID
    revision_id: int | None = None

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {"temp_id": self.temp_id, "uuid": str(self.uuid)}
        if self.revision_id is not None:
            payload["vid"] = self.revision_id
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> ProcessedEntry:
        vid = payload.get("vid")
        return cls(
            temp_id=str(payload["temp_id"]),
            uuid=UUID(str(payload["uuid"])),
            revision_id=int(vid) if vid is not None else None,
        )


@dataclass(frozen=True, slots=True)
class ErrorEntry:
    """Failed operation: its raw ``op`` value, its temp_id (or ``unknown``) and why."""

    op: str
    temp_id: str
    message: str

    def to_dict(self) -> dict[str, object]:
        return {"op": self.op, "temp_id": self.temp_id, "message": self.message}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> ErrorEntry:
        return cls(
            op=str(payload["op"]),
            temp_id=str(payload["temp_id"]),
            message=str(payload["message"]),
        )


@dataclass(slots=True)
class KindStats:
    count: int = 0
    total_time: float = 0.0
    avg_time: float = 0.0

    def add(self, elapsed: float) -> None:
        self.count += 1
        self.total_time += elapsed

    def finalize(self) -> None:
        self.avg_time = self.total_time / self.count if self.count > 0 else 0.0

    def to_dict(self) -> dict[str, object]:
        return {"count": self.count, "total_time": self.total_time, "avg_time": self.avg_time}


def _empty_kind_stats() -> dict[OperationKind, KindStats]:
    return {kind: KindStats() for kind in OperationKind}


@dataclass(slots=True)
class BatchStats:
    """Fixed-shape statistics: one entry per operation kind plus run totals."""

    by_kind: dict[OperationKind, KindStats] = field(default_factory=_empty_kind_stats)
    total_operations: int = 0
    total_time: float = 0.0

    def for_kind(self, kind: OperationKind) -> KindStats:
        return self.by_kind[kind]

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            str(kind): self.by_kind[kind].to_dict() for kind in OperationKind
        }
        payload["total_operations"] = self.total_operations
        payload["total_time"] = self.total_time
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> BatchStats:
        by_kind = _empty_kind_stats()
        for kind in OperationKind:
            raw = cast("Mapping[str, Any] | None", payload.get(str(kind)))
            if raw is None:
                continue
            by_kind[kind] = KindStats(
                count=int(raw["count"]),
                total_time=float(raw["total_time"]),
                avg_time=float(raw["avg_time"]),
            )
        return cls(
            by_kind=by_kind,
            total_operations=int(payload["total_operations"]),
            total_time=float(payload["total_time"]),
        )


@dataclass(slots=True)
class BatchReport:
    """Accumulated by the batch runner, then finalized once at the end of the run."""

    processed: list[ProcessedEntry] = field(default_factory=list[ProcessedEntry])
    errors: list[ErrorEntry] = field(default_factory=list[ErrorEntry])
    stats: BatchStats = field(default_factory=BatchStats)
    finalized: bool = field(default=False, compare=False)

    def add_processed(self, entry: ProcessedEntry) -> None:
        self._ensure_open()
        self.processed.append(entry)

    def add_error(self, entry: ErrorEntry) -> None:
        self._ensure_open()
        self.errors.append(entry)

    def record_attempt(self, kind: OperationKind | None, elapsed: float) -> None:
        self._ensure_open()
        self.stats.total_operations += 1
        if kind is not None:
            self.stats.for_kind(kind).add(elapsed)

    def finalize(self, total_time: float) -> None:
        self._ensure_open()
        for kind_stats in self.stats.by_kind.values():
            kind_stats.finalize()
        self.stats.total_time = total_time
        self.finalized = True

    def _ensure_open(self) -> None:
        if self.finalized:
            raise RuntimeError("report already finalized")

    def to_dict(self) -> dict[str, object]:
        return {
            "processed": [entry.to_dict() for entry in self.processed],
            "errors": [entry.to_dict() for entry in self.errors],
            "stats": self.stats.to_dict(),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> BatchReport:
        return cls(
            processed=[ProcessedEntry.from_dict(item) for item in payload["processed"]],
            errors=[ErrorEntry.from_dict(item) for item in payload["errors"]],
            stats=BatchStats.from_dict(payload["stats"]),
            finalized=True,
        )
