"""Sequential, continue-on-error interpretation of a batch."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from flatingest.domain.bulk_import.errors import OperationError
from flatingest.domain.bulk_import.executor import DEFAULT_NODE_BUNDLE, OperationExecutor
from flatingest.domain.bulk_import.reference_cache import ReferenceCache
from flatingest.domain.bulk_import.report import (
    UNKNOWN,
    BatchReport,
    ErrorEntry,
    ProcessedEntry,
)
from flatingest.domain.bulk_import.resolver import IdentifierResolver
from flatingest.domain.model import OperationKind

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from flatingest.domain.bulk_import.operations import Operation
    from flatingest.domain.ports import BulkImportUnitOfWork

log = logging.getLogger(__name__)

type OperationDecoder = Callable[[object], Operation]
type Clock = Callable[[], float]


@dataclass(slots=True)
class BatchContext:
    """State owned by exactly one run and discarded when it ends."""

    resolver: IdentifierResolver = field(default_factory=IdentifierResolver)
    reference_cache: ReferenceCache = field(default_factory=ReferenceCache)
    report: BatchReport = field(default_factory=BatchReport)


class BatchRunner:
    """Drive the ordered operations of one batch through the executor.

    Operations run strictly one after another because later operations may
    reference identifiers produced by earlier ones. A failing operation is
    rolled back and recorded; it never stops the loop.
    """

    def __init__(
        self,
        uow: BulkImportUnitOfWork,
        *,
        decode: OperationDecoder,
        clock: Clock | None = None,
        node_bundle: str = DEFAULT_NODE_BUNDLE,
    ) -> None:
        self._uow = uow
        self._decode = decode
        self._clock = clock or time.perf_counter
        self._node_bundle = node_bundle

    def run(self, operations: Iterable[object]) -> BatchReport:
        context = BatchContext()
        executor = OperationExecutor(
            self._uow,
            resolver=context.resolver,
            reference_cache=context.reference_cache,
            node_bundle=self._node_bundle,
        )

        batch_started = self._clock()
        for raw in operations:
            self._run_one(raw, executor, context.report)
        context.report.finalize(self._clock() - batch_started)

        stats = context.report.stats
        log.info(
            "Finished bulk import: operations=%s, processed=%s, errors=%s, time=%.3fs",
            stats.total_operations,
            len(context.report.processed),
            len(context.report.errors),
            stats.total_time,
        )
        return context.report

    def _run_one(self, raw: object, executor: OperationExecutor, report: BatchReport) -> None:
        op_value, temp_id = _describe(raw)
        kind = OperationKind.parse(op_value)

        started = self._clock()
        outcome: ProcessedEntry | str
        try:
            outcome = executor.execute(self._decode(raw))
        except OperationError as exc:
            self._uow.rollback()
            outcome = str(exc)
            log.warning("Operation %s (%s) failed: %s", op_value, temp_id, outcome)
        except Exception as exc:  # noqa: BLE001
            self._uow.rollback()
            outcome = str(exc) or type(exc).__name__
            log.exception("Unexpected failure in operation %s (%s)", op_value, temp_id)
        elapsed = self._clock() - started

        report.record_attempt(kind, elapsed)
        if isinstance(outcome, ProcessedEntry):
            report.add_processed(outcome)
        else:
            report.add_error(ErrorEntry(op=op_value, temp_id=temp_id, message=outcome))


def _describe(raw: object) -> tuple[str, str]:
    """Return the ``op`` value and temp_id of a raw operation for error reporting."""

    if not isinstance(raw, Mapping):
        return UNKNOWN, UNKNOWN
    op_value = raw.get("op")
    temp_id = raw.get("temp_id")
    return (
        op_value if isinstance(op_value, str) and op_value else UNKNOWN,
        temp_id if isinstance(temp_id, str) and temp_id else UNKNOWN,
    )
