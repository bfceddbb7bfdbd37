"""Read batch descriptions from JSON files."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import Any, cast

from flatingest.domain.bulk_import import BatchNotFoundError, InvalidBatchError

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BatchDescription:
    """Ordered raw operations of one batch; entries are decoded one by one at run time."""

    source: Path
    operations: tuple[object, ...]

    def __len__(self) -> int:
        return len(self.operations)


def load_batch(path: str | Path) -> BatchDescription:
    """Load ``path`` or raise a :class:`BatchSourceError` before anything runs."""

    source = Path(path)
    if not source.is_file():
        raise BatchNotFoundError(f"JSON file not found: {source}")

    try:
        text = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InvalidBatchError(f"Cannot read JSON file {source}: {exc}") from exc

    return parse_batch(text, source=source)


def parse_batch(text: str, *, source: Path) -> BatchDescription:
    try:
        document: object = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidBatchError(f"Invalid JSON in file: {source} ({exc})") from exc

    if not document or not isinstance(document, Mapping):
        raise InvalidBatchError(f"Invalid JSON in file: {source}")

    mapping = cast(Mapping[str, Any], document)
    operations = mapping.get("operations")
    if not isinstance(operations, list):
        raise InvalidBatchError("JSON must contain 'operations' array.")

    entries = tuple(cast(list[object], operations))
    log.info("Loaded %s operations from %s", len(entries), source)
    return BatchDescription(source=source, operations=entries)
