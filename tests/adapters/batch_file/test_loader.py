from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from flatingest.adapters.batch_file import load_batch, parse_batch
from flatingest.domain.bulk_import import BatchNotFoundError, BatchSourceError, InvalidBatchError

if TYPE_CHECKING:
    from pathlib import Path


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "batch.json"
    path.write_text(content, encoding="utf-8")
    return path


def test_load_batch_keeps_operation_order(tmp_path: Path) -> None:
    operations = [
        {"op": "create_file", "temp_id": "F"},
        {"op": "create_node", "temp_id": "A"},
        "junk",
    ]
    path = _write(tmp_path, json.dumps({"operations": operations, "comment": "ignored"}))

    batch = load_batch(path)

    assert batch.source == path
    assert len(batch) == 3
    assert batch.operations == tuple(operations)


def test_load_batch_accepts_empty_operations(tmp_path: Path) -> None:
    batch = load_batch(_write(tmp_path, '{"operations": []}'))

    assert len(batch) == 0


def test_load_batch_missing_file(tmp_path: Path) -> None:
    path = tmp_path / "absent.json"

    with pytest.raises(BatchNotFoundError) as excinfo:
        load_batch(path)

    assert str(excinfo.value) == f"JSON file not found: {path}"
    assert isinstance(excinfo.value, BatchSourceError)


def test_load_batch_directory_is_not_a_file(tmp_path: Path) -> None:
    with pytest.raises(BatchNotFoundError):
        load_batch(tmp_path)


@pytest.mark.parametrize("content", ["{not json", "{}", "[]", "null", '"operations"'])
def test_parse_batch_rejects_invalid_documents(tmp_path: Path, content: str) -> None:
    with pytest.raises(InvalidBatchError) as excinfo:
        parse_batch(content, source=tmp_path / "batch.json")

    assert str(excinfo.value).startswith("Invalid JSON in file:")


@pytest.mark.parametrize(
    "content",
    ['{"ops": []}', '{"operations": {"op": "create_node"}}', '{"operations": null}'],
)
def test_parse_batch_requires_operations_array(tmp_path: Path, content: str) -> None:
    with pytest.raises(InvalidBatchError) as excinfo:
        parse_batch(content, source=tmp_path / "batch.json")

    assert str(excinfo.value) == "JSON must contain 'operations' array."
