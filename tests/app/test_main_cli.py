from __future__ import annotations

import json
from pathlib import Path
from uuid import UUID, uuid4

import pytest

from flatingest.domain.bulk_import import BatchNotFoundError, BatchReport, ProcessedEntry
from flatingest.domain.model import Term
from flatingest.ui import cli as cli_module


def _report() -> BatchReport:
    report = BatchReport()
    report.add_processed(ProcessedEntry(temp_id="A", uuid=UUID(int=1)))
    report.record_attempt(None, 0.0)
    report.finalize(0.25)
    return report


def test_bulk_import_prints_report(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    captured: list[object] = []

    def fake_bulk_import(path: str) -> BatchReport:
        captured.append(path)
        return _report()

    monkeypatch.setattr(cli_module, "bulk_import", fake_bulk_import)

    cli_module.main(["bulk-import", "batch.json", "--indent", "2"])

    out = capsys.readouterr().out
    assert captured == ["batch.json"]
    assert json.loads(out) == _report().to_dict()
    assert out.startswith('{\n  "processed"')


def test_bulk_import_source_error_exits_with_one(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_bulk_import(path: str) -> BatchReport:
        raise BatchNotFoundError(f"JSON file not found: {Path(path)}")

    monkeypatch.setattr(cli_module, "bulk_import", fake_bulk_import)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["bulk-import", "missing.json"])

    assert excinfo.value.code == 1


def test_unexpected_failure_exits_with_one(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_bulk_import(path: str) -> BatchReport:
        raise RuntimeError(path)

    monkeypatch.setattr(cli_module, "bulk_import", fake_bulk_import)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["bulk-import", "batch.json"])

    assert excinfo.value.code == 1


def test_term_create_prints_uuid(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    wanted = uuid4()
    captured: dict[str, object] = {}

    def fake_create_term(**kwargs: object) -> Term:
        captured.update(kwargs)
        return Term(vocabulary="islandora_models", name="Collection", uuid=wanted)

    monkeypatch.setattr(cli_module, "create_term", fake_create_term)

    cli_module.main(
        [
            "term",
            "create",
            "--vocabulary",
            "islandora_models",
            "--name",
            "Collection",
            "--uuid",
            str(wanted),
        ]
    )

    assert captured == {"vocabulary": "islandora_models", "name": "Collection", "uuid": wanted}
    assert capsys.readouterr().out.strip() == str(wanted)


def test_term_create_invalid_uuid(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_create_term(**_: object) -> Term:
        raise AssertionError("must not be called")

    monkeypatch.setattr(cli_module, "create_term", fake_create_term)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["term", "create", "--vocabulary", "v", "--name", "n", "--uuid", "nope"])

    assert excinfo.value.code == 2


def test_missing_command_is_a_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main([])

    assert excinfo.value.code == 2
