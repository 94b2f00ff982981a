"""Tests for the command-line entry point."""

from __future__ import annotations

import io
import json
import pathlib
from unittest import mock

import pytest

from privacy_assistant import main as cli
from privacy_assistant.models import signals


@pytest.fixture()
def record_file(tmp_path: pathlib.Path, medium_risk_input: signals.NormalizedAnalysisInput) -> pathlib.Path:
    path = tmp_path / "record.json"
    path.write_text(medium_risk_input.model_dump_json(by_alias=True), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    with mock.patch.dict("os.environ", {}, clear=True):
        yield


class TestMain:
    """Exit codes and printed report."""

    def test_prints_report(self, record_file: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli.main([str(record_file)]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["score"]["score"] == 54.37
        assert payload["risks"]["overallRisk"] == "medium"
        assert payload["confidence"]["level"] == "high"

    def test_reads_stdin(
        self,
        record_file: pathlib.Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(record_file.read_text(encoding="utf-8")))
        assert cli.main([]) == 0
        assert json.loads(capsys.readouterr().out)["requestId"] == "req-test"

    def test_missing_file(self, tmp_path: pathlib.Path) -> None:
        assert cli.main([str(tmp_path / "absent.json")]) == 1

    def test_invalid_json(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        assert cli.main([str(path)]) == 1

    def test_undecodable_bytes(self, tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "latin.json"
        path.write_bytes(b'{"requestId": "\xff\xfe"}')
        assert cli.main([str(path)]) == 1
        assert "Could not load normalized analysis" in capsys.readouterr().err

    def test_invalid_record(self, tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "ftp.json"
        path.write_text(json.dumps({"page": {"url": "ftp://example.com/"}}), encoding="utf-8")
        assert cli.main([str(path)]) == 1
        assert "Could not load normalized analysis" in capsys.readouterr().err

    def test_writes_report_when_enabled(self, record_file: pathlib.Path, tmp_path: pathlib.Path) -> None:
        with mock.patch.dict("os.environ", {"WRITE_TO_FILE": "1", "REPORT_JSON_INDENT": "0"}):
            assert cli.main([str(record_file)]) == 0
        reports = list((tmp_path / ".reports").glob("*.json"))
        assert len(reports) == 1
        assert json.loads(reports[0].read_text(encoding="utf-8"))["score"]["totalPenalty"] == 45.63
        assert list((tmp_path / ".logs").glob("*.log"))
