"""Tests for privacy_assistant.utils.logger."""

from __future__ import annotations

import pathlib
from unittest import mock

import pytest

from privacy_assistant.utils import logger


@pytest.fixture(autouse=True)
def _clean_buffer():
    logger.clear_log_buffer()
    yield
    logger.end_log_file()
    logger.clear_log_buffer()


class TestLogger:
    """Console output, buffering and timers."""

    def test_lines_buffered_without_ansi(self, capsys: pytest.CaptureFixture[str]) -> None:
        log = logger.create_logger("Test")
        log.info("Hello", {"count": 3, "host": "example.com"})
        lines = logger.get_log_buffer()
        assert len(lines) == 1
        assert "\033[" not in lines[0]
        assert "[Test] Hello" in lines[0]
        assert "count=3" in lines[0]
        assert 'host="example.com"' in lines[0]
        assert "Hello" in capsys.readouterr().err

    def test_levels_use_distinct_symbols(self) -> None:
        log = logger.create_logger("Test")
        log.success("a")
        log.warn("b")
        log.error("c")
        symbols = [line.split()[1] for line in logger.get_log_buffer()]
        assert symbols == ["✓", "⚠", "✗"]

    def test_timer_returns_elapsed_ms(self) -> None:
        log = logger.create_logger("Test")
        log.start_timer("work")
        elapsed = log.end_timer("work")
        assert elapsed >= 0
        assert any("Completed: work" in line for line in logger.get_log_buffer())

    def test_unknown_timer_warns(self) -> None:
        log = logger.create_logger("Test")
        assert log.end_timer("never-started") == 0.0
        assert any('Timer "never-started" was not started' in line for line in logger.get_log_buffer())

    def test_clear_log_buffer(self) -> None:
        logger.create_logger("Test").info("x")
        logger.clear_log_buffer()
        assert logger.get_log_buffer() == []


class TestFileOutput:
    """File mirroring is gated on WRITE_TO_FILE."""

    def test_disabled_by_default(self, tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        with mock.patch.dict("os.environ", {}, clear=True):
            assert logger.start_log_file("example.com") is None
            assert logger.save_report_file("example.com", "{}") is None
        assert not (tmp_path / ".logs").exists()

    def test_log_and_report_files(self, tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        with mock.patch.dict("os.environ", {"WRITE_TO_FILE": "true"}, clear=True):
            log_path = logger.start_log_file("www.example.com")
            logger.create_logger("Test").info("mirrored line")
            logger.end_log_file()
            report_path = logger.save_report_file("www.example.com", '{"score": 1}')

        assert log_path is not None
        assert pathlib.Path(log_path).parent.name == ".logs"
        assert pathlib.Path(log_path).name.startswith("example.com_")
        content = pathlib.Path(log_path).read_text(encoding="utf-8")
        assert "Privacy Analysis - www.example.com" in content
        assert "mirrored line" in content
        assert "\033[" not in content

        assert report_path is not None
        assert pathlib.Path(report_path).read_text(encoding="utf-8") == '{"score": 1}'
