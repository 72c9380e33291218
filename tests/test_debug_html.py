"""Tests for debug HTML snapshots."""
import os
import time
from datetime import datetime
from pathlib import Path
from unittest.mock import Mock

from easyapply.agent.debug_html import DebugHtmlRecorder, safe_title, snapshot_filename


class TestFilenames:
    def test_safe_title(self) -> None:
        assert safe_title("Senior Dev / Ops\\Lead") == "Senior_Dev_OpsLead"
        assert safe_title('Dev: "Ops"? <C/C++> | Lead*') == "Dev_Ops_CC_Lead"
        assert len(safe_title("a" * 80)) == 50

    def test_snapshot_filename_with_title(self) -> None:
        now = datetime(2024, 3, 15, 14, 30, 5)

        assert snapshot_filename("step_1_start", "Data Engineer", now) == "step_1_start_Data_Engineer_2024-03-15T14-30-05.html"

    def test_snapshot_filename_without_title(self) -> None:
        now = datetime(2024, 3, 15, 14, 30, 5)

        assert snapshot_filename("apply_error", now=now) == "apply_error_2024-03-15T14-30-05.html"


class TestDebugHtmlRecorder:
    def test_save_writes_header_and_content(self, tmp_path: Path, mock_page: Mock) -> None:
        recorder = DebugHtmlRecorder(tmp_path / "debug")

        path = recorder.save(mock_page, "modal_opened", "Data Engineer")

        assert path is not None and path.exists()
        text = path.read_text(encoding="utf-8")
        assert text.startswith("<!-- Debug HTML Snapshot -->")
        assert "<!-- Context: modal_opened -->" in text
        assert "<!-- Job Title: Data Engineer -->" in text
        assert f"<!-- URL: {mock_page.url} -->" in text
        assert text.endswith("<html><body>job</body></html>")

    def test_missing_title_marked_na(self, tmp_path: Path, mock_page: Mock) -> None:
        path = DebugHtmlRecorder(tmp_path).save(mock_page, "job_page_loaded")

        assert "<!-- Job Title: N/A -->" in path.read_text(encoding="utf-8")

    def test_disabled_writes_nothing(self, tmp_path: Path, mock_page: Mock) -> None:
        recorder = DebugHtmlRecorder(tmp_path / "debug", enabled=False)

        assert recorder.save(mock_page, "step_1_start") is None
        assert not (tmp_path / "debug").exists()

    def test_page_error_returns_none(self, tmp_path: Path, mock_page: Mock) -> None:
        mock_page.content.side_effect = RuntimeError("Target closed")

        assert DebugHtmlRecorder(tmp_path).save(mock_page, "apply_error") is None

    def test_cleanup_removes_only_old_snapshots(self, tmp_path: Path) -> None:
        old = tmp_path / "old.html"
        fresh = tmp_path / "fresh.html"
        other = tmp_path / "notes.txt"
        for path in (old, fresh, other):
            path.write_text("x", encoding="utf-8")
        ten_days_ago = time.time() - 10 * 86400
        os.utime(old, (ten_days_ago, ten_days_ago))
        os.utime(other, (ten_days_ago, ten_days_ago))

        removed = DebugHtmlRecorder(tmp_path).cleanup_old_snapshots(max_age_days=7)

        assert removed == 1
        assert not old.exists()
        assert fresh.exists()
        assert other.exists()

    def test_cleanup_missing_directory(self, tmp_path: Path) -> None:
        assert DebugHtmlRecorder(tmp_path / "absent").cleanup_old_snapshots() == 0
