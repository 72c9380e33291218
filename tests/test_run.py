"""Tests for the command line entry point helpers."""
from pathlib import Path

import pytest

from easyapply.core.config import Settings
from run import apply_overrides, build_parser, load_jobs


class TestLoadJobs:
    def test_reads_job_list(self, tmp_path: Path) -> None:
        path = tmp_path / "jobs.yaml"
        path.write_text(
            "- title: Data Engineer\n"
            "  company: Acme\n"
            "  link: https://www.linkedin.com/jobs/view/1\n"
            "- link: https://www.linkedin.com/jobs/view/2\n",
            encoding="utf-8",
        )

        jobs = load_jobs(path)

        assert [j.link for j in jobs] == [
            "https://www.linkedin.com/jobs/view/1",
            "https://www.linkedin.com/jobs/view/2",
        ]
        assert jobs[0].company == "Acme"
        assert jobs[1].title == ""

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "jobs.yaml"
        path.write_text("", encoding="utf-8")

        assert load_jobs(path) == []


class TestParser:
    def test_url_or_jobs_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_overrides_applied(self) -> None:
        args = build_parser().parse_args([
            "https://www.linkedin.com/jobs/view/1",
            "--dry-run",
            "--max-pages", "4",
            "--languages", "en, de",
            "--resume", "cv.pdf",
            "--constant-resume",
        ])
        settings = Settings()

        apply_overrides(settings, args)

        assert settings.easy_apply.dry_run is True
        assert settings.easy_apply.max_pages == 4
        assert settings.easy_apply.job_languages == ["en", "de"]
        assert settings.easy_apply.resume_path == "cv.pdf"
        assert settings.easy_apply.use_constant_resume is True

    def test_no_overrides_keeps_settings(self) -> None:
        args = build_parser().parse_args(["--jobs", "jobs.yaml"])
        settings = Settings()

        apply_overrides(settings, args)

        assert settings.easy_apply.dry_run is False
        assert settings.easy_apply.max_pages == 15
