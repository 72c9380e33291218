"""CLI entry point for the LinkedIn Easy Apply engine."""
import argparse
import logging
import sys
from pathlib import Path

import yaml

from easyapply.agent import DebugHtmlRecorder, EasyApplier, Job, LoggingStatusReporter, ResumeFieldMatcher
from easyapply.answerer import ClaudeAnswerer
from easyapply.browser import BrowserConnection
from easyapply.core import Settings, get_logger, setup_logging
from easyapply.feedback import AnswerStore, FailureLogger
from easyapply.resume import ResumeTailoringPipeline


def load_jobs(path: Path) -> list[Job]:
    """Jobs from a YAML list of ``{title, company, link, location}`` mappings."""
    with open(path, encoding="utf-8") as f:
        entries = yaml.safe_load(f) or []
    return [
        Job(
            title=entry.get("title", ""),
            company=entry.get("company", ""),
            link=entry["link"],
            location=entry.get("location", ""),
        )
        for entry in entries
    ]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Apply to LinkedIn jobs through Easy Apply")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("url", nargs="?", help="URL of a LinkedIn job posting")
    target.add_argument("--jobs", "-j", type=Path, help="YAML file with a list of jobs")
    parser.add_argument("--title", default="", help="Job title for a single URL")
    parser.add_argument("--company", default="", help="Company name for a single URL")
    parser.add_argument(
        "--config", "-c", type=Path, default=Path("config/settings.yaml"), help="Settings YAML"
    )
    parser.add_argument("--resume", "-r", help="Path to resume PDF (overrides settings)")
    parser.add_argument("--dry-run", action="store_true", help="Fill forms but never submit")
    parser.add_argument("--max-pages", type=int, help="Maximum dialog pages per job")
    parser.add_argument(
        "--languages", help="Comma-separated ISO 639-1 codes of accepted job languages"
    )
    parser.add_argument(
        "--constant-resume", action="store_true", help="Always upload the base resume"
    )
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> None:
    easy_apply = settings.easy_apply
    if args.resume:
        easy_apply.resume_path = args.resume
    if args.dry_run:
        easy_apply.dry_run = True
    if args.max_pages:
        easy_apply.max_pages = args.max_pages
    if args.languages:
        easy_apply.job_languages = [code.strip() for code in args.languages.split(",") if code.strip()]
    if args.constant_resume:
        easy_apply.use_constant_resume = True


def main() -> int:
    """Run the Easy Apply engine over one job or a job list."""
    args = build_parser().parse_args()
    settings = Settings.from_yaml(args.config)
    apply_overrides(settings, args)

    setup_logging("DEBUG" if args.debug else settings.log_level)
    logger = logging.getLogger(__name__)
    logger.info("=== LinkedIn Easy Apply ===")

    jobs = load_jobs(args.jobs) if args.jobs else [Job(title=args.title, company=args.company, link=args.url)]
    logger.info(f"{len(jobs)} job(s) queued")

    resume_path = settings.easy_apply.resume_path
    if resume_path and not Path(resume_path).exists():
        logger.warning(f"Resume not found: {resume_path}")
        settings.easy_apply.resume_path = None

    base_yaml = Path(settings.tailoring.base_resume_yaml) if settings.tailoring.base_resume_yaml else None
    resume_text = base_yaml.read_text(encoding="utf-8") if base_yaml and base_yaml.exists() else ""

    answerer = ClaudeAnswerer(
        resume_text=resume_text,
        model=settings.claude.model,
        max_tokens=settings.claude.max_tokens,
        max_retries=settings.claude.max_retries,
    )

    tailoring = None
    if base_yaml and base_yaml.exists() and not settings.easy_apply.use_constant_resume:
        tailoring = ResumeTailoringPipeline(
            answerer,
            base_yaml,
            output_dir=Path(settings.tailoring.output_dir),
            keep_latest=settings.tailoring.keep_latest,
            min_ratio=settings.tailoring.min_ratio,
        )

    recorder = DebugHtmlRecorder(Path(settings.paths.debug_html_dir), enabled=settings.paths.save_debug_html)
    recorder.cleanup_old_snapshots(settings.paths.debug_html_max_age_days)
    answers = AnswerStore(Path(settings.paths.answers_path))
    failures = FailureLogger(Path(settings.paths.failures_path))
    reporter = LoggingStatusReporter()

    connection = BrowserConnection(
        cdp_port=settings.browser.cdp_port,
        max_retries=settings.browser.connect_retries,
        retry_delay=settings.browser.retry_delay,
        timeout=settings.browser.timeout,
    )
    if not connection.connect():
        logger.error("Failed to connect to Chrome. Start it with --remote-debugging-port first.")
        return 1

    applier = EasyApplier(
        connection.get_page(),
        answerer,
        saved_answers=answers.load(),
        record_callback=answers.record,
        reporter=reporter,
        config=settings.easy_apply,
        tailoring=tailoring,
        failure_logger=failures,
        debug_recorder=recorder,
        join_timeout=settings.tailoring.join_timeout,
        log=get_logger("easyapply"),
        resume_matcher=ResumeFieldMatcher.from_resume_yaml(resume_text),
    )

    try:
        for job in jobs:
            result = applier.apply(job)
            logger.info("=" * 50)
            logger.info(
                f"{job.title or job.link}: success={result.success} "
                f"pages={result.pages_completed} fields={result.total_fields} "
                f"failed_fields={result.failed_fields}"
            )
            if result.error:
                logger.info(f"Reason: {result.error}")
            skipped = result.already_applied or result.language_skipped
            if not result.success and not skipped and not settings.easy_apply.skip_on_error:
                logger.warning("Stopping after failure (skip_on_error is off)")
                break
    finally:
        applier.close()
        connection.disconnect()

    stats = reporter.stats
    logger.info(f"Applied: {stats.jobs_applied}, failed: {stats.jobs_failed}")
    for failure_type, count in failures.counts_by_type().items():
        logger.info(f"  {failure_type}: {count}")
    return 0 if stats.jobs_failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
