"""LinkedIn Easy Apply orchestrator: one job from posting to submitted application."""
from pathlib import Path
from typing import Any, Iterable, Optional

from playwright.sync_api import Page

from ..answerer.base import Answerer
from ..core.config import EasyApplierConfig
from ..core.logging import ContextLogger, get_logger
from ..feedback.failure_logger import FailureLogger, new_failure
from ..resume.tailoring import PendingResume, ResumeTailoringPipeline
from .answer_cache import AnswerRecordCallback
from .debug_html import DebugHtmlRecorder
from .form_processor import FormPageProcessor
from .job_page import JobPage
from .language import detect_language, is_language_accepted
from .models import (
    JOB_CONTEXT_DESCRIPTION_CHARS,
    POST_SUBMIT_WAIT_MS,
    EasyApplyResult,
    Job,
    ModalOpenOutcome,
    ModalState,
    SavedAnswer,
)
from .navigation import NavigationController
from .resume_matcher import ResumeFieldMatcher
from .selectors import LinkedInSelectors
from .status import Activity, LoggingStatusReporter, StatusSink

PAGE_ADVANCE_WAIT_MS = 1000
POST_SUBMIT_CHECK_TIMEOUT_MS = 3000


class EasyApplier:
    """Applies to one job at a time on a single tab.

    ``apply`` never raises: every outcome, including unexpected errors, is
    reported through the returned EasyApplyResult.
    """

    def __init__(
        self,
        page: Page,
        answerer: Answerer,
        saved_answers: Iterable[SavedAnswer] = (),
        record_callback: Optional[AnswerRecordCallback] = None,
        reporter: Optional[StatusSink] = None,
        config: Optional[EasyApplierConfig] = None,
        tailoring: Optional[ResumeTailoringPipeline] = None,
        failure_logger: Optional[FailureLogger] = None,
        debug_recorder: Optional[DebugHtmlRecorder] = None,
        join_timeout: float = 180.0,
        log: Optional[ContextLogger] = None,
        navigation: Optional[NavigationController] = None,
        form_processor: Optional[FormPageProcessor] = None,
        resume_matcher: Optional[ResumeFieldMatcher] = None,
    ) -> None:
        self._page = page
        self._answerer = answerer
        self._config = config or EasyApplierConfig()
        self._reporter: StatusSink = reporter or LoggingStatusReporter()
        self._tailoring = tailoring
        self._failures = failure_logger
        self._recorder = debug_recorder
        self._base_log = log or get_logger(__name__)
        self._log = self._base_log

        self._nav = navigation or NavigationController(page, self._base_log)
        self._processor = form_processor or FormPageProcessor(
            page,
            answerer,
            saved_answers=saved_answers,
            record_callback=record_callback,
            resume_path=self._config.resume_path,
            cover_letter_path=self._config.cover_letter_path,
            join_timeout=join_timeout,
            log=self._base_log,
            resume_matcher=resume_matcher,
        )
        self._job_page = JobPage(page, self._nav, snapshot=self._snapshot, log=self._base_log)
        self._job_title = ""
        self._last_snapshot: Optional[Path] = None
        self._pending: Optional[PendingResume] = None

    @property
    def config(self) -> EasyApplierConfig:
        return self._config

    def update_config(self, **changes: Any) -> None:
        """Replace config fields; resume and cover letter paths reach the upload handler."""
        self._config = self._config.model_copy(update=changes)
        if "resume_path" in changes:
            self._processor.set_resume_path(self._config.resume_path)
        if "cover_letter_path" in changes:
            self._processor.set_cover_letter_path(self._config.cover_letter_path)

    def apply(self, job: Job) -> EasyApplyResult:
        """Run the full Easy Apply flow for ``job``."""
        result = EasyApplyResult(job_title=job.title, company=job.company)
        self._start_job(job)
        self._log.info(f"Starting Easy Apply: {job.title} at {job.company}")

        try:
            self._heartbeat(Activity.NAVIGATING_TO_JOB, {"url": job.link})
            self._job_page.goto(job.link)
            self._snapshot("job_page_loaded")

            self._heartbeat(Activity.EXTRACTING_DESCRIPTION)
            description = self._job_page.get_job_description()
            if description:
                job.description = description
                self._log.debug(f"Job description extracted: {len(description)} chars")
                if self._skip_for_language(job, result):
                    return result

            self._start_tailoring(job)

            self._heartbeat(Activity.OPENING_APPLICATION)
            outcome = self._job_page.open_easy_apply_modal()
            if outcome == ModalOpenOutcome.ALREADY_APPLIED:
                result.already_applied = True
                result.error = "Already applied to this job"
                self._heartbeat(Activity.SKIPPING_JOB, {"reason": "already_applied"})
                return result
            if outcome == ModalOpenOutcome.FAILED:
                self._fail(job, result, "Could not open Easy Apply modal")
                return result

            self._set_job_context(job)

            success, error = self._process_all_pages(result)
            if not success:
                self._fail(job, result, error)
                return result

            result.success = True
            self._log.info(f"Applied to {job.title} at {job.company}")
            self._heartbeat(
                Activity.APPLICATION_SUBMITTED,
                {"pages": result.pages_completed, "dry_run": result.dry_run},
            )
            if not result.dry_run:
                self._reporter.increment_jobs_applied()
        except Exception as e:
            self._log.error(f"Error during Easy Apply: {e}")
            self._snapshot("apply_error")
            self._fail(job, result, str(e))
        finally:
            if self._pending is not None:
                self._pending.cancel()
                self._pending = None
            self._processor.set_pending_resume(None)
            self._processor.set_retry_mode(False)
        return result

    def close(self) -> None:
        """Shut the tailoring worker down without waiting."""
        if self._tailoring is not None:
            self._tailoring.shutdown()

    def _start_job(self, job: Job) -> None:
        self._job_title = job.title
        self._last_snapshot = None
        job_log = self._base_log.bind(job=job.title, company=job.company)
        self._log = job_log
        self._nav.bind_logger(job_log)
        self._processor.bind_logger(job_log)
        self._job_page.bind_logger(job_log)

    def _heartbeat(self, activity: Activity, details: Optional[dict[str, Any]] = None) -> None:
        self._log = self._log.bind(activity=activity.value)
        self._reporter.send_heartbeat(activity, details)

    def _snapshot(self, context: str) -> None:
        if self._recorder is None:
            return
        path = self._recorder.save(self._page, context, self._job_title)
        if path is not None:
            self._last_snapshot = path

    def _skip_for_language(self, job: Job, result: EasyApplyResult) -> bool:
        self._heartbeat(Activity.DETECTING_LANGUAGE)
        language = detect_language(job.description or "")
        job.detected_language = language
        result.detected_language = language
        if is_language_accepted(language, self._config.job_languages):
            return False

        result.language_skipped = True
        result.error = f"Job language '{language}' not in accepted languages"
        self._log.info(result.error)
        self._heartbeat(Activity.SKIPPING_JOB, {"reason": "language", "language": language})
        return True

    def _start_tailoring(self, job: Job) -> None:
        if self._config.use_constant_resume or self._tailoring is None or not job.description:
            return
        self._heartbeat(Activity.TAILORING_RESUME)
        self._pending = self._tailoring.start(job, job.description)
        self._processor.set_pending_resume(self._pending)

    def _set_job_context(self, job: Job) -> None:
        description = (job.description or "")[:JOB_CONTEXT_DESCRIPTION_CHARS] or "N/A"
        context = (
            f"Job Title: {job.title}\n"
            f"Company: {job.company}\n"
            f"Location: {job.location}\n"
            f"Description: {description}"
        )
        try:
            self._answerer.set_job_context(context)
        except Exception as e:
            self._log.debug(f"Could not set job context: {e}")

    def _process_all_pages(self, result: EasyApplyResult) -> tuple[bool, Optional[str]]:
        """Fill and advance until submitted, the dialog closes, or a limit is hit."""
        max_pages = self._config.max_pages
        retries = 0
        step = 1

        while step <= max_pages:
            self._heartbeat(Activity.FILLING_FORM, {"step": step})
            self._log.info(f"Easy Apply step {step}")
            self._snapshot(f"step_{step}_start")

            if not self._nav.is_modal_open():
                self._log.info("Modal closed, application complete")
                return True, None

            page_result = self._processor.fill_current_page()
            result.total_fields += page_result.fields_processed
            result.failed_fields += page_result.fields_failed
            self._snapshot(f"step_{step}_after_fill")

            if self._nav.get_modal_state() == ModalState.SUBMIT:
                if self._config.dry_run:
                    self._log.info("Dry run: closing the dialog instead of submitting")
                    self._nav.close_modal()
                    result.pages_completed = step
                    result.dry_run = True
                    return True, None
                self._heartbeat(Activity.SUBMITTING_APPLICATION)

            nav = self._nav.click_primary_button()
            if not nav.success:
                self._snapshot(f"step_{step}_nav_error")
                if not self._nav.has_validation_errors():
                    return False, nav.error or "Navigation failed"

                retries += 1
                if retries > self._config.max_retries:
                    errors = self._nav.get_validation_errors()
                    self._snapshot(f"step_{step}_validation_failed")
                    return False, f"Validation errors: {', '.join(errors)}"
                self._log.warning(
                    f"Validation errors on step {step}, retry {retries}/{self._config.max_retries}"
                )
                self._processor.set_retry_mode(True)
                continue

            if nav.submitted:
                result.pages_completed = step
                self._snapshot("submitted_success")
                self._handle_post_submit()
                return True, None

            self._page.wait_for_timeout(PAGE_ADVANCE_WAIT_MS)
            result.pages_completed = step
            if not self._nav.is_modal_open():
                self._log.info("Modal closed after navigation, application complete")
                return True, None

            retries = 0
            self._processor.set_retry_mode(False)
            self._nav.wait_for_modal_ready()
            step += 1

        return False, f"Exceeded maximum pages ({max_pages})"

    def _handle_post_submit(self) -> None:
        self._log.info("Application submitted, waiting for page to settle")
        self._page.wait_for_timeout(POST_SUBMIT_WAIT_MS)
        try:
            self._page.locator(LinkedInSelectors.JOB_DESCRIPTION[0]).first.wait_for(
                state="attached", timeout=POST_SUBMIT_CHECK_TIMEOUT_MS
            )
        except Exception:
            self._log.debug("Job description not found after submission")

    def _fail(self, job: Job, result: EasyApplyResult, error: Optional[str]) -> None:
        result.success = False
        result.error = error
        self._log.error(f"Easy Apply failed: {error}")
        self._cleanup()
        self._heartbeat(Activity.APPLICATION_FAILED, {"error": error})
        self._reporter.increment_jobs_failed()
        if self._failures is not None:
            try:
                self._failures.log(
                    new_failure(
                        job.link,
                        job.title,
                        job.company,
                        error,
                        details={
                            "pages_completed": result.pages_completed,
                            "total_fields": result.total_fields,
                            "failed_fields": result.failed_fields,
                        },
                        page_snapshot=str(self._last_snapshot) if self._last_snapshot else None,
                    )
                )
            except OSError as e:
                self._log.warning(f"Could not write failure log: {e}")

    def _cleanup(self) -> None:
        try:
            if self._nav.is_modal_open():
                self._nav.close_modal()
        except Exception as e:
            self._log.warning(f"Cleanup failed to close the dialog: {e}")
