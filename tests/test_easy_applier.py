"""Tests for the EasyApplier orchestrator, with navigation and form filling mocked."""
from unittest.mock import MagicMock, Mock, patch

import pytest

from easyapply.agent.easy_applier import EasyApplier
from easyapply.agent.form_processor import FormPageProcessor
from easyapply.agent.models import (
    FormPageResult,
    Job,
    ModalOpenOutcome,
    ModalState,
    NavigationResult,
)
from easyapply.agent.navigation import NavigationController
from easyapply.agent.status import Activity
from easyapply.core.config import EasyApplierConfig
from easyapply.feedback.failure_logger import FailureLogger

DESCRIPTION = "We are hiring a Python engineer to build data pipelines. " * 5


@pytest.fixture
def job() -> Job:
    return Job(
        title="Backend Engineer",
        company="Acme",
        link="https://www.linkedin.com/jobs/view/123",
        location="Remote",
    )


@pytest.fixture
def nav() -> Mock:
    nav = Mock(spec=NavigationController)
    nav.is_modal_open.return_value = True
    nav.get_modal_state.return_value = ModalState.FORM
    nav.click_primary_button.return_value = NavigationResult(success=True, state=ModalState.FORM)
    nav.has_validation_errors.return_value = False
    nav.get_validation_errors.return_value = []
    return nav


@pytest.fixture
def processor() -> Mock:
    processor = Mock(spec=FormPageProcessor)
    processor.fill_current_page.return_value = FormPageResult(success=True, fields_processed=1)
    return processor


@pytest.fixture
def job_page() -> Mock:
    job_page = Mock()
    job_page.goto.return_value = True
    job_page.get_job_description.return_value = ""
    job_page.open_easy_apply_modal.return_value = ModalOpenOutcome.OPENED
    return job_page


@pytest.fixture
def reporter() -> MagicMock:
    return MagicMock()


@pytest.fixture
def make_applier(mock_page, mock_answerer, nav, processor, job_page, reporter):
    def _make(**kwargs) -> EasyApplier:
        config = EasyApplierConfig(**kwargs.pop("config", {}))
        applier = EasyApplier(
            mock_page,
            mock_answerer,
            reporter=reporter,
            config=config,
            navigation=nav,
            form_processor=processor,
            **kwargs,
        )
        applier._job_page = job_page
        return applier
    return _make


def heartbeats(reporter: MagicMock) -> list[Activity]:
    return [c.args[0] for c in reporter.send_heartbeat.call_args_list]


class TestSuccessfulApply:
    def test_two_page_application(self, make_applier, job, nav, processor, reporter) -> None:
        nav.get_modal_state.side_effect = [ModalState.FORM, ModalState.SUBMIT]
        nav.click_primary_button.side_effect = [
            NavigationResult(success=True, state=ModalState.REVIEW),
            NavigationResult(success=True, submitted=True, state=ModalState.CLOSED),
        ]
        processor.fill_current_page.side_effect = [
            FormPageResult(success=True, fields_processed=2),
            FormPageResult(success=False, fields_processed=1, fields_failed=1),
        ]

        result = make_applier().apply(job)

        assert result.success is True
        assert result.pages_completed == 2
        assert result.total_fields == 3
        assert result.failed_fields == 1
        assert result.error is None
        reporter.increment_jobs_applied.assert_called_once()
        reporter.increment_jobs_failed.assert_not_called()
        assert Activity.SUBMITTING_APPLICATION in heartbeats(reporter)
        assert heartbeats(reporter)[-1] == Activity.APPLICATION_SUBMITTED

    def test_modal_closing_after_advance_counts_as_done(self, make_applier, job, nav) -> None:
        nav.is_modal_open.side_effect = [True, False]

        result = make_applier().apply(job)

        assert result.success is True
        assert result.pages_completed == 1

    def test_job_context_sent_to_answerer(self, make_applier, job, nav, job_page, mock_answerer) -> None:
        job_page.get_job_description.return_value = DESCRIPTION
        nav.click_primary_button.return_value = NavigationResult(
            success=True, submitted=True, state=ModalState.CLOSED
        )

        with patch("easyapply.agent.easy_applier.detect_language", return_value="en"):
            make_applier().apply(job)

        context = mock_answerer.set_job_context.call_args[0][0]
        assert "Job Title: Backend Engineer" in context
        assert "Company: Acme" in context

    def test_retry_mode_reset_after_apply(self, make_applier, job, processor) -> None:
        make_applier(config={"max_pages": 1}).apply(job)

        processor.set_retry_mode.assert_called_with(False)
        processor.set_pending_resume.assert_called_with(None)


class TestDryRun:
    def test_closes_instead_of_submitting(self, make_applier, job, nav, reporter) -> None:
        nav.get_modal_state.return_value = ModalState.SUBMIT

        result = make_applier(config={"dry_run": True}).apply(job)

        assert result.success is True
        assert result.pages_completed == 1
        nav.click_primary_button.assert_not_called()
        nav.close_modal.assert_called_once()
        assert result.dry_run is True
        reporter.increment_jobs_applied.assert_not_called()
        reporter.increment_jobs_failed.assert_not_called()

    def test_real_submission_counts_as_applied(self, make_applier, job, nav, reporter) -> None:
        nav.click_primary_button.return_value = NavigationResult(
            success=True, state=ModalState.CLOSED, submitted=True
        )

        result = make_applier().apply(job)

        assert result.success is True
        assert result.dry_run is False
        reporter.increment_jobs_applied.assert_called_once()


class TestValidationRetries:
    def test_fails_after_max_retries(self, make_applier, job, nav, processor, reporter, tmp_path) -> None:
        nav.click_primary_button.return_value = NavigationResult(
            success=False, state=ModalState.ERROR, error="Validation errors"
        )
        nav.has_validation_errors.return_value = True
        nav.get_validation_errors.return_value = ["Enter a whole number", "This field is required"]
        failures = FailureLogger(tmp_path / "failures.jsonl")

        result = make_applier(config={"max_retries": 3}, failure_logger=failures).apply(job)

        assert result.success is False
        assert result.error == "Validation errors: Enter a whole number, This field is required"
        assert nav.click_primary_button.call_count == 4
        assert processor.fill_current_page.call_count == 4
        processor.set_retry_mode.assert_any_call(True)
        nav.close_modal.assert_called_once()
        reporter.increment_jobs_failed.assert_called_once()
        logged = failures.read_all()
        assert len(logged) == 1
        assert logged[0].failure_type == "validation_error"

    def test_recovers_after_retry(self, make_applier, job, nav) -> None:
        nav.click_primary_button.side_effect = [
            NavigationResult(success=False, state=ModalState.ERROR, error="Validation errors"),
            NavigationResult(success=True, submitted=True, state=ModalState.CLOSED),
        ]
        nav.has_validation_errors.return_value = True

        result = make_applier().apply(job)

        assert result.success is True
        assert result.pages_completed == 1


class TestFailures:
    def test_navigation_failure_without_validation(self, make_applier, job, nav, reporter) -> None:
        nav.click_primary_button.return_value = NavigationResult(
            success=False, state=ModalState.UNKNOWN, error="No primary button found"
        )

        result = make_applier().apply(job)

        assert result.success is False
        assert result.error == "No primary button found"
        assert nav.click_primary_button.call_count == 1
        reporter.increment_jobs_failed.assert_called_once()
        assert heartbeats(reporter)[-1] == Activity.APPLICATION_FAILED

    def test_exceeds_max_pages(self, make_applier, job, nav) -> None:
        result = make_applier(config={"max_pages": 2}).apply(job)

        assert result.success is False
        assert result.error == "Exceeded maximum pages (2)"
        assert nav.click_primary_button.call_count == 2

    def test_modal_not_opened(self, make_applier, job, job_page, reporter) -> None:
        job_page.open_easy_apply_modal.return_value = ModalOpenOutcome.FAILED

        result = make_applier().apply(job)

        assert result.success is False
        assert result.error == "Could not open Easy Apply modal"
        reporter.increment_jobs_failed.assert_called_once()

    def test_unexpected_error_is_reported(self, make_applier, job, processor, reporter) -> None:
        processor.fill_current_page.side_effect = RuntimeError("Target page closed")

        result = make_applier().apply(job)

        assert result.success is False
        assert result.error == "Target page closed"
        reporter.increment_jobs_failed.assert_called_once()


class TestSkips:
    def test_already_applied(self, make_applier, job, job_page, nav, reporter) -> None:
        job_page.open_easy_apply_modal.return_value = ModalOpenOutcome.ALREADY_APPLIED

        result = make_applier().apply(job)

        assert result.success is False
        assert result.already_applied is True
        assert result.error == "Already applied to this job"
        reporter.increment_jobs_failed.assert_not_called()
        assert heartbeats(reporter)[-1] == Activity.SKIPPING_JOB
        nav.click_primary_button.assert_not_called()

    def test_language_not_accepted(self, make_applier, job, job_page, reporter) -> None:
        job_page.get_job_description.return_value = DESCRIPTION

        with patch("easyapply.agent.easy_applier.detect_language", return_value="fr"):
            result = make_applier(config={"job_languages": ["en"]}).apply(job)

        assert result.language_skipped is True
        assert result.detected_language == "fr"
        assert result.error == "Job language 'fr' not in accepted languages"
        assert job.detected_language == "fr"
        job_page.open_easy_apply_modal.assert_not_called()
        reporter.increment_jobs_failed.assert_not_called()

    def test_accepted_language_continues(self, make_applier, job, job_page) -> None:
        job_page.get_job_description.return_value = DESCRIPTION

        with patch("easyapply.agent.easy_applier.detect_language", return_value="en"):
            result = make_applier(config={"job_languages": ["EN"], "max_pages": 1}).apply(job)

        assert result.language_skipped is False
        job_page.open_easy_apply_modal.assert_called_once()


class TestTailoringHandoff:
    def test_pending_resume_passed_to_processor(self, make_applier, job, job_page, processor) -> None:
        job_page.get_job_description.return_value = DESCRIPTION
        tailoring = Mock()
        pending = Mock()
        tailoring.start.return_value = pending

        with patch("easyapply.agent.easy_applier.detect_language", return_value="en"):
            make_applier(tailoring=tailoring, config={"max_pages": 1}).apply(job)

        tailoring.start.assert_called_once_with(job, DESCRIPTION)
        processor.set_pending_resume.assert_any_call(pending)

    def test_unused_tailoring_cancelled_after_job(self, make_applier, job, job_page, processor) -> None:
        job_page.get_job_description.return_value = DESCRIPTION
        tailoring = Mock()
        pending = Mock()
        tailoring.start.return_value = pending

        with patch("easyapply.agent.easy_applier.detect_language", return_value="en"):
            make_applier(tailoring=tailoring, config={"max_pages": 1}).apply(job)

        pending.cancel.assert_called_once()
        processor.set_pending_resume.assert_called_with(None)

    def test_constant_resume_skips_tailoring(self, make_applier, job, job_page) -> None:
        job_page.get_job_description.return_value = DESCRIPTION
        tailoring = Mock()

        with patch("easyapply.agent.easy_applier.detect_language", return_value="en"):
            make_applier(tailoring=tailoring, config={"use_constant_resume": True, "max_pages": 1}).apply(job)

        tailoring.start.assert_not_called()

    def test_close_shuts_down_tailoring(self, make_applier) -> None:
        tailoring = Mock()

        make_applier(tailoring=tailoring).close()

        tailoring.shutdown.assert_called_once()


class TestUpdateConfig:
    def test_resume_path_forwarded(self, make_applier, processor) -> None:
        applier = make_applier()

        applier.update_config(resume_path="/tmp/new.pdf", max_pages=3)

        assert applier.config.max_pages == 3
        processor.set_resume_path.assert_called_once_with("/tmp/new.pdf")
        processor.set_cover_letter_path.assert_not_called()
