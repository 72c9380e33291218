"""Fills one page of the Easy Apply form through the field handlers."""
import logging
from typing import Iterable, Optional

from playwright.sync_api import Locator, Page

from ..answerer.base import Answerer
from ..resume.tailoring import PendingResume
from .answer_cache import AnswerCache, AnswerRecordCallback
from .form_utils import FormUtils
from .handlers import BaseFieldHandler, FileUploadHandler, build_default_handlers, find_handler
from .models import (
    FORM_READY_WAIT_MS,
    FORM_SCROLL_STEP_PX,
    MAX_FORM_PASSES,
    SCROLL_SETTLE_MS,
    FormPageResult,
    SavedAnswer,
)
from .resume_matcher import ResumeFieldMatcher
from .selectors import LinkedInSelectors

logger = logging.getLogger(__name__)


class FormPageProcessor:
    """Processes the sections of the current Easy Apply page.

    Sections are re-discovered on every pass because LinkedIn renders long
    forms lazily; the form is scrolled between passes until a pass handles
    nothing new.
    """

    def __init__(
        self,
        page: Page,
        answerer: Answerer,
        saved_answers: Iterable[SavedAnswer] = (),
        record_callback: Optional[AnswerRecordCallback] = None,
        resume_path: Optional[str] = None,
        cover_letter_path: Optional[str] = None,
        join_timeout: float = 180.0,
        log: Optional[logging.LoggerAdapter] = None,
        handlers: Optional[list[BaseFieldHandler]] = None,
        resume_matcher: Optional[ResumeFieldMatcher] = None,
    ) -> None:
        self._page = page
        self._log = log or logger
        self._utils = FormUtils(page, AnswerCache(saved_answers, record_callback), resume_matcher)
        self._file_upload = FileUploadHandler(
            page,
            answerer,
            self._utils,
            resume_path=resume_path,
            cover_letter_path=cover_letter_path,
            join_timeout=join_timeout,
            logger=log,
        )
        self._handlers = handlers or build_default_handlers(
            page, answerer, self._utils, file_upload=self._file_upload, log=log
        )

    @property
    def handlers(self) -> list[BaseFieldHandler]:
        return list(self._handlers)

    @property
    def form_utils(self) -> FormUtils:
        return self._utils

    def set_retry_mode(self, enabled: bool) -> None:
        for handler in self._handlers:
            handler.set_retry_mode(enabled)

    def set_pending_resume(self, pending: Optional[PendingResume]) -> None:
        self._file_upload.set_pending_resume(pending)

    def set_resume_path(self, path: Optional[str]) -> None:
        self._file_upload.set_resume_path(path)

    def set_cover_letter_path(self, path: Optional[str]) -> None:
        self._file_upload.set_cover_letter_path(path)

    def bind_logger(self, log: logging.LoggerAdapter) -> None:
        self._log = log
        for handler in self._handlers:
            handler.bind_logger(log)
        if self._file_upload not in self._handlers:
            self._file_upload.bind_logger(log)

    def fill_current_page(self) -> FormPageResult:
        """Fill every visible section on the page.

        Returns:
            FormPageResult; ``success`` holds while fewer than half of the
            processed fields failed.
        """
        result = FormPageResult()
        try:
            self._page.wait_for_timeout(FORM_READY_WAIT_MS)
            processed: set[str] = set()

            for pass_index in range(1, MAX_FORM_PASSES + 1):
                sections = self.find_sections()
                if pass_index == 1:
                    self._log.info(f"Found {len(sections)} form section(s) on this page")

                handled = self._process_sections(sections, processed, result)
                handled += self._process_bare_uploads(processed, result)
                self._log.debug(f"Pass {pass_index}: handled {handled} new section(s)")
                if handled == 0:
                    break
                self._scroll_form()

            result.success = result.fields_failed < result.fields_processed / 2
            filled = result.fields_processed - result.fields_failed
            self._log.info(f"Page complete: {filled}/{result.fields_processed} fields filled")
        except Exception as e:
            result.success = False
            result.errors.append(str(e))
            self._log.error(f"Error filling page: {e}")
        return result

    def find_sections(self) -> list[Locator]:
        """Form sections across all section selectors, de-duplicated by bounding box."""
        sections: list[Locator] = []
        seen: set[str] = set()
        for selector in LinkedInSelectors.FORM_SECTIONS:
            try:
                elements = self._page.locator(selector).all()
            except Exception:
                continue
            for element in elements:
                try:
                    box = element.bounding_box()
                except Exception:
                    continue
                if not box:
                    continue
                box_key = f"{box['x']}-{box['y']}-{box['width']}-{box['height']}"
                if box_key in seen:
                    continue
                seen.add(box_key)
                sections.append(element)
        return sections

    def _process_sections(self, sections: list[Locator], processed: set[str], result: FormPageResult) -> int:
        handled = 0
        for section in sections:
            key = self._utils.stable_key(section)
            try:
                if key in processed:
                    continue
                if not section.is_visible():
                    continue

                handler = find_handler(self._handlers, section)
                if handler is None:
                    self._log.debug("No handler for section, likely a label-only block")
                    continue

                ok = handler.handle(section)
                result.fields_processed += 1
                processed.add(key)
                handled += 1
                if not ok:
                    result.fields_failed += 1
                    self._log.warning(f"{handler.name} failed to fill a field")
            except Exception as e:
                processed.add(key)
                result.fields_processed += 1
                result.fields_failed += 1
                result.errors.append(str(e))
                self._log.error(f"Error processing section: {e}")
        return handled

    def _process_bare_uploads(self, processed: set[str], result: FormPageResult) -> int:
        """Offer upload blocks around stray file inputs to the upload handler."""
        handled = 0
        try:
            form = self._page.locator(LinkedInSelectors.FORM).first
            file_inputs = form.locator(LinkedInSelectors.FILE_INPUT).all()
        except Exception:
            return 0

        for file_input in file_inputs:
            try:
                block = file_input.locator(LinkedInSelectors.UPLOAD_BLOCK_XPATH).first
                if block.count() == 0:
                    continue
                key = self._utils.stable_key(block)
                if key in processed:
                    continue
                if not self._file_upload.can_handle(block):
                    continue
                self._log.debug("Processing bare file input block")
                ok = self._file_upload.handle(block)
                processed.add(key)
                handled += 1
                result.fields_processed += 1
                if not ok:
                    result.fields_failed += 1
            except Exception as e:
                self._log.debug(f"Could not process file input: {e}")
                continue
        return handled

    def _scroll_form(self) -> None:
        try:
            form = self._page.locator(LinkedInSelectors.FORM).first
            form.evaluate(f"(el) => {{ el.scrollTop += {FORM_SCROLL_STEP_PX}; }}")
            self._page.wait_for_timeout(SCROLL_SETTLE_MS)
        except Exception as e:
            self._log.debug(f"Form scroll failed: {e}")
