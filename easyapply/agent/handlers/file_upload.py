"""Resume and cover letter upload fields."""
import logging
from pathlib import Path
from typing import Optional

from playwright.sync_api import Locator, Page

from ...answerer.base import Answerer
from ...resume.tailoring import PendingResume
from ..form_utils import FormUtils
from ..models import SHORT_WAIT_MS, UPLOAD_WAIT_MS
from ..selectors import LinkedInSelectors
from .base_handler import BaseFieldHandler

S = LinkedInSelectors


class FileUploadHandler(BaseFieldHandler):
    """Uploads the resume (tailored when ready) or the cover letter."""

    field_type = "file"

    def __init__(
        self,
        page: Page,
        answerer: Answerer,
        form_utils: FormUtils,
        resume_path: Optional[str] = None,
        cover_letter_path: Optional[str] = None,
        join_timeout: float = 180.0,
        logger: Optional[logging.LoggerAdapter] = None,
    ) -> None:
        super().__init__(page, answerer, form_utils, logger)
        self._resume_path = resume_path
        self._cover_letter_path = cover_letter_path
        self._join_timeout = join_timeout
        self._pending: Optional[PendingResume] = None
        self._tailored_path: Optional[str] = None

    def set_resume_path(self, path: Optional[str]) -> None:
        self._resume_path = path

    def set_cover_letter_path(self, path: Optional[str]) -> None:
        self._cover_letter_path = path

    def set_pending_resume(self, pending: Optional[PendingResume]) -> None:
        """Attach a tailoring handle for the current job, dropping any previous result."""
        self._pending = pending
        self._tailored_path = None

    def resolve_resume_path(self) -> Optional[str]:
        """Join the pending tailored resume once; fall back to the base resume."""
        if self._pending is not None:
            pending, self._pending = self._pending, None
            self._log.info("Waiting for tailored resume")
            artifact = pending.join(self._join_timeout)
            if artifact is not None and Path(artifact.pdf_path).exists():
                self._tailored_path = str(artifact.pdf_path)
                self._log.info(f"Using tailored resume: {self._tailored_path}")
            else:
                self._log.warning("Tailored resume unavailable, using base resume")
        return self._tailored_path or self._resume_path

    def can_handle(self, section: Locator) -> bool:
        for selector in (S.FILE_INPUT, S.UPLOAD_WORDING, S.DOCUMENT_UPLOAD):
            try:
                if section.locator(selector).count() > 0:
                    return True
            except Exception:
                continue
        return False

    def handle(self, section: Locator) -> bool:
        try:
            question = self.extract_question_text(section).lower()

            if self._has_existing_upload(section):
                self._log.debug("File already uploaded")
                return True
            if self._use_previous_upload(section):
                self._log.info("Selected previously uploaded file")
                return True

            if "cover letter" in question or "coverletter" in question:
                file_path = self._cover_letter_path
            else:
                file_path = self.resolve_resume_path()

            if not file_path:
                self._log.warning(f"No file available for upload: {question[:50]}")
                return True

            uploaded = self._upload(section, file_path)
            if uploaded:
                self._log.info(f"Uploaded file: {file_path}")
            return uploaded
        except Exception as e:
            self._log.error(f"Error handling file upload: {e}")
            return False

    def _has_existing_upload(self, section: Locator) -> bool:
        try:
            if section.locator(S.UPLOADED_FILE_NAME).count() > 0:
                return True
            if section.locator(S.UPLOAD_SUCCESS).count() > 0:
                return True
            card_name = section.locator(S.UPLOADED_FILE_CARD_NAME)
            if card_name.count() > 0 and (card_name.first.text_content() or "").strip():
                return True
        except Exception:
            pass
        return False

    def _use_previous_upload(self, section: Locator) -> bool:
        for selector in (S.PREVIOUS_UPLOAD_CARD, S.PREVIOUS_RESUME_RADIO):
            try:
                option = section.locator(selector).first
                if option.count() > 0:
                    option.click()
                    self._page.wait_for_timeout(SHORT_WAIT_MS)
                    return True
            except Exception:
                continue
        return False

    def _upload(self, section: Locator, file_path: str) -> bool:
        try:
            file_input = section.locator(S.FILE_INPUT).first
            if file_input.count() > 0:
                file_input.set_input_files(file_path)
                self._page.wait_for_timeout(UPLOAD_WAIT_MS)
                return True

            control = section.locator(S.UPLOAD_CONTROL).first
            if control.count() > 0:
                with self._page.expect_file_chooser(timeout=5000) as chooser_info:
                    control.click()
                chooser_info.value.set_files(file_path)
                self._page.wait_for_timeout(UPLOAD_WAIT_MS)
                return True
        except Exception as e:
            self._log.debug(f"Upload error: {e}")
            return False

        self._log.warning("Could not find file input or upload button")
        return False
