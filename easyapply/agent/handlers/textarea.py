"""Long-form textarea fields."""
from playwright.sync_api import Locator

from ..selectors import LinkedInSelectors
from .base_handler import BaseFieldHandler

PREFILLED_MIN_CHARS = 50


class TextareaHandler(BaseFieldHandler):
    field_type = "textarea"

    def can_handle(self, section: Locator) -> bool:
        try:
            return section.locator(LinkedInSelectors.TEXTAREA).count() > 0
        except Exception:
            return False

    def handle(self, section: Locator) -> bool:
        try:
            textarea = section.locator(LinkedInSelectors.TEXTAREA).first
            if textarea.count() == 0:
                return False

            existing = (textarea.input_value() or "").strip()
            if len(existing) > PREFILLED_MIN_CHARS:
                self._log.debug("Textarea already has substantial content, skipping")
                return True

            question = self.extract_question_text(section)
            answer = self.cached_or(question, lambda: self._answerer.answer_textual(question))
            if not answer or not answer.strip():
                self._log.warning(f"No answer for textarea: {question[:50]}")
                return False

            self._fill(textarea, answer)
            self._log.info(f"Textarea: {question[:40]} = [{len(answer)} chars]")

            self.handle_validation_error(
                section,
                question,
                answer,
                self._answerer.answer_textual_with_retry,
                lambda corrected: self._fill(textarea, corrected),
            )
            return True
        except Exception as e:
            self._log.error(f"Error handling textarea: {e}")
            return False

    def _fill(self, textarea: Locator, value: str) -> None:
        textarea.click()
        textarea.fill("")
        textarea.fill(value)
