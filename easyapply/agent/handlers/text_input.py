"""Single-line text inputs, the catch-all handler."""
from playwright.sync_api import Locator

from ..selectors import LinkedInSelectors
from .base_handler import BaseFieldHandler

EXCLUDED_INPUT_TYPES = {"button", "submit", "checkbox", "radio", "file", "hidden"}
NUMERIC_INPUT_MODES = {"numeric", "decimal"}


def is_numeric_input(field: Locator) -> bool:
    """True for number inputs, numeric input modes, or ids/names that say so."""
    try:
        if field.get_attribute("type") == "number":
            return True
        if (field.get_attribute("inputmode") or "") in NUMERIC_INPUT_MODES:
            return True
        identity = f"{field.get_attribute('id') or ''} {field.get_attribute('name') or ''}"
        return "numeric" in identity or "number" in identity
    except Exception:
        return False


class TextInputHandler(BaseFieldHandler):
    field_type = "text"

    def can_handle(self, section: Locator) -> bool:
        try:
            for field in section.locator(LinkedInSelectors.TEXT_INPUT).all():
                if (field.get_attribute("type") or "text") not in EXCLUDED_INPUT_TYPES:
                    return True
            return False
        except Exception:
            return False

    def handle(self, section: Locator) -> bool:
        try:
            field = section.locator(LinkedInSelectors.TEXT_INPUT).first
            if field.count() == 0:
                return False
            if (field.get_attribute("type") or "text") in EXCLUDED_INPUT_TYPES:
                return False

            question = self.extract_question_text(section)
            numeric = is_numeric_input(field)
            from_resume = self.resume_value(field, question)
            if from_resume:
                answer = from_resume
                numeric = False
            elif numeric:
                answer = self.cached_or(
                    question, lambda: str(self._answerer.answer_numeric(question))
                )
            else:
                answer = self.cached_or(question, lambda: self._answerer.answer_textual(question))

            if not answer or not answer.strip():
                self._log.warning(f"No answer for text input: {question[:50]}")
                return False

            self._fill(field, answer)
            self._log.info(f"Filled: {question[:40]} = {answer[:50]}")

            if numeric:
                retry = lambda q, prev, err: str(self._answerer.answer_numeric_with_retry(q, prev, err))
            else:
                retry = self._answerer.answer_textual_with_retry
            self.handle_validation_error(
                section, question, answer, retry, lambda corrected: self._fill(field, corrected)
            )
            return True
        except Exception as e:
            self._log.error(f"Error handling text input: {e}")
            return False

    def _fill(self, field: Locator, value: str) -> None:
        field.click()
        field.fill("")
        field.fill(value)
