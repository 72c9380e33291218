"""Autocomplete (typeahead) inputs such as location and school fields."""
from playwright.sync_api import Locator

from ..answer_cache import rank_options
from ..models import LONG_WAIT_MS, SHORT_WAIT_MS
from ..selectors import LinkedInSelectors
from .base_handler import BaseFieldHandler

TYPING_DELAY_MS = 50


class TypeaheadHandler(BaseFieldHandler):
    """Types an answer and picks the matching suggestion.

    Suggestions only appear after real key events, so the answer is typed
    rather than filled.
    """

    field_type = "typeahead"

    def can_handle(self, section: Locator) -> bool:
        try:
            for selector in LinkedInSelectors.TYPEAHEAD_INPUTS[:2]:
                if section.locator(selector).count() > 0:
                    return True
            field = section.locator(LinkedInSelectors.TEXT_INPUT).first
            if field.count() == 0:
                return False
            return (
                field.get_attribute("autocomplete") == "off"
                and field.get_attribute("aria-autocomplete") == "list"
            )
        except Exception:
            return False

    def handle(self, section: Locator) -> bool:
        try:
            field = section.locator(LinkedInSelectors.TEXT_INPUT).first
            if field.count() == 0:
                return False

            question = self.extract_question_text(section)
            answer = self.resume_value(field, question) or self.cached_or(
                question, lambda: self._answerer.answer_textual(question)
            )
            if not answer or not answer.strip():
                self._log.warning(f"No answer for typeahead: {question[:50]}")
                return False

            field.click()
            field.fill("")
            field.press_sequentially(answer, delay=TYPING_DELAY_MS)
            self._page.wait_for_timeout(LONG_WAIT_MS)

            if self._select_suggestion(answer):
                self._log.info(f"Typeahead: {question[:40]} = {answer} (suggestion)")
            else:
                self._page.keyboard.press("Enter")
                self._log.info(f"Typeahead: {question[:40]} = {answer} (pressed Enter)")
            return True
        except Exception as e:
            self._log.error(f"Error handling typeahead: {e}")
            return False

    def _select_suggestion(self, answer: str) -> bool:
        """Click the matching suggestion, else the first one shown."""
        try:
            listbox = self._page.locator('[role="listbox"]').first
            listbox.wait_for(state="visible", timeout=3000)
        except Exception:
            self._log.debug("No suggestion list appeared")
            return False

        try:
            options = listbox.locator(LinkedInSelectors.TYPEAHEAD_OPTION).all()
            if not options:
                return False
            texts = [option.text_content() or "" for option in options]
            ranked = rank_options(answer, texts)
            options[ranked[0] if ranked else 0].click()
            self._page.wait_for_timeout(SHORT_WAIT_MS)
            return True
        except Exception as e:
            self._log.debug(f"Error selecting suggestion: {e}")
            return False
