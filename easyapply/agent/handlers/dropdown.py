"""Native select dropdowns."""
from typing import Optional

from playwright.sync_api import Locator

from ..answer_cache import rank_options
from ..models import MAX_DROPDOWN_OPTIONS, SHORT_WAIT_MS
from ..selectors import LinkedInSelectors
from .base_handler import BaseFieldHandler


class DropdownHandler(BaseFieldHandler):
    """Selects an option of a ``<select>`` by label."""

    field_type = "dropdown"

    def can_handle(self, section: Locator) -> bool:
        try:
            return section.locator(LinkedInSelectors.SELECT).count() > 0
        except Exception:
            return False

    def handle(self, section: Locator) -> bool:
        try:
            select = section.locator(LinkedInSelectors.SELECT).first
            if select.count() == 0:
                return False

            question = self.extract_question_text(section)
            options = self.extract_options(select)
            if not options:
                self._log.warning(f"No options found for dropdown: {question[:50]}")
                return False

            if len(options) > MAX_DROPDOWN_OPTIONS:
                self._log.warning(
                    f"Large dropdown ({len(options)} options), offering first {MAX_DROPDOWN_OPTIONS}"
                )
            offered = options[:MAX_DROPDOWN_OPTIONS]

            answer = self._school_from_resume(question, options) or self.cached_or(
                question, lambda: self._answerer.answer_from_options(question, offered)
            )
            if not answer or not answer.strip():
                self._log.warning(f"No answer for dropdown: {question[:50]}")
                return False

            if not self._select(select, options, answer):
                self._log.warning(f"No option matches '{answer}' for: {question[:50]}")
                return False
            self._log.info(f"Selected: {question[:40]} = {answer}")

            self.handle_validation_error(
                section,
                question,
                answer,
                lambda q, prev, err: self._answerer.answer_from_options_with_retry(q, offered, prev, err),
                lambda corrected: self._select(select, options, corrected),
            )
            return True
        except Exception as e:
            self._log.error(f"Error handling dropdown: {e}")
            return False

    def _school_from_resume(self, question: str, options: list[str]) -> Optional[str]:
        matcher = self._utils.resume_matcher
        if matcher is None:
            return None
        school = matcher.match_school(question, options)
        if school:
            self._log.info(f"School from resume: {question[:40]} = {school}")
        return school

    def extract_options(self, select: Locator) -> list[str]:
        """Option labels, skipping a leading placeholder."""
        options: list[str] = []
        for index, option in enumerate(select.locator("option").all()):
            try:
                text = (option.text_content() or "").strip()
                value = option.get_attribute("value")
                if index == 0 and (not value or "select" in text.lower()):
                    continue
                if text:
                    options.append(text)
            except Exception:
                continue
        return options

    def _select(self, select: Locator, options: list[str], answer: str) -> bool:
        for index in rank_options(answer, options):
            option = options[index]
            try:
                select.select_option(label=option, timeout=3000)
                self._page.wait_for_timeout(SHORT_WAIT_MS)
                return True
            except Exception as e:
                self._log.debug(f"Failed to select '{option}': {e}")
        return False
