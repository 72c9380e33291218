"""Checkbox fields: single consent boxes and multi-select groups."""
import re

from playwright.sync_api import Locator

from ..answer_cache import normalize_text
from ..models import CLICK_TIMEOUT_MS
from ..selectors import LinkedInSelectors
from .base_handler import BaseFieldHandler

CONSENT_KEYWORDS = [
    "agree", "accept", "consent", "acknowledge", "confirm",
    "terms", "privacy", "policy", "understand", "certify",
]


def parse_selected_numbers(answer: str, max_number: int) -> list[int]:
    """1-based option numbers mentioned in a reply, in order, without duplicates."""
    selected: list[int] = []
    for match in re.findall(r"\d+", answer):
        number = int(match)
        if 1 <= number <= max_number and number not in selected:
            selected.append(number)
    return selected


class CheckboxHandler(BaseFieldHandler):
    """Checks consent boxes outright and asks the answerer about the rest.

    In retry mode a section still showing an inline error gets a box
    checked even when the answerer said otherwise, since the usual cause is
    a required box left empty.
    """

    field_type = "checkbox"

    def can_handle(self, section: Locator) -> bool:
        try:
            return section.locator(LinkedInSelectors.CHECKBOX).count() > 0
        except Exception:
            return False

    def handle(self, section: Locator) -> bool:
        try:
            checkboxes = section.locator(LinkedInSelectors.CHECKBOX).all()
            if not checkboxes:
                return False
            question = self.extract_question_text(section)
            if len(checkboxes) == 1:
                return self._handle_single(section, checkboxes[0], question)
            return self._handle_multiple(section, checkboxes, question)
        except Exception as e:
            self._log.error(f"Error handling checkbox: {e}")
            return False

    def _handle_single(self, section: Locator, checkbox: Locator, question: str) -> bool:
        if checkbox.is_checked():
            self._log.debug("Checkbox already checked")
            return True

        label = normalize_text(self._utils.label_text(checkbox))
        haystack = f"{label} {question.lower()}"
        if any(keyword in haystack for keyword in CONSENT_KEYWORDS):
            self._check(checkbox)
            self._log.info(f"Auto-checked consent: {label[:50]}")
            return True

        if self._retry_mode and self._utils.extract_field_errors(section):
            self._check(checkbox)
            self._log.info(f"Checked required box on retry: {label[:50]}")
            return True

        prompt = f'Should I check this checkbox? "{label or question}" (Answer: yes or no)'
        answer = self.cached_or(question, lambda: self._answerer.answer_checkbox_question(prompt))
        if "yes" in answer.lower():
            self._check(checkbox)
            self._log.info(f"Checked: {label[:50]}")
        else:
            self._log.debug(f"Left unchecked: {label[:50]}")
        return True

    def _handle_multiple(self, section: Locator, checkboxes: list[Locator], question: str) -> bool:
        labels = [self._utils.label_text(cb) for cb in checkboxes]
        numbered = "\n".join(f"{i}. {label}" for i, label in enumerate(labels, start=1))
        prompt = (
            f'Question: "{question}"\n\nOptions:\n{numbered}\n\n'
            'Which options should I select? List the numbers separated by commas, or say "none".'
        )
        answer = self.cached_or(question, lambda: self._answerer.answer_checkbox_question(prompt))
        selected = [] if answer.strip().lower() == "none" else parse_selected_numbers(answer, len(checkboxes))

        if not selected and self._retry_mode and self._utils.extract_field_errors(section):
            selected = [1]

        for number in selected:
            checkbox = checkboxes[number - 1]
            if not checkbox.is_checked():
                self._check(checkbox)
                self._log.info(f"Checked: {labels[number - 1][:50]}")
        return True

    def _check(self, checkbox: Locator) -> None:
        try:
            checkbox.check(timeout=CLICK_TIMEOUT_MS)
        except Exception:
            self._utils.click_label(checkbox)
