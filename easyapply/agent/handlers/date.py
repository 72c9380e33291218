"""Date fields: native date inputs, month/year selects, and free-text dates."""
import re
from dataclasses import dataclass
from typing import Optional

from playwright.sync_api import Locator

from ..selectors import LinkedInSelectors
from .base_handler import BaseFieldHandler

MONTH_NAMES = [
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
]
DATE_LABEL_KEYWORDS = ["date", "when", "start", "end"]

MONTH_SELECT = 'select[id*="month"], select[name*="month"]'
YEAR_SELECT = 'select[id*="year"], select[name*="year"]'

_ISO = re.compile(r"(\d{4})-(\d{1,2})-(\d{1,2})")
_US = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})")
_YEAR = re.compile(r"\b(?:19|20)\d{2}\b")


@dataclass
class DateParts:
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None


def parse_date_answer(answer: str) -> DateParts:
    """Parse ISO, US (MM/DD/YYYY) or "Month YYYY" text."""
    iso = _ISO.search(answer)
    if iso:
        return DateParts(int(iso.group(1)), int(iso.group(2)), int(iso.group(3)))

    us = _US.search(answer)
    if us:
        return DateParts(int(us.group(3)), int(us.group(1)), int(us.group(2)))

    parts = DateParts()
    lower = answer.lower()
    for index, name in enumerate(MONTH_NAMES, start=1):
        if name in lower:
            parts.month = index
            break
    year = _YEAR.search(answer)
    if year:
        parts.year = int(year.group(0))
    return parts


def format_iso_date(answer: str) -> Optional[str]:
    """YYYY-MM-DD for a native date input; month and day default to 1."""
    parts = parse_date_answer(answer)
    if not parts.year:
        return None
    return f"{parts.year}-{parts.month or 1:02d}-{parts.day or 1:02d}"


class DateHandler(BaseFieldHandler):
    """Tries a native date input, then month/year selects, then a text input."""

    field_type = "date"

    def can_handle(self, section: Locator) -> bool:
        try:
            if section.locator(LinkedInSelectors.DATE_INPUT).count() > 0:
                return True
            if section.locator(MONTH_SELECT).count() > 0 or section.locator(YEAR_SELECT).count() > 0:
                return True
            label = section.locator("label")
            if label.count() == 0:
                return False
            label_text = (label.first.text_content() or "").lower()
            if any(keyword in label_text for keyword in DATE_LABEL_KEYWORDS):
                return section.locator('input[type="text"]').count() > 0
            return False
        except Exception:
            return False

    def handle(self, section: Locator) -> bool:
        try:
            question = self.extract_question_text(section)
            for strategy in (self._fill_date_input, self._fill_month_year, self._fill_text_date):
                if strategy(section, question):
                    return True
            self._log.warning(f"Could not handle date field: {question[:50]}")
            return False
        except Exception as e:
            self._log.error(f"Error handling date field: {e}")
            return False

    def _date_answer(self, question: str) -> str:
        prompt = (
            f"{question} (Please provide a date. Common formats: YYYY-MM-DD, "
            'MM/DD/YYYY, or just month/year like "January 2024")'
        )
        return self.cached_or(question, lambda: self._answerer.answer_textual(prompt))

    def _fill_date_input(self, section: Locator, question: str) -> bool:
        date_input = section.locator(LinkedInSelectors.DATE_INPUT).first
        if date_input.count() == 0:
            return False
        answer = self._date_answer(question)
        formatted = format_iso_date(answer)
        if not formatted:
            self._log.warning(f"Could not format date: {answer}")
            return False
        date_input.fill(formatted)
        self._log.info(f"Date: {question[:40]} = {formatted}")
        return True

    def _fill_month_year(self, section: Locator, question: str) -> bool:
        month_select = section.locator(MONTH_SELECT).first
        year_select = section.locator(YEAR_SELECT).first
        has_month = month_select.count() > 0
        has_year = year_select.count() > 0
        if not has_month and not has_year:
            return False

        parts = parse_date_answer(self._date_answer(question))
        if has_month and parts.month:
            month_select.select_option(value=f"{parts.month:02d}")
        if has_year and parts.year:
            year_select.select_option(value=str(parts.year))
        self._log.info(f"Date: {question[:40]} = month {parts.month}, year {parts.year}")
        return True

    def _fill_text_date(self, section: Locator, question: str) -> bool:
        text_input = section.locator('input[type="text"]').first
        if text_input.count() == 0:
            return False
        if (text_input.input_value() or "").strip():
            self._log.debug("Date text input already filled")
            return True

        answer = self._date_answer(question)
        placeholder = (text_input.get_attribute("placeholder") or "").lower()
        parts = parse_date_answer(answer)
        if "mm/dd/yyyy" in placeholder and parts.year:
            answer = f"{parts.month or 1:02d}/{parts.day or 1:02d}/{parts.year}"
        elif "yyyy-mm-dd" in placeholder:
            answer = format_iso_date(answer) or answer
        text_input.fill(answer)
        self._log.info(f"Date: {question[:40]} = {answer}")
        return True
