"""Base class for Easy Apply field handlers."""
import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

from playwright.sync_api import Locator, Page

from ...answerer.base import Answerer
from ..form_utils import FormUtils
from ..models import SHORT_WAIT_MS
from ..selectors import LinkedInSelectors

logger = logging.getLogger(__name__)

UNKNOWN_QUESTION = "unknown_question"

_QUESTION_SOURCES = [
    "legend",
    "label",
    LinkedInSelectors.RADIO_TITLE,
    LinkedInSelectors.CHECKBOX_TITLE,
    LinkedInSelectors.TEXT_ENTITY_TITLE,
]


def collapse_doubled(text: str) -> str:
    """Collapse text LinkedIn renders twice (visible plus screen-reader copy)."""
    trimmed = text.strip()
    if len(trimmed) < 4:
        return trimmed
    half = len(trimmed) // 2
    if trimmed[:half] == trimmed[half:]:
        return trimmed[:half].strip()
    return trimmed


class BaseFieldHandler(ABC):
    """One field archetype: decides whether it owns a section, then fills it.

    ``handle`` reports filled/not-filled and must contain its own errors;
    the form processor still guards each call.
    """

    field_type: str = "text"

    def __init__(
        self,
        page: Page,
        answerer: Answerer,
        form_utils: FormUtils,
        logger: Optional[logging.LoggerAdapter] = None,
    ) -> None:
        self._page = page
        self._answerer = answerer
        self._utils = form_utils
        self._log = logger or logging.getLogger(type(self).__module__)
        self._retry_mode = False

    @property
    def name(self) -> str:
        return type(self).__name__

    def set_retry_mode(self, enabled: bool) -> None:
        self._retry_mode = enabled

    def bind_logger(self, logger: logging.LoggerAdapter) -> None:
        self._log = logger

    @abstractmethod
    def can_handle(self, section: Locator) -> bool:
        """Return True if this handler owns the section."""

    @abstractmethod
    def handle(self, section: Locator) -> bool:
        """Fill the section. Returns True if filled."""

    def extract_question_text(self, section: Locator) -> str:
        """Question text from legend, label, data-test titles, aria-label, or input name."""
        for selector in _QUESTION_SOURCES:
            try:
                source = section.locator(selector).first
                if source.count() == 0:
                    continue
                text = self._visible_text(source)
                if text:
                    return collapse_doubled(text)
            except Exception:
                continue

        try:
            aria = section.get_attribute("aria-label")
            if aria and aria.strip():
                return collapse_doubled(aria)
        except Exception:
            pass

        try:
            control = section.locator("input, select, textarea").first
            if control.count() > 0:
                name = control.get_attribute("name")
                if name:
                    return name
        except Exception:
            pass

        return UNKNOWN_QUESTION

    def _visible_text(self, locator: Locator) -> str:
        """Text content without screen-reader-only copies."""
        try:
            text = locator.evaluate(
                """(el) => {
                    const clone = el.cloneNode(true);
                    clone.querySelectorAll('.visually-hidden, .sr-only').forEach((e) => e.remove());
                    return clone.textContent;
                }"""
            )
            if isinstance(text, str):
                return text.strip()
        except Exception:
            pass
        return (locator.text_content() or "").strip()

    def resume_value(self, control: Locator, question: str) -> Optional[str]:
        """Contact value from the resume, matched by element attributes then question."""
        matcher = self._utils.resume_matcher
        if matcher is None:
            return None
        value = matcher.match_by_element(control) or matcher.match_by_question(question)
        if value:
            self._log.info(f"From resume: {question[:40]} = {value}")
        return value

    def cached_or(self, question: str, produce: Callable[[], str], field_type: Optional[str] = None) -> str:
        """Saved answer for the question, else a fresh one that gets recorded."""
        kind = field_type or self.field_type
        saved = self._utils.get_saved_answer(kind, question)
        if saved is not None:
            self._log.debug(f"Using saved {kind} answer: {question[:50]}")
            return saved
        answer = produce()
        self._utils.remember_answer(kind, question, answer)
        return answer

    def handle_validation_error(
        self,
        section: Locator,
        question: str,
        previous_answer: str,
        retry: Callable[[str, str, str], Optional[str]],
        apply_answer: Callable[[str], None],
    ) -> bool:
        """Re-answer a field that shows an inline error after filling.

        Returns False only when an error remains and no corrected answer
        could be applied.
        """
        self._page.wait_for_timeout(SHORT_WAIT_MS)
        error = self._utils.extract_field_errors(section)
        if not error:
            return True

        self._log.warning(f"Validation error on {self.field_type} '{question[:50]}': {error}")
        try:
            corrected = retry(question, previous_answer, error)
        except Exception as e:
            self._log.warning(f"Retry answer failed: {e}")
            return False
        if not corrected:
            return False

        apply_answer(corrected)
        self._utils.remember_answer(self.field_type, question, corrected)
        self._log.info(f"Retry answer applied: {corrected[:50]}")
        return True
