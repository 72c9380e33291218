"""Page helpers shared by the field handlers."""
import itertools
import logging
from typing import Optional

from playwright.sync_api import Locator, Page

from .answer_cache import AnswerCache
from .models import CLICK_TIMEOUT_MS, MAX_CLICK_RETRIES, SHORT_WAIT_MS, VISIBLE_CHECK_TIMEOUT_MS
from .resume_matcher import ResumeFieldMatcher
from .selectors import LinkedInSelectors

logger = logging.getLogger(__name__)

_fallback_ids = itertools.count()


class FormUtils:
    """Answer cache access plus locator helpers for one page."""

    def __init__(
        self,
        page: Page,
        cache: AnswerCache,
        resume_matcher: Optional[ResumeFieldMatcher] = None,
    ) -> None:
        self._page = page
        self._cache = cache
        self._resume_matcher = resume_matcher

    @property
    def page(self) -> Page:
        return self._page

    @property
    def cache(self) -> AnswerCache:
        return self._cache

    @property
    def resume_matcher(self) -> Optional[ResumeFieldMatcher]:
        return self._resume_matcher

    def get_saved_answer(self, field_type: str, question: str) -> Optional[str]:
        return self._cache.get(field_type, question)

    def remember_answer(self, field_type: str, question: str, answer: str) -> None:
        self._cache.remember(field_type, question, answer)

    def safe_click(self, element: Locator, retries: int = MAX_CLICK_RETRIES) -> None:
        """Scroll into view and click, retrying on failure.

        Raises:
            Exception: The last click error once all retries are used.
        """
        for attempt in range(1, retries + 1):
            try:
                element.scroll_into_view_if_needed()
                element.wait_for(state="visible", timeout=CLICK_TIMEOUT_MS)
                element.click()
                return
            except Exception as e:
                if attempt == retries:
                    raise
                logger.debug(f"Click attempt {attempt} failed, retrying: {e}")
                self._page.wait_for_timeout(SHORT_WAIT_MS)

    def click_label(self, control: Locator) -> None:
        """Click the label bound to a radio/checkbox, else force-click the control.

        LinkedIn's labels intercept pointer events on the inputs they wrap.
        """
        try:
            control_id = control.get_attribute("id")
            if control_id:
                label = self._page.locator(f'label[for="{control_id}"]').first
                if label.is_visible(timeout=VISIBLE_CHECK_TIMEOUT_MS):
                    label.click(timeout=CLICK_TIMEOUT_MS)
                    return
        except Exception:
            pass
        control.click(force=True, timeout=CLICK_TIMEOUT_MS)

    def label_text(self, control: Locator) -> str:
        """Text of the ``label[for=id]`` bound to a control, else its ancestor label."""
        try:
            control_id = control.get_attribute("id")
            if control_id:
                label = self._page.locator(f'label[for="{control_id}"]').first
                if label.count() > 0:
                    return (label.text_content() or "").strip()
        except Exception:
            pass
        try:
            parent = control.locator("xpath=ancestor::label").first
            if parent.count() > 0:
                return (parent.text_content() or "").strip()
        except Exception:
            pass
        return ""

    def extract_field_errors(self, section: Locator) -> Optional[str]:
        """First non-empty inline error text inside a section."""
        for selector in LinkedInSelectors.ERROR_SELECTORS:
            try:
                error = section.locator(selector).first
                if error.count() == 0:
                    continue
                text = (error.text_content() or "").strip()
                if text:
                    return text
            except Exception:
                continue
        return None

    def stable_key(self, section: Locator) -> str:
        """Identity of a section that survives re-querying the DOM."""
        try:
            section_id = section.get_attribute("id")
            if section_id:
                return f"id:{section_id}"
            name = section.locator("input, select, textarea").first.get_attribute("name")
            if name:
                return f"name:{name}"
            text = section.text_content() or ""
            return f"text:{text.strip()[:100]}"
        except Exception:
            return f"fallback:{next(_fallback_ids)}"
