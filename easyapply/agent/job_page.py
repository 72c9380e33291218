"""LinkedIn job page: navigation, description, and opening the Easy Apply dialog."""
import logging
from typing import Callable, Optional

from playwright.sync_api import Locator, Page

from .models import (
    ELEMENT_TIMEOUT_MS,
    MAX_MODAL_OPEN_ATTEMPTS,
    MAX_NAVIGATION_RETRIES,
    MEDIUM_WAIT_MS,
    MODAL_VISIBLE_TIMEOUT_MS,
    PAGE_LOAD_TIMEOUT_MS,
    ModalOpenOutcome,
)
from .navigation import NavigationController
from .selectors import LinkedInSelectors

logger = logging.getLogger(__name__)

S = LinkedInSelectors

BUTTON_ATTACH_TIMEOUT_MS = 3000
SHOW_MORE_WAIT_MS = 350
MODAL_HIDDEN_RETRY_WAIT_MS = 2000
MODAL_ABSENT_RETRY_WAIT_MS = 3000
JOB_PAGE_SETTLE_MS = 1000

Snapshot = Callable[[str], None]


class JobPage:
    """Job-posting operations performed before the form loop starts."""

    def __init__(
        self,
        page: Page,
        navigation: NavigationController,
        snapshot: Optional[Snapshot] = None,
        log: Optional[logging.LoggerAdapter] = None,
    ) -> None:
        self._page = page
        self._nav = navigation
        self._snapshot = snapshot or (lambda context: None)
        self._log = log or logger

    def bind_logger(self, log: logging.LoggerAdapter) -> None:
        self._log = log

    def goto(self, url: str, max_retries: int = MAX_NAVIGATION_RETRIES) -> bool:
        """Navigate with retries. LinkedIn's SPA routing often aborts goto() mid-flight.

        Returns:
            True once the page (or an aborted navigation that still landed) loaded.

        Raises:
            Exception: The last navigation error when every retry failed.
        """
        for attempt in range(max_retries):
            try:
                self._log.debug(f"Navigating to job page: {url} (attempt {attempt + 1})")
                self._page.goto(url, wait_until="domcontentloaded", timeout=PAGE_LOAD_TIMEOUT_MS)
                self._page.wait_for_timeout(JOB_PAGE_SETTLE_MS)
                return True
            except Exception as e:
                message = str(e).lower()
                if "aborted" in message:
                    self._log.warning(f"Navigation aborted (attempt {attempt + 1}): {e}")
                    self._page.wait_for_timeout(MEDIUM_WAIT_MS)
                    if url.split("?")[0] in self._page.url:
                        self._log.info("Navigation succeeded despite abort")
                        return True
                if attempt == max_retries - 1:
                    self._log.error(f"Navigation failed after {max_retries} attempts: {e}")
                    raise
                self._log.warning(f"Navigation failed (attempt {attempt + 1}): {e}")
                self._page.wait_for_timeout(MEDIUM_WAIT_MS)
        return False

    def get_job_description(self) -> str:
        """Description text through the selector chain, "" if none matched."""
        try:
            more = self._page.locator(S.SHOW_MORE).first
            if more.is_visible():
                more.click()
                self._page.wait_for_timeout(SHOW_MORE_WAIT_MS)
        except Exception:
            pass

        try:
            self._page.locator(S.JOB_DESCRIPTION[0]).first.wait_for(
                state="attached", timeout=ELEMENT_TIMEOUT_MS
            )
        except Exception:
            self._log.debug("Primary description container not found")

        for selector in S.JOB_DESCRIPTION:
            try:
                container = self._page.locator(selector).first
                if container.count() == 0:
                    continue
                text = (container.text_content() or "").strip()
                if text:
                    self._log.debug(f"Description found via {selector} ({len(text)} chars)")
                    return text
            except Exception:
                continue

        self._log.warning("Could not find job description using any selector")
        return ""

    def is_already_applied(self) -> bool:
        for selector in S.ALREADY_APPLIED:
            try:
                indicator = self._page.locator(selector).first
                if indicator.count() > 0 and indicator.is_visible():
                    text = (indicator.text_content() or "").strip()
                    self._log.info(f"Job already applied (indicator: {text})")
                    return True
            except Exception:
                continue
        return False

    def has_easy_apply(self) -> bool:
        return self.find_easy_apply_button() is not None

    def find_easy_apply_button(self) -> Optional[Locator]:
        """First visible and enabled Easy Apply control across localized selectors."""
        for selector in S.EASY_APPLY_BUTTONS:
            try:
                buttons = self._page.locator(selector)
                try:
                    buttons.first.wait_for(state="attached", timeout=BUTTON_ATTACH_TIMEOUT_MS)
                except Exception:
                    pass
                for button in buttons.all():
                    try:
                        if button.is_visible() and button.is_enabled():
                            self._log.info(f"Found Easy Apply button: {selector}")
                            return button
                    except Exception:
                        continue
            except Exception as e:
                self._log.debug(f"Selector {selector} failed: {e}")
                continue
        return None

    def open_easy_apply_modal(self) -> ModalOpenOutcome:
        """Open the dialog and wait until it is ready for input."""
        try:
            if self.is_already_applied():
                return ModalOpenOutcome.ALREADY_APPLIED

            button = self.find_easy_apply_button()
            if button is None:
                self._log.warning("Easy Apply button not found with any selector")
                self._snapshot("button_not_found")
                return ModalOpenOutcome.FAILED

            href = button.get_attribute("href")
            if href:
                self._log.info(f"Navigating to apply URL: {href}")
                self._page.goto(href, wait_until="domcontentloaded", timeout=PAGE_LOAD_TIMEOUT_MS)
            else:
                button.click()

            if not self._wait_for_modal():
                self._log.error(f"Easy Apply modal did not appear after {MAX_MODAL_OPEN_ATTEMPTS} attempts")
                self._snapshot("modal_not_opened")
                return ModalOpenOutcome.FAILED

            self._nav.wait_for_modal_ready()
            self._snapshot("modal_opened")
            return ModalOpenOutcome.OPENED
        except Exception as e:
            self._log.error(f"Failed to open Easy Apply modal: {e}")
            self._snapshot("modal_open_error")
            return ModalOpenOutcome.FAILED

    def _wait_for_modal(self) -> bool:
        for attempt in range(1, MAX_MODAL_OPEN_ATTEMPTS + 1):
            last = attempt == MAX_MODAL_OPEN_ATTEMPTS
            modal = self._page.locator(S.MODAL)
            if modal.count() == 0:
                self._log.debug(f"Modal not in DOM yet (attempt {attempt})")
                if not last:
                    self._page.wait_for_timeout(MODAL_ABSENT_RETRY_WAIT_MS)
                continue
            try:
                modal.first.wait_for(state="visible", timeout=MODAL_VISIBLE_TIMEOUT_MS)
                self._log.info("Easy Apply modal is visible")
                return True
            except Exception:
                self._log.debug(f"Modal present but hidden (attempt {attempt})")
                if not last:
                    self._page.wait_for_timeout(MODAL_HIDDEN_RETRY_WAIT_MS)
        return False
