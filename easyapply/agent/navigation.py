"""Easy Apply dialog navigation: state detection and the primary button."""
import logging
from typing import Optional

from playwright.sync_api import Locator, Page

from .models import (
    BUTTON_DETACH_TIMEOUT_MS,
    CLICK_TIMEOUT_MS,
    ELEMENT_TIMEOUT_MS,
    MEDIUM_WAIT_MS,
    SHORT_WAIT_MS,
    SPINNER_TIMEOUT_MS,
    VISIBLE_CHECK_TIMEOUT_MS,
    ModalState,
    NavigationResult,
)
from .selectors import LinkedInSelectors

logger = logging.getLogger(__name__)

S = LinkedInSelectors


class NavigationController:
    """Reads the dialog state from the live DOM and advances through it.

    State is never cached: every call re-reads the page, so the controller
    is safe to use after any click or re-render.
    """

    def __init__(self, page: Page, log: Optional[logging.LoggerAdapter] = None) -> None:
        self._page = page
        self._log = log or logger

    def bind_logger(self, log: logging.LoggerAdapter) -> None:
        self._log = log

    def _modal(self) -> Optional[Locator]:
        for selector in S.MODAL_CONTAINERS:
            try:
                modal = self._page.locator(selector).first
                if modal.count() > 0:
                    return modal
            except Exception:
                continue
        return None

    def _is_shown(self, selector: str) -> bool:
        button = self._page.locator(selector).first
        return button.count() > 0 and button.is_visible()

    def _any_visible(self, selector: str) -> bool:
        return any(element.is_visible() for element in self._page.locator(selector).all())

    def is_modal_open(self) -> bool:
        try:
            modal = self._modal()
            return modal is not None and modal.is_visible()
        except Exception:
            return False

    def get_modal_state(self) -> ModalState:
        """Classify the dialog: closed, success, submit, review, form, error, unknown."""
        try:
            modal = self._modal()
            if modal is None:
                return ModalState.CLOSED

            text = (modal.text_content() or "").lower()
            if "application" in text and ("sent" in text or "submitted" in text):
                return ModalState.SUCCESS

            if self._is_shown(S.SUBMIT_STATE_BUTTON):
                return ModalState.SUBMIT
            if self._is_shown(S.REVIEW_STATE_BUTTON):
                return ModalState.REVIEW
            if self._is_shown(S.NEXT_STATE_BUTTON):
                return ModalState.FORM
            if self._any_visible(S.INLINE_ERROR):
                return ModalState.ERROR
            return ModalState.UNKNOWN
        except Exception as e:
            self._log.error(f"Error getting modal state: {e}")
            return ModalState.UNKNOWN

    def click_primary_button(self) -> NavigationResult:
        """Click whichever of Next, Review or Submit the dialog currently offers.

        Returns:
            NavigationResult. ``submitted`` is set only for a Submit click
            after which the dialog closed or shows the success message.
        """
        try:
            button, label = self._find_primary_button()
            if button is None:
                if not self.is_modal_open():
                    self._log.info("Dialog closed, application complete")
                    return NavigationResult(success=True, submitted=True, state=ModalState.CLOSED)
                self._log.warning("No primary button found")
                return NavigationResult(
                    success=False, state=self.get_modal_state(), error="No primary button found"
                )

            is_submit = "submit" in label.lower()
            if is_submit:
                self.uncheck_follow_company()
                self._log.info("Submitting application")
            else:
                self._log.debug(f"Clicking primary button: {label}")

            button.click(timeout=CLICK_TIMEOUT_MS)
            self._page.wait_for_timeout(MEDIUM_WAIT_MS)

            if self.has_validation_errors():
                self._log.warning("Validation errors after clicking primary button")
                return NavigationResult(
                    success=False, submitted=False, state=ModalState.ERROR, error="Validation errors"
                )

            self._handle_save_dialog()
            self._wait_for_detach(button)

            state = self.get_modal_state()
            if is_submit:
                submitted = state in (ModalState.CLOSED, ModalState.SUCCESS)
                if submitted:
                    self._log.info("Application submitted")
                else:
                    self._log.warning(f"Submit clicked but dialog is in state: {state.value}")
                return NavigationResult(success=True, submitted=submitted, state=state)

            self._log.debug(f"Advanced to state: {state.value}")
            return NavigationResult(success=True, state=state)
        except Exception as e:
            self._log.error(f"Error clicking primary button: {e}")
            return NavigationResult(success=False, state=ModalState.ERROR, error=str(e))

    def _find_primary_button(self) -> tuple[Optional[Locator], str]:
        container = self._button_container()
        for selector in S.PRIMARY_BUTTONS:
            try:
                button = container.locator(selector).first
                if button.count() == 0:
                    continue
                if not button.is_visible() or not button.is_enabled():
                    continue
                label = button.get_attribute("aria-label") or button.text_content() or ""
                return button, label.strip()
            except Exception:
                continue
        return None, ""

    def _button_container(self) -> Locator | Page:
        """Dialog footer, else the dialog, else the whole page."""
        try:
            footer = self._page.locator(S.MODAL_FOOTER).first
            if footer.count() > 0:
                return footer
        except Exception:
            pass
        modal = self._modal()
        return modal if modal is not None else self._page

    def uncheck_follow_company(self) -> None:
        """Clear the "follow company" box LinkedIn pre-checks on the last page."""
        try:
            checkbox = self._page.locator(S.FOLLOW_CHECKBOX).first
            if checkbox.count() == 0 or not checkbox.is_checked():
                return
            label = self._page.locator(S.FOLLOW_LABEL).first
            if label.count() > 0:
                label.click(timeout=CLICK_TIMEOUT_MS)
            else:
                checkbox.uncheck(timeout=CLICK_TIMEOUT_MS)
            self._log.debug("Unchecked follow company")
        except Exception as e:
            self._log.debug(f"Could not uncheck follow company: {e}")

    def _handle_save_dialog(self) -> None:
        try:
            dialog = self._page.locator(S.SAVE_DIALOG).first
            if dialog.count() == 0 or not dialog.is_visible(timeout=VISIBLE_CHECK_TIMEOUT_MS):
                return
            self._log.info("Save application prompt shown, saving")
            self._page.locator(S.SAVE_BUTTON).first.click(timeout=CLICK_TIMEOUT_MS)
            dialog.wait_for(state="hidden", timeout=ELEMENT_TIMEOUT_MS)
            self._page.locator(S.MODAL).first.wait_for(state="visible", timeout=ELEMENT_TIMEOUT_MS)
        except Exception as e:
            self._log.debug(f"Save prompt handling: {e}")

    def _wait_for_detach(self, button: Locator) -> None:
        try:
            button.wait_for(state="detached", timeout=BUTTON_DETACH_TIMEOUT_MS)
        except Exception:
            self._log.debug("Primary button did not detach, continuing")

    def close_modal(self) -> bool:
        """Dismiss the dialog, confirming Discard if asked."""
        try:
            dismiss = self._page.locator(S.DISMISS_BUTTON).first
            if dismiss.count() > 0:
                dismiss.click(timeout=CLICK_TIMEOUT_MS)
            else:
                self._page.keyboard.press("Escape")
            self._page.wait_for_timeout(SHORT_WAIT_MS)
            self._confirm_discard()
            return True
        except Exception as e:
            self._log.error(f"Error closing modal: {e}")
            return False

    def _confirm_discard(self) -> None:
        try:
            button = self._page.locator(S.DIALOG_PRIMARY_BUTTON).first
            if button.count() == 0:
                return
            if "discard" in (button.text_content() or "").lower():
                button.click(timeout=CLICK_TIMEOUT_MS)
                self._page.wait_for_timeout(SHORT_WAIT_MS)
                self._log.debug("Discarded application draft")
        except Exception:
            pass

    def has_validation_errors(self) -> bool:
        return bool(self.get_validation_errors())

    def get_validation_errors(self) -> list[str]:
        """Visible, non-empty inline error texts in the dialog."""
        errors: list[str] = []
        for selector in S.VALIDATION_ERRORS:
            try:
                for element in self._page.locator(selector).all():
                    if not element.is_visible():
                        continue
                    text = (element.text_content() or "").strip()
                    if text and text not in errors:
                        errors.append(text)
            except Exception:
                continue
        return errors

    def wait_for_modal_ready(self) -> None:
        try:
            self._page.locator(S.SPINNER).wait_for(state="hidden", timeout=SPINNER_TIMEOUT_MS)
        except Exception:
            self._log.debug("Spinner still visible, continuing")
        self._page.wait_for_timeout(SHORT_WAIT_MS)
