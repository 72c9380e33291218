"""Radio button groups."""
from typing import Optional

from playwright.sync_api import Locator

from ..answer_cache import rank_options
from ..models import SHORT_WAIT_MS
from ..selectors import LinkedInSelectors
from .base_handler import BaseFieldHandler


class RadioButtonHandler(BaseFieldHandler):
    """Picks one option of a radio group by its label text."""

    field_type = "radio"

    def can_handle(self, section: Locator) -> bool:
        try:
            return section.locator(LinkedInSelectors.RADIO).count() > 0
        except Exception:
            return False

    def handle(self, section: Locator) -> bool:
        try:
            radios = section.locator(LinkedInSelectors.RADIO).all()
            if not radios:
                return False

            question = self.extract_question_text(section)
            labelled = self._labelled_options(section, radios)
            if not labelled:
                self._log.warning(f"No options found for radio group: {question[:50]}")
                return False
            options = [text for text, _ in labelled]

            answer = self.cached_or(
                question, lambda: self._answerer.answer_from_options(question, options)
            )
            if not answer or not answer.strip():
                self._log.warning(f"No answer for radio question: {question[:50]}")
                return False

            if not self._select(labelled, answer):
                self._log.warning(f"No option matches '{answer}' for: {question[:50]}")
                return False
            self._log.info(f"Radio: {question[:40]} = {answer}")

            self.handle_validation_error(
                section,
                question,
                answer,
                lambda q, prev, err: self._answerer.answer_from_options_with_retry(q, options, prev, err),
                lambda corrected: self._select(labelled, corrected),
            )
            return True
        except Exception as e:
            self._log.error(f"Error handling radio buttons: {e}")
            return False

    def _labelled_options(self, section: Locator, radios: list[Locator]) -> list[tuple[str, Locator]]:
        labelled: list[tuple[str, Locator]] = []
        for radio in radios:
            try:
                radio_id = radio.get_attribute("id")
                if not radio_id:
                    continue
                label = section.locator(f'label[for="{radio_id}"]').first
                if label.count() == 0:
                    continue
                text = (label.text_content() or "").strip()
                if text:
                    labelled.append((text, label))
            except Exception:
                continue
        return labelled

    def _select(self, labelled: list[tuple[str, Locator]], answer: str) -> bool:
        label = self._match(labelled, answer)
        if label is None:
            return False
        self._utils.safe_click(label)
        self._page.wait_for_timeout(SHORT_WAIT_MS)
        return True

    @staticmethod
    def _match(labelled: list[tuple[str, Locator]], answer: str) -> Optional[Locator]:
        ranked = rank_options(answer, [text for text, _ in labelled])
        if not ranked:
            return None
        return labelled[ranked[0]][1]
