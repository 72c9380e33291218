"""Shared fixtures for Easy Apply tests."""
from typing import Callable, Optional
from unittest.mock import MagicMock, Mock

import pytest
from playwright.sync_api import Locator, Page

from easyapply.agent.answer_cache import AnswerCache
from easyapply.agent.form_utils import FormUtils


def create_mock_locator(
    visible: bool = True,
    enabled: bool = True,
    value: str = "",
    text_content: str = "",
    aria_label: Optional[str] = None,
    elem_id: Optional[str] = None,
    placeholder: Optional[str] = None,
    checked: bool = False,
    attr_type: Optional[str] = None,
    name: Optional[str] = None,
    count: Optional[int] = None,
    extra_attrs: Optional[dict[str, Optional[str]]] = None,
) -> Mock:
    """Create a mock Locator with configurable properties.

    ``locator.locator(...)`` returns the locator itself unless a test
    overrides it.
    """
    locator = Mock(spec=Locator)
    locator.is_visible = Mock(return_value=visible)
    locator.is_enabled = Mock(return_value=enabled)
    locator.is_editable = Mock(return_value=enabled)
    locator.input_value = Mock(return_value=value)
    locator.text_content = Mock(return_value=text_content)
    locator.is_checked = Mock(return_value=checked)
    locator.fill = Mock()
    locator.check = Mock()
    locator.uncheck = Mock()
    locator.click = Mock()
    locator.select_option = Mock()
    locator.wait_for = Mock()
    locator.scroll_into_view_if_needed = Mock()
    locator.press_sequentially = Mock()
    locator.set_input_files = Mock()
    locator.evaluate = Mock(return_value=None)
    locator.count = Mock(return_value=(1 if visible else 0) if count is None else count)
    locator.all = Mock(return_value=[locator])
    locator.first = locator
    locator.locator = Mock(return_value=locator)

    attrs = {
        "aria-label": aria_label,
        "id": elem_id,
        "placeholder": placeholder,
        "type": attr_type,
        "name": name,
        "value": value,
    }
    attrs.update(extra_attrs or {})
    locator.get_attribute = Mock(side_effect=lambda attr: attrs.get(attr))
    return locator


def empty_locator() -> Mock:
    """A locator matching nothing."""
    locator = create_mock_locator(visible=False, count=0)
    locator.all = Mock(return_value=[])
    return locator


def selector_router(routes: dict[str, Mock], default: Optional[Mock] = None) -> Callable[[str], Mock]:
    """side_effect for ``locator()`` mapping selectors to locators; unknown ones match nothing."""
    def route(selector: str, *args, **kwargs) -> Mock:
        if selector in routes:
            return routes[selector]
        return default if default is not None else empty_locator()
    return route


@pytest.fixture
def mock_page() -> Mock:
    """Create a mock Playwright page."""
    page = Mock(spec=Page)
    page.locator = Mock(return_value=Mock(spec=Locator))
    page.wait_for_timeout = Mock()
    page.keyboard = Mock()
    page.url = "https://www.linkedin.com/jobs/view/123"
    page.content = Mock(return_value="<html><body>job</body></html>")
    return page


@pytest.fixture
def mock_answerer() -> MagicMock:
    answerer = MagicMock()
    answerer.answer_textual.return_value = "Five years of Python"
    answerer.answer_from_options.return_value = "Yes"
    answerer.answer_numeric.return_value = 5
    answerer.answer_checkbox_question.return_value = "yes"
    answerer.answer_textual_with_retry.return_value = "Corrected"
    answerer.answer_from_options_with_retry.return_value = "No"
    answerer.answer_numeric_with_retry.return_value = 7
    return answerer


@pytest.fixture
def answer_cache() -> AnswerCache:
    return AnswerCache()


@pytest.fixture
def form_utils(mock_page: Mock, answer_cache: AnswerCache) -> FormUtils:
    return FormUtils(mock_page, answer_cache)
