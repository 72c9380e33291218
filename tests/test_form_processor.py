"""Tests for FormPageProcessor."""
from unittest.mock import MagicMock, Mock

import pytest

from conftest import create_mock_locator, selector_router
from easyapply.agent.form_processor import FormPageProcessor
from easyapply.agent.selectors import LinkedInSelectors as S


def make_sections(count: int, same_box: bool = False) -> list[Mock]:
    sections = []
    for i in range(count):
        section = create_mock_locator(elem_id=f"section-{i}")
        y = 0 if same_box else i * 80
        section.bounding_box = Mock(return_value={"x": 10, "y": y, "width": 400, "height": 60})
        sections.append(section)
    return sections


def route_sections(page: Mock, sections: list[Mock]) -> None:
    container = create_mock_locator()
    container.all = Mock(return_value=sections)
    page.locator = Mock(side_effect=selector_router({S.FORM_SECTIONS[0]: container}))


def make_handler(results) -> MagicMock:
    handler = MagicMock()
    handler.name = "FakeHandler"
    handler.can_handle.return_value = True
    handler.handle.side_effect = results
    return handler


@pytest.fixture
def build(mock_page, mock_answerer):
    def _build(handlers) -> FormPageProcessor:
        return FormPageProcessor(mock_page, mock_answerer, handlers=handlers)
    return _build


class TestFillCurrentPage:
    def test_one_failure_in_four_is_success(self, mock_page, build) -> None:
        route_sections(mock_page, make_sections(4))
        handler = make_handler([True, True, False, True])

        result = build([handler]).fill_current_page()

        assert result.success is True
        assert result.fields_processed == 4
        assert result.fields_failed == 1
        assert handler.handle.call_count == 4

    def test_half_failed_is_failure(self, mock_page, build) -> None:
        route_sections(mock_page, make_sections(4))
        handler = make_handler([True, False, True, False])

        result = build([handler]).fill_current_page()

        assert result.success is False
        assert result.fields_failed == 2

    def test_handler_exception_counted_once(self, mock_page, build) -> None:
        route_sections(mock_page, make_sections(3))
        handler = make_handler([True, RuntimeError("element detached"), True])

        result = build([handler]).fill_current_page()

        assert result.fields_processed == 3
        assert result.fields_failed == 1
        assert result.errors == ["element detached"]
        assert handler.handle.call_count == 3

    def test_unclaimed_section_not_counted(self, mock_page, build) -> None:
        route_sections(mock_page, make_sections(2))
        handler = make_handler([True])
        handler.can_handle.side_effect = [True, False, False]

        result = build([handler]).fill_current_page()

        assert result.fields_processed == 1
        assert result.success is True

    def test_hidden_section_skipped(self, mock_page, build) -> None:
        sections = make_sections(2)
        sections[1].is_visible = Mock(return_value=False)
        route_sections(mock_page, sections)
        handler = make_handler([True])

        result = build([handler]).fill_current_page()

        assert result.fields_processed == 1

    def test_empty_page_not_accepted(self, mock_page, build) -> None:
        route_sections(mock_page, [])

        result = build([make_handler([])]).fill_current_page()

        assert result.success is False
        assert result.fields_processed == 0


class TestFindSections:
    def test_duplicate_boxes_collapsed(self, mock_page, build) -> None:
        route_sections(mock_page, make_sections(3, same_box=True))

        assert len(build([make_handler([])]).find_sections()) == 1

    def test_sections_without_box_dropped(self, mock_page, build) -> None:
        sections = make_sections(2)
        sections[0].bounding_box = Mock(return_value=None)
        route_sections(mock_page, sections)

        assert build([make_handler([])]).find_sections() == [sections[1]]


class TestProcessorWiring:
    def test_retry_mode_reaches_every_handler(self, build) -> None:
        handlers = [make_handler([]), make_handler([])]
        processor = build(handlers)

        processor.set_retry_mode(True)

        for handler in handlers:
            handler.set_retry_mode.assert_called_once_with(True)

    def test_default_handlers_share_upload_handler(self, mock_page, mock_answerer) -> None:
        processor = FormPageProcessor(mock_page, mock_answerer, resume_path="/tmp/resume.pdf")

        upload = processor.handlers[0]
        processor.set_resume_path("/tmp/other.pdf")

        assert upload.resolve_resume_path() == "/tmp/other.pdf"
