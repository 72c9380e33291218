"""Ordered field handler list: the first handler whose can_handle matches wins."""
import logging
from typing import Optional

from playwright.sync_api import Locator, Page

from ...answerer.base import Answerer
from ..form_utils import FormUtils
from .base_handler import BaseFieldHandler
from .checkbox import CheckboxHandler
from .date import DateHandler
from .dropdown import DropdownHandler
from .file_upload import FileUploadHandler
from .radio import RadioButtonHandler
from .text_input import TextInputHandler
from .textarea import TextareaHandler
from .typeahead import TypeaheadHandler

logger = logging.getLogger(__name__)


def build_default_handlers(
    page: Page,
    answerer: Answerer,
    form_utils: FormUtils,
    file_upload: Optional[FileUploadHandler] = None,
    log: Optional[logging.LoggerAdapter] = None,
) -> list[BaseFieldHandler]:
    """Handlers from most specific to most generic.

    Text input goes last because nearly every section contains an input.
    """
    upload = file_upload or FileUploadHandler(page, answerer, form_utils, logger=log)
    return [
        upload,
        RadioButtonHandler(page, answerer, form_utils, log),
        DropdownHandler(page, answerer, form_utils, log),
        CheckboxHandler(page, answerer, form_utils, log),
        TypeaheadHandler(page, answerer, form_utils, log),
        DateHandler(page, answerer, form_utils, log),
        TextareaHandler(page, answerer, form_utils, log),
        TextInputHandler(page, answerer, form_utils, log),
    ]


def find_handler(handlers: list[BaseFieldHandler], section: Locator) -> Optional[BaseFieldHandler]:
    """First handler claiming the section; a raising can_handle counts as no."""
    for handler in handlers:
        try:
            if handler.can_handle(section):
                return handler
        except Exception as e:
            logger.debug(f"{handler.name}.can_handle raised: {e}")
            continue
    return None
