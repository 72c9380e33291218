"""Field handlers for Easy Apply form sections."""
from .base_handler import UNKNOWN_QUESTION, BaseFieldHandler
from .checkbox import CheckboxHandler
from .date import DateHandler
from .dropdown import DropdownHandler
from .file_upload import FileUploadHandler
from .radio import RadioButtonHandler
from .registry import build_default_handlers, find_handler
from .text_input import TextInputHandler
from .textarea import TextareaHandler
from .typeahead import TypeaheadHandler

__all__ = [
    "UNKNOWN_QUESTION",
    "BaseFieldHandler",
    "CheckboxHandler",
    "DateHandler",
    "DropdownHandler",
    "FileUploadHandler",
    "RadioButtonHandler",
    "TextInputHandler",
    "TextareaHandler",
    "TypeaheadHandler",
    "build_default_handlers",
    "find_handler",
]
