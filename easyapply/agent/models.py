"""Easy Apply models, enums, and constants."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


# Timeouts
PAGE_LOAD_TIMEOUT_MS: int = 60000
ELEMENT_TIMEOUT_MS: int = 10000
CLICK_TIMEOUT_MS: int = 8000
VISIBLE_CHECK_TIMEOUT_MS: int = 1000
SPINNER_TIMEOUT_MS: int = 5000
BUTTON_DETACH_TIMEOUT_MS: int = 5000
MODAL_VISIBLE_TIMEOUT_MS: int = 10000
SHORT_WAIT_MS: int = 500
MEDIUM_WAIT_MS: int = 1500
LONG_WAIT_MS: int = 2500
POST_SUBMIT_WAIT_MS: int = 2000
UPLOAD_WAIT_MS: int = 2000
FORM_READY_WAIT_MS: int = 250
SCROLL_SETTLE_MS: int = 150

# Retry counts
MAX_NAVIGATION_RETRIES: int = 3
MAX_CLICK_RETRIES: int = 3
MAX_MODAL_OPEN_ATTEMPTS: int = 3

# Form discovery
FORM_SCROLL_STEP_PX: int = 300
MAX_FORM_PASSES: int = 10
MAX_DROPDOWN_OPTIONS: int = 100
JOB_CONTEXT_DESCRIPTION_CHARS: int = 500


class ModalState(Enum):
    """Classification of the Easy Apply dialog, read from the live DOM."""
    FORM = "form"
    REVIEW = "review"
    SUBMIT = "submit"
    SUCCESS = "success"
    ERROR = "error"
    CLOSED = "closed"
    UNKNOWN = "unknown"


class ModalOpenOutcome(Enum):
    """Result of trying to open the Easy Apply dialog."""
    OPENED = "opened"
    ALREADY_APPLIED = "already_applied"
    FAILED = "failed"


@dataclass
class Job:
    """A job posting. Description and language are filled during apply()."""
    title: str
    company: str
    link: str
    location: str = ""
    description: Optional[str] = None
    detected_language: Optional[str] = None


@dataclass(frozen=True)
class SavedAnswer:
    """A previously answered question."""
    question_type: str
    question_text: str
    answer: str


@dataclass
class NavigationResult:
    """Outcome of clicking the dialog's primary button."""
    success: bool
    submitted: bool = False
    state: ModalState = ModalState.UNKNOWN
    error: Optional[str] = None


@dataclass
class FormPageResult:
    """Outcome of filling one dialog page."""
    success: bool = True
    fields_processed: int = 0
    fields_failed: int = 0
    errors: list[str] = field(default_factory=list)


@dataclass
class EasyApplyResult:
    """Accumulated result of one apply() call."""
    job_title: str
    company: str
    success: bool = False
    already_applied: bool = False
    language_skipped: bool = False
    detected_language: Optional[str] = None
    pages_completed: int = 0
    total_fields: int = 0
    failed_fields: int = 0
    dry_run: bool = False
    error: Optional[str] = None
