"""LinkedIn Easy Apply engine."""
from .answer_cache import AnswerCache, find_best_match
from .debug_html import DebugHtmlRecorder
from .easy_applier import EasyApplier
from .form_processor import FormPageProcessor
from .job_page import JobPage
from .models import (
    EasyApplyResult,
    FormPageResult,
    Job,
    ModalOpenOutcome,
    ModalState,
    NavigationResult,
    SavedAnswer,
)
from .navigation import NavigationController
from .resume_matcher import PersonalInfo, ResumeFieldMatcher
from .status import Activity, LoggingStatusReporter, StatusSink

__all__ = [
    "Activity",
    "AnswerCache",
    "DebugHtmlRecorder",
    "EasyApplier",
    "EasyApplyResult",
    "FormPageProcessor",
    "FormPageResult",
    "Job",
    "JobPage",
    "LoggingStatusReporter",
    "ModalOpenOutcome",
    "ModalState",
    "NavigationController",
    "NavigationResult",
    "PersonalInfo",
    "ResumeFieldMatcher",
    "SavedAnswer",
    "StatusSink",
    "find_best_match",
]
