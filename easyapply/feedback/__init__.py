from .answer_store import AnswerStore
from .failure_logger import FailureLogger, FailureType, JobFailure, classify_failure, new_failure

__all__ = [
    "AnswerStore",
    "FailureLogger",
    "FailureType",
    "JobFailure",
    "classify_failure",
    "new_failure",
]
