"""Answerer capability consumed by the form handlers and tailoring pipeline."""
from dataclasses import dataclass
from typing import Optional, Protocol


class AnswererError(Exception):
    """Raised when an answer could not be produced."""


@dataclass
class TailoredResumeText:
    """Rewritten resume YAML plus optional per-item relevance scores."""
    yaml_text: str
    scores: Optional[dict] = None


class Answerer(Protocol):
    """Produces answers to application questions.

    Implementations may raise; callers treat any exception as "no answer".
    """

    def set_job_context(self, context: str) -> None: ...

    def answer_textual(self, question: str) -> str: ...

    def answer_from_options(self, question: str, options: list[str]) -> str: ...

    def answer_numeric(self, question: str, default: int = 3) -> int: ...

    def answer_checkbox_question(self, prompt: str) -> str: ...

    def answer_textual_with_retry(
        self, question: str, previous_answer: str, error_message: str
    ) -> str: ...

    def answer_from_options_with_retry(
        self, question: str, options: list[str], previous_answer: str, error_message: str
    ) -> str: ...

    def answer_numeric_with_retry(
        self, question: str, previous_answer: str, error_message: str, default: int = 3
    ) -> int: ...

    def tailor_resume(
        self, job_description: str, base_resume_yaml: str, language: Optional[str] = None
    ) -> TailoredResumeText: ...
