"""Claude-backed answerer for application questions and resume tailoring."""
import json
import logging
import re
from typing import Optional

from anthropic import Anthropic, APIError

from ..agent.answer_cache import find_best_match
from .base import AnswererError, TailoredResumeText
from .prompts import (
    KEYWORDS_PROMPT,
    NUMERIC_PROMPT,
    SYSTEM_PROMPT,
    TEXTUAL_PROMPT,
    build_options_prompt,
    build_retry_prompt,
    build_scores_json,
    build_tailor_prompt,
)

logger = logging.getLogger(__name__)

LANGUAGE_NAMES: dict[str, str] = {
    "en": "English",
    "fr": "French",
    "de": "German",
    "es": "Spanish",
    "it": "Italian",
    "pt": "Portuguese",
    "nl": "Dutch",
    "pl": "Polish",
    "sv": "Swedish",
    "da": "Danish",
    "no": "Norwegian",
    "fi": "Finnish",
}

_NUMBER = re.compile(r"-?\d+")


def strip_code_fence(content: str) -> str:
    """Remove a surrounding markdown code block from a model reply."""
    if "```" not in content:
        return content.strip()
    inner = content.split("```")[1]
    first_line, _, rest = inner.partition("\n")
    if first_line.strip().isalpha():
        inner = rest
    return inner.strip()


def extract_number(text: str, default: int) -> int:
    match = _NUMBER.search(text)
    return int(match.group(0)) if match else default


class ClaudeAnswerer:
    """Answers form questions from the candidate's resume using Claude.

    Transient API failures are retried by the Anthropic client itself,
    up to ``max_retries`` times with backoff.
    """

    def __init__(
        self,
        resume_text: str,
        model: str = "claude-sonnet-4-20250514",
        max_tokens: int = 4096,
        max_retries: int = 2,
        language: str = "en",
        client: Optional[Anthropic] = None,
    ) -> None:
        self.model = model
        self.max_tokens = max_tokens
        self.max_retries = max_retries
        self.language = language
        self._resume_text = resume_text
        self._job_context = "N/A"
        self._client = client or Anthropic(max_retries=max_retries)

    @property
    def language_name(self) -> str:
        return LANGUAGE_NAMES.get(self.language, "English")

    def set_job_context(self, context: str) -> None:
        self._job_context = context or "N/A"

    def _system_prompt(self) -> str:
        return SYSTEM_PROMPT.format(
            resume=self._resume_text,
            job_context=self._job_context,
            language=self.language_name,
        )

    def _complete(self, prompt: str, system: Optional[str] = None) -> str:
        """Send one user prompt and return the stripped reply text.

        Raises:
            AnswererError: If the API call fails.
        """
        try:
            response = self._client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                system=system if system is not None else self._system_prompt(),
                messages=[{"role": "user", "content": prompt}],
            )
        except APIError as e:
            logger.warning(f"Claude request failed: {e}")
            raise AnswererError(f"Claude request failed: {e}") from e
        content = response.content[0].text
        logger.debug(f"Claude response: {content[:200]}")
        return content.strip()

    def answer_textual(self, question: str) -> str:
        answer = self._complete(TEXTUAL_PROMPT.format(question=question))
        logger.info(f"Textual answer ({len(answer)} chars): {question[:50]}")
        return answer

    def answer_from_options(self, question: str, options: list[str]) -> str:
        reply = self._complete(build_options_prompt(question, options))
        return find_best_match(reply, options)

    def answer_numeric(self, question: str, default: int = 3) -> int:
        reply = self._complete(NUMERIC_PROMPT.format(question=question, default=default))
        return extract_number(reply, default)

    def answer_checkbox_question(self, prompt: str) -> str:
        return self._complete(prompt)

    def answer_textual_with_retry(
        self, question: str, previous_answer: str, error_message: str
    ) -> str:
        return self._complete(build_retry_prompt(question, previous_answer, error_message))

    def answer_from_options_with_retry(
        self, question: str, options: list[str], previous_answer: str, error_message: str
    ) -> str:
        reply = self._complete(
            build_retry_prompt(question, previous_answer, error_message, options)
        )
        return find_best_match(reply, options)

    def answer_numeric_with_retry(
        self, question: str, previous_answer: str, error_message: str, default: int = 3
    ) -> int:
        reply = self._complete(build_retry_prompt(question, previous_answer, error_message))
        return extract_number(reply, default)

    def tailor_resume(
        self, job_description: str, base_resume_yaml: str, language: Optional[str] = None
    ) -> TailoredResumeText:
        """Extract job keywords, then rewrite the resume YAML around them.

        Keyword extraction is best-effort; the rewrite is not.
        """
        target_language = LANGUAGE_NAMES.get(language or self.language, "English")
        system = "You are an expert resume writer. Follow the output format exactly."

        keywords: dict = {}
        try:
            raw = self._complete(KEYWORDS_PROMPT.format(job_description=job_description), system)
            parsed = json.loads(strip_code_fence(raw))
            if isinstance(parsed, dict):
                keywords = parsed
        except (AnswererError, json.JSONDecodeError) as e:
            logger.warning(f"Keyword extraction failed, tailoring without keywords: {e}")

        rewritten = self._complete(
            build_tailor_prompt(job_description, base_resume_yaml, keywords, target_language),
            system,
        )
        yaml_text = strip_code_fence(rewritten)
        scores = build_scores_json(keywords, yaml_text) if keywords else None
        return TailoredResumeText(yaml_text=yaml_text, scores=scores)
