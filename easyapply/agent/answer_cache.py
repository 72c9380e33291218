"""Normalized lookup of previously saved answers."""
import logging
import re
import unicodedata
from difflib import SequenceMatcher
from typing import Callable, Iterable, Optional

from .models import SavedAnswer

logger = logging.getLogger(__name__)

AnswerRecordCallback = Callable[[str, str, str], None]

_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Lowercase, strip accents, and collapse whitespace."""
    decomposed = unicodedata.normalize("NFD", text.lower())
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return _WHITESPACE.sub(" ", stripped).strip()


def contains_phrase(text: str, phrase: str) -> bool:
    """True if ``phrase`` occurs in ``text`` as whole words."""
    if not phrase:
        return False
    return re.search(rf"(?<!\w){re.escape(phrase)}(?!\w)", text) is not None


def rank_options(answer: str, options: list[str]) -> list[int]:
    """Indexes of options matching ``answer``, best first.

    Exact normalized matches come first, then options that contain the
    answer or are contained in it as whole words, longest option first.
    Options matching neither way are left out.
    """
    target = normalize_text(answer)
    if not target:
        return []
    normalized = [normalize_text(o) for o in options]
    exact = [i for i, norm in enumerate(normalized) if norm == target]
    partial = [
        i for i, norm in enumerate(normalized)
        if i not in exact and norm and (contains_phrase(target, norm) or contains_phrase(norm, target))
    ]
    partial.sort(key=lambda i: len(normalized[i]), reverse=True)
    return exact + partial


def find_best_match(answer: str, options: list[str]) -> str:
    """Map a free-form answer onto the closest of the given options.

    Exact normalized match wins, then the longest whole-word containment
    either way, then the highest SequenceMatcher ratio.
    """
    if not options:
        return answer
    ranked = rank_options(answer, options)
    if ranked:
        return options[ranked[0]]

    target = normalize_text(answer)
    normalized = [normalize_text(o) for o in options]
    scored = [
        (SequenceMatcher(None, target, norm).ratio(), option)
        for option, norm in zip(options, normalized)
    ]
    return max(scored, key=lambda pair: pair[0])[1]


class AnswerCache:
    """Saved answers keyed by ``field_type:normalized question``.

    New answers are added in memory and forwarded to the record callback;
    persistence is the callback owner's concern.
    """

    def __init__(
        self,
        saved_answers: Iterable[SavedAnswer] = (),
        record_callback: Optional[AnswerRecordCallback] = None,
    ) -> None:
        self._answers: dict[str, str] = {}
        self._record_callback = record_callback
        for saved in saved_answers:
            self._answers[self._key(saved.question_type, saved.question_text)] = saved.answer
        logger.info(f"Loaded {len(self._answers)} saved answers")

    def __len__(self) -> int:
        return len(self._answers)

    @staticmethod
    def _key(field_type: str, question: str) -> str:
        return f"{field_type.lower()}:{normalize_text(question)}"

    def get(self, field_type: str, question: str) -> Optional[str]:
        """Return a saved answer by exact key, then by substring overlap."""
        exact_key = self._key(field_type, question)
        if exact_key in self._answers:
            logger.debug(f"Cache hit (exact): {question[:50]}")
            return self._answers[exact_key]

        prefix = f"{field_type.lower()}:"
        wanted = exact_key[len(prefix):]
        if not wanted:
            return None
        for key, answer in self._answers.items():
            if not key.startswith(prefix):
                continue
            saved_question = key[len(prefix):]
            if saved_question and (saved_question in wanted or wanted in saved_question):
                logger.debug(f"Cache hit (partial): {question[:50]}")
                return answer
        return None

    def remember(self, field_type: str, question: str, answer: str) -> None:
        """Store a new answer and report it through the record callback."""
        self._answers[self._key(field_type, question)] = answer
        if self._record_callback is None:
            return
        try:
            self._record_callback(field_type, question, answer)
        except Exception as e:
            logger.error(f"Failed to record answer for '{question[:50]}': {e}")
