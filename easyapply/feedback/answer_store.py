"""JSONL persistence for answers given to application questions."""
from __future__ import annotations

import json
import logging
import threading
from dataclasses import asdict
from pathlib import Path

from ..agent.models import SavedAnswer

logger = logging.getLogger(__name__)

DEFAULT_ANSWERS_PATH = Path("data/answers.jsonl")


class AnswerStore:
    """Appends each recorded answer and loads them back for the next run.

    ``record`` has the answer-callback signature, so the store can be handed
    straight to the applier.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = Path(path) if path else DEFAULT_ANSWERS_PATH
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def record(self, question_type: str, question_text: str, answer: str) -> None:
        entry = SavedAnswer(question_type=question_type, question_text=question_text, answer=answer)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        line = json.dumps(asdict(entry), ensure_ascii=False) + "\n"
        with self._lock:
            with open(self._path, "a", encoding="utf-8") as f:
                f.write(line)

    def load(self) -> list[SavedAnswer]:
        """Saved answers; a later entry for the same question replaces an earlier one."""
        if not self._path.exists():
            return []

        latest: dict[tuple[str, str], SavedAnswer] = {}
        with open(self._path, "r", encoding="utf-8") as f:
            for line_num, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    entry = SavedAnswer(**json.loads(line))
                except (json.JSONDecodeError, TypeError) as e:
                    logger.warning(f"Skipping malformed answer on line {line_num}: {e}")
                    continue
                latest[(entry.question_type.lower(), entry.question_text.strip().lower())] = entry
        return list(latest.values())
