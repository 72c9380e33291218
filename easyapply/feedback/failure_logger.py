from __future__ import annotations

import json
import logging
import threading
from collections import Counter
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Literal

logger = logging.getLogger(__name__)

FailureType = Literal[
    "modal_not_opened",
    "validation_error",
    "navigation_error",
    "max_pages",
    "crash",
]

DEFAULT_LOG_PATH = Path("data/failures.jsonl")


@dataclass
class JobFailure:
    timestamp: str
    job_url: str
    job_title: str
    company: str
    failure_type: FailureType
    error: str
    details: dict[str, Any]
    page_snapshot: str | None = None


def classify_failure(error: str | None) -> FailureType:
    """Map an EasyApplyResult error message to a failure type."""
    text = (error or "").lower()
    if "could not open" in text:
        return "modal_not_opened"
    if "validation" in text:
        return "validation_error"
    if "exceeded maximum pages" in text:
        return "max_pages"
    if "navigation" in text or "no primary button" in text:
        return "navigation_error"
    return "crash"


def new_failure(
    job_url: str,
    job_title: str,
    company: str,
    error: str | None,
    details: dict[str, Any] | None = None,
    page_snapshot: str | None = None,
) -> JobFailure:
    return JobFailure(
        timestamp=datetime.now().isoformat(),
        job_url=job_url,
        job_title=job_title,
        company=company,
        failure_type=classify_failure(error),
        error=error or "",
        details=details or {},
        page_snapshot=page_snapshot,
    )


class FailureLogger:
    def __init__(self, log_path: Path | None = None) -> None:
        self._log_path = Path(log_path) if log_path else DEFAULT_LOG_PATH
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._log_path

    def log(self, failure: JobFailure) -> None:
        self._log_path.parent.mkdir(parents=True, exist_ok=True)
        line = json.dumps(asdict(failure), default=str) + "\n"
        with self._lock:
            with open(self._log_path, "a", encoding="utf-8") as f:
                f.write(line)

    def read_all(self) -> list[JobFailure]:
        if not self._log_path.exists():
            return []

        failures: list[JobFailure] = []
        with open(self._log_path, "r", encoding="utf-8") as f:
            for line_num, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    failures.append(JobFailure(**json.loads(line)))
                except (json.JSONDecodeError, TypeError) as e:
                    logger.warning(f"Skipping malformed line {line_num}: {e}")
        return failures

    def counts_by_type(self) -> dict[str, int]:
        return dict(Counter(failure.failure_type for failure in self.read_all()))
