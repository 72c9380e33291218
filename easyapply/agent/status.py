"""Progress reporting for the Easy Apply run."""
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Protocol

logger = logging.getLogger(__name__)


class Activity(Enum):
    """Fixed vocabulary of heartbeat activities, also used as log context."""

    NAVIGATING_TO_JOB = "navigating_to_job"
    EXTRACTING_DESCRIPTION = "extracting_description"
    DETECTING_LANGUAGE = "detecting_language"
    TAILORING_RESUME = "tailoring_resume"
    OPENING_APPLICATION = "opening_application"
    FILLING_FORM = "filling_form"
    SUBMITTING_APPLICATION = "submitting_application"
    APPLICATION_SUBMITTED = "application_submitted"
    APPLICATION_FAILED = "application_failed"
    SKIPPING_JOB = "skipping_job"


class StatusSink(Protocol):
    """Receives progress from the applier. Implementations must not raise."""

    def send_heartbeat(self, activity: Activity, details: Optional[dict[str, Any]] = None) -> None:
        ...

    def increment_jobs_applied(self) -> None:
        ...

    def increment_jobs_failed(self) -> None:
        ...


@dataclass
class ApplyStats:
    """Counters for one run.

    Attributes:
        jobs_applied: Applications submitted.
        jobs_failed: Applications that failed (skips excluded).
        last_activity: Most recent heartbeat activity.
    """

    jobs_applied: int = 0
    jobs_failed: int = 0
    last_activity: Optional[Activity] = None


class LoggingStatusReporter:
    """Default sink: logs heartbeats and keeps counters."""

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self._log = log or logger
        self._lock = threading.Lock()
        self._stats = ApplyStats()

    @property
    def stats(self) -> ApplyStats:
        with self._lock:
            return ApplyStats(
                jobs_applied=self._stats.jobs_applied,
                jobs_failed=self._stats.jobs_failed,
                last_activity=self._stats.last_activity,
            )

    def send_heartbeat(self, activity: Activity, details: Optional[dict[str, Any]] = None) -> None:
        with self._lock:
            self._stats.last_activity = activity
        suffix = ""
        if details:
            suffix = " " + ", ".join(f"{key}={value}" for key, value in details.items())
        self._log.info(f"[{activity.value}]{suffix}")

    def increment_jobs_applied(self) -> None:
        with self._lock:
            self._stats.jobs_applied += 1

    def increment_jobs_failed(self) -> None:
        with self._lock:
            self._stats.jobs_failed += 1
