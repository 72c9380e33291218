"""Background resume tailoring for one job at a time."""
import json
import logging
import threading
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Optional

import yaml

from .renderer import PdfRenderer, render_resume_html, sanitize_filename
from .retention import prune_tailored_resumes

if TYPE_CHECKING:
    from ..agent.models import Job
    from ..answerer.base import Answerer

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = Path("data/tailored_resumes")
DEFAULT_MAX_WORKERS = 2


class TailoringError(Exception):
    """A tailoring step failed; the applier falls back to the base resume."""


@dataclass
class TailoredResume:
    """Files written for one tailored resume."""
    yaml_path: Path
    pdf_path: Path
    scores_path: Optional[Path] = None


class PendingResume:
    """Handle on a tailoring task running in the background.

    ``join`` is the only synchronisation point. A handle that is never
    joined is abandoned with ``cancel``: a queued task never starts and a
    running one stops before its next step.
    """

    def __init__(
        self,
        future: "Future[Optional[TailoredResume]]",
        cancelled: Optional[threading.Event] = None,
    ) -> None:
        self._future = future
        self._cancelled = cancelled or threading.Event()

    @property
    def done(self) -> bool:
        return self._future.done()

    def join(self, timeout: Optional[float] = None) -> Optional[TailoredResume]:
        """Wait up to ``timeout`` seconds; None on timeout, failure or cancel."""
        if self._cancelled.is_set():
            return None
        try:
            return self._future.result(timeout=timeout)
        except CancelledError:
            return None
        except FutureTimeoutError:
            logger.warning(f"Tailored resume not ready after {timeout}s")
            return None
        except Exception as e:
            logger.warning(f"Tailored resume failed: {e}")
            return None

    def cancel(self) -> None:
        """Abandon the task; a later join returns None."""
        self._cancelled.set()
        if self._future.cancel():
            logger.debug("Queued tailoring task cancelled")

    def result_or_none(self) -> Optional[TailoredResume]:
        """Result if already finished, without waiting."""
        if not self._future.done():
            return None
        return self.join(0)


def validate_tailored_yaml(tailored: str, base: str, min_ratio: float = 0.3) -> dict:
    """Parse the tailored YAML and reject output that looks truncated.

    Raises:
        TailoringError: Not a mapping, much shorter than the base, or
            missing one of the base's top-level sections.
    """
    try:
        data = yaml.safe_load(tailored)
    except yaml.YAMLError as e:
        raise TailoringError(f"Tailored resume is not valid YAML: {e}") from e
    if not isinstance(data, dict):
        raise TailoringError("Tailored resume is not a YAML mapping")

    if len(tailored) < len(base) * min_ratio:
        raise TailoringError(
            f"Tailored resume looks truncated ({len(tailored)} of {len(base)} chars)"
        )

    base_data = yaml.safe_load(base)
    if isinstance(base_data, dict):
        missing = [key for key in base_data if key not in data]
        if missing:
            raise TailoringError(f"Tailored resume is missing sections: {', '.join(map(str, missing))}")
    return data


def _check_cancelled(cancelled: threading.Event, job: "Job") -> None:
    if cancelled.is_set():
        raise TailoringError(f"Tailoring for {job.company} was abandoned")


class ResumeTailoringPipeline:
    """Rewrites the base resume for a job and renders it to PDF off the main thread."""

    def __init__(
        self,
        answerer: "Answerer",
        base_resume_yaml: Path,
        output_dir: Optional[Path] = None,
        keep_latest: int = 50,
        min_ratio: float = 0.3,
        language: Optional[str] = None,
        renderer: Optional[PdfRenderer] = None,
        executor: Optional[ThreadPoolExecutor] = None,
    ) -> None:
        self._answerer = answerer
        self._base_resume_yaml = Path(base_resume_yaml)
        self._output_dir = Path(output_dir) if output_dir else DEFAULT_OUTPUT_DIR
        self._keep_latest = keep_latest
        self._min_ratio = min_ratio
        self._language = language
        self._renderer = renderer or PdfRenderer()
        self._executor = executor or ThreadPoolExecutor(
            max_workers=DEFAULT_MAX_WORKERS, thread_name_prefix="tailoring"
        )

    def start(self, job: "Job", description: str) -> PendingResume:
        """Submit tailoring for ``job`` and return immediately."""
        logger.info(f"Tailoring resume in background for {job.company} - {job.title}")
        cancelled = threading.Event()
        future = self._executor.submit(self.generate_tailored_resume, job, description, cancelled)
        return PendingResume(future, cancelled)

    def generate_tailored_resume(
        self,
        job: "Job",
        description: str,
        cancelled: Optional[threading.Event] = None,
    ) -> Optional[TailoredResume]:
        """Run every step; any failure is logged and yields None.

        When ``cancelled`` is set between steps the task stops without
        writing anything further.
        """
        try:
            return self._generate(job, description, cancelled or threading.Event())
        except Exception as e:
            logger.warning(f"Resume tailoring failed for {job.company}: {e}")
            return None

    def _generate(self, job: "Job", description: str, cancelled: threading.Event) -> TailoredResume:
        try:
            base = self._base_resume_yaml.read_text(encoding="utf-8")
        except OSError as e:
            raise TailoringError(f"Cannot read base resume {self._base_resume_yaml}: {e}") from e

        language = job.detected_language or self._language
        _check_cancelled(cancelled, job)
        tailored = self._answerer.tailor_resume(description, base, language)
        _check_cancelled(cancelled, job)
        data = validate_tailored_yaml(tailored.yaml_text, base, self._min_ratio)

        self._output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y-%m-%dT%H-%M-%S")
        stem = f"{sanitize_filename(job.company)}_{sanitize_filename(job.title)}_{timestamp}"
        yaml_path = self._output_dir / f"{stem}.yaml"
        pdf_path = self._output_dir / f"{stem}.pdf"

        yaml_path.write_text(tailored.yaml_text, encoding="utf-8")
        logger.info(f"Saved tailored config: {yaml_path}")

        scores_path = None
        if tailored.scores:
            scores_path = self._output_dir / f"{stem}_scores.json"
            scores_path.write_text(json.dumps(tailored.scores, indent=2), encoding="utf-8")

        _check_cancelled(cancelled, job)
        html = render_resume_html(data, job.company, job.title)
        self._renderer.render(html, pdf_path)
        logger.info(f"Tailored resume generated: {pdf_path}")

        prune_tailored_resumes(self._output_dir, self._keep_latest)
        return TailoredResume(yaml_path=yaml_path, pdf_path=pdf_path, scores_path=scores_path)

    def shutdown(self) -> None:
        """Stop accepting work without waiting for a running task."""
        self._executor.shutdown(wait=False, cancel_futures=True)
