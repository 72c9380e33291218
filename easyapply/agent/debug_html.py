"""HTML snapshots of the live page for post-mortem debugging."""
import logging
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

from playwright.sync_api import Page

from ..resume.renderer import sanitize_filename

logger = logging.getLogger(__name__)

DEFAULT_DEBUG_DIR = Path("data/debug_html")
MAX_TITLE_CHARS = 50


def safe_title(title: str) -> str:
    """Filesystem-safe title, capped at 50 chars."""
    return sanitize_filename(title)[:MAX_TITLE_CHARS]


def snapshot_filename(context: str, job_title: str = "", now: Optional[datetime] = None) -> str:
    timestamp = (now or datetime.now()).strftime("%Y-%m-%dT%H-%M-%S")
    title = safe_title(job_title)
    if title:
        return f"{context}_{title}_{timestamp}.html"
    return f"{context}_{timestamp}.html"


class DebugHtmlRecorder:
    """Writes page snapshots under one directory and sweeps old ones."""

    def __init__(self, debug_dir: Optional[Path] = None, enabled: bool = True) -> None:
        self._dir = Path(debug_dir) if debug_dir else DEFAULT_DEBUG_DIR
        self._enabled = enabled

    @property
    def directory(self) -> Path:
        return self._dir

    def save(self, page: Page, context: str, job_title: str = "") -> Optional[Path]:
        """Write the page HTML with a metadata comment header.

        Returns:
            Path of the snapshot, or None if disabled or the write failed.
        """
        if not self._enabled:
            return None
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            path = self._dir / snapshot_filename(context, job_title)
            header = (
                "<!-- Debug HTML Snapshot -->\n"
                f"<!-- Context: {context} -->\n"
                f"<!-- Job Title: {job_title or 'N/A'} -->\n"
                f"<!-- URL: {page.url} -->\n"
                f"<!-- Timestamp: {datetime.now().isoformat()} -->\n\n"
            )
            path.write_text(header + page.content(), encoding="utf-8")
            logger.info(f"Saved debug HTML: {path}")
            return path
        except Exception as e:
            logger.error(f"Failed to save debug HTML: {e}")
            return None

    def cleanup_old_snapshots(self, max_age_days: int = 7) -> int:
        """Delete snapshots older than ``max_age_days``. Returns the number removed."""
        if not self._dir.exists():
            return 0
        cutoff = time.time() - max_age_days * 86400
        removed = 0
        for path in self._dir.glob("*.html"):
            try:
                if path.stat().st_mtime < cutoff:
                    path.unlink()
                    removed += 1
            except OSError as e:
                logger.warning(f"Could not remove {path}: {e}")
        if removed:
            logger.info(f"Removed {removed} old debug snapshot(s)")
        return removed
