"""Tailored resume generation."""
from .renderer import PdfRenderer, render_resume_html, sanitize_filename
from .retention import prune_tailored_resumes
from .tailoring import (
    PendingResume,
    ResumeTailoringPipeline,
    TailoredResume,
    TailoringError,
    validate_tailored_yaml,
)

__all__ = [
    "PdfRenderer",
    "PendingResume",
    "ResumeTailoringPipeline",
    "TailoredResume",
    "TailoringError",
    "prune_tailored_resumes",
    "render_resume_html",
    "sanitize_filename",
    "validate_tailored_yaml",
]
