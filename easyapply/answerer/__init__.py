"""Answer generation for application questions."""
from .base import Answerer, AnswererError, TailoredResumeText
from .claude import ClaudeAnswerer

__all__ = ["Answerer", "AnswererError", "TailoredResumeText", "ClaudeAnswerer"]
