"""Job description language detection."""
import logging
from typing import Optional, Sequence

from langdetect import DetectorFactory, LangDetectException, detect_langs

logger = logging.getLogger(__name__)

MIN_TEXT_LENGTH = 100
MIN_PROBABILITY = 0.8
SUPPORTED_LANGUAGES = ["en", "fr", "de", "es", "it", "pt", "nl", "pl", "sv", "da", "no", "fi"]

DetectorFactory.seed = 0


def detect_language(text: str) -> Optional[str]:
    """ISO 639-1 code of the text, or None when short, ambiguous, or unsupported."""
    if not text or len(text.strip()) < MIN_TEXT_LENGTH:
        logger.debug("Text too short for language detection")
        return None
    try:
        candidates = detect_langs(text)
    except LangDetectException as e:
        logger.warning(f"Language detection failed: {e}")
        return None

    if not candidates:
        return None
    best = candidates[0]
    if best.prob < MIN_PROBABILITY:
        logger.debug(f"Low confidence language detection: {best.lang} ({best.prob:.2f})")
        return None
    if best.lang not in SUPPORTED_LANGUAGES:
        logger.debug(f"Unsupported language detected: {best.lang}")
        return None
    return best.lang


def is_language_accepted(detected: Optional[str], accepted: Sequence[str]) -> bool:
    """An empty allow-list or a failed detection accepts the job."""
    if not accepted or detected is None:
        return True
    return detected.lower() in {code.lower() for code in accepted}
