"""Tests for job description language detection."""
from types import SimpleNamespace
from unittest.mock import patch

from langdetect import LangDetectException

from easyapply.agent.language import detect_language, is_language_accepted

LONG_TEXT = "x" * 150


def candidate(lang: str, prob: float) -> SimpleNamespace:
    return SimpleNamespace(lang=lang, prob=prob)


class TestDetectLanguage:
    def test_short_text_is_undetected(self) -> None:
        assert detect_language("Python developer") is None
        assert detect_language("") is None

    def test_confident_supported_language(self) -> None:
        with patch("easyapply.agent.language.detect_langs", return_value=[candidate("fr", 0.97)]):
            assert detect_language(LONG_TEXT) == "fr"

    def test_low_confidence_is_undetected(self) -> None:
        with patch("easyapply.agent.language.detect_langs", return_value=[candidate("de", 0.6)]):
            assert detect_language(LONG_TEXT) is None

    def test_unsupported_language_is_undetected(self) -> None:
        with patch("easyapply.agent.language.detect_langs", return_value=[candidate("ja", 0.99)]):
            assert detect_language(LONG_TEXT) is None

    def test_detector_error_is_undetected(self) -> None:
        error = LangDetectException(0, "No features in text.")
        with patch("easyapply.agent.language.detect_langs", side_effect=error):
            assert detect_language(LONG_TEXT) is None

    def test_real_english_description(self) -> None:
        text = (
            "We are looking for a backend engineer to join our platform team. You will design "
            "and build reliable services, work closely with product managers, and help us scale "
            "our data pipelines to millions of users every day."
        )

        assert detect_language(text) == "en"


class TestIsLanguageAccepted:
    def test_empty_allow_list_accepts_everything(self) -> None:
        assert is_language_accepted("fr", []) is True

    def test_undetected_language_accepted(self) -> None:
        assert is_language_accepted(None, ["en"]) is True

    def test_case_insensitive(self) -> None:
        assert is_language_accepted("en", ["EN", "de"]) is True

    def test_rejects_unlisted(self) -> None:
        assert is_language_accepted("fr", ["en", "de"]) is False
