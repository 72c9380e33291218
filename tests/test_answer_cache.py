"""Tests for AnswerCache and answer normalization."""
from unittest.mock import Mock

import pytest

from easyapply.agent.answer_cache import AnswerCache, contains_phrase, find_best_match, normalize_text, rank_options
from easyapply.agent.models import SavedAnswer


class TestNormalizeText:
    def test_lowercases_and_collapses_whitespace(self) -> None:
        assert normalize_text("  Years   of\nExperience ") == "years of experience"

    def test_strips_accents(self) -> None:
        assert normalize_text("Résumé Çà") == "resume ca"


class TestFindBestMatch:
    OPTIONS = ["Yes", "No", "Prefer not to say"]

    def test_exact_match(self) -> None:
        assert find_best_match("  yes ", self.OPTIONS) == "Yes"

    def test_containment(self) -> None:
        assert find_best_match("I would prefer not to say", self.OPTIONS) == "Prefer not to say"

    def test_closest_by_similarity(self) -> None:
        assert find_best_match("Bachelors", ["Bachelor's Degree", "Master's Degree", "PhD"]) == "Bachelor's Degree"

    def test_short_option_needs_whole_word(self) -> None:
        assert find_best_match("No, I do not", self.OPTIONS) == "No"
        assert rank_options("I would rather not answer", self.OPTIONS) == []

    def test_longest_containing_option_wins(self) -> None:
        options = ["Degree", "Bachelor's Degree", "Master's Degree"]

        assert find_best_match("Bachelor's degree in physics", options) == "Bachelor's Degree"

    def test_answer_inside_option(self) -> None:
        assert find_best_match("London", ["Paris, France", "London, United Kingdom"]) == "London, United Kingdom"

    def test_no_options_returns_answer(self) -> None:
        assert find_best_match("anything", []) == "anything"


class TestContainsPhrase:
    def test_whole_words_only(self) -> None:
        assert contains_phrase("prefer not to say", "no") is False
        assert contains_phrase("no, thanks", "no") is True

    def test_phrase_with_punctuation(self) -> None:
        assert contains_phrase("skills: c++ and go", "c++") is True

    def test_empty_phrase(self) -> None:
        assert contains_phrase("anything", "") is False


class TestAnswerCache:
    @pytest.fixture
    def cache(self) -> AnswerCache:
        return AnswerCache([
            SavedAnswer("text", "How many years of Python experience do you have?", "6"),
            SavedAnswer("radio", "Do you require visa sponsorship?", "No"),
        ])

    def test_exact_hit_ignores_case_and_spacing(self, cache: AnswerCache) -> None:
        assert cache.get("TEXT", "how many years of  python experience do you have?") == "6"

    def test_partial_hit(self, cache: AnswerCache) -> None:
        assert cache.get("radio", "Do you require visa sponsorship? *") == "No"

    def test_field_type_scopes_lookup(self, cache: AnswerCache) -> None:
        assert cache.get("dropdown", "Do you require visa sponsorship?") is None

    def test_empty_question_misses(self, cache: AnswerCache) -> None:
        assert cache.get("text", "   ") is None

    def test_remember_calls_callback(self) -> None:
        callback = Mock()
        cache = AnswerCache(record_callback=callback)

        cache.remember("text", "City", "Berlin")

        assert cache.get("text", "city") == "Berlin"
        callback.assert_called_once_with("text", "City", "Berlin")
        assert len(cache) == 1

    def test_callback_error_does_not_propagate(self) -> None:
        cache = AnswerCache(record_callback=Mock(side_effect=OSError("disk full")))

        cache.remember("text", "City", "Berlin")

        assert cache.get("text", "City") == "Berlin"
