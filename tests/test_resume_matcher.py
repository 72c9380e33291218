"""Tests for ResumeFieldMatcher."""
import pytest

from conftest import create_mock_locator
from easyapply.agent.resume_matcher import PersonalInfo, ResumeFieldMatcher, split_phone

RESUME_YAML = """\
basics:
  name: Ada Lovelace
  email: ada@example.com
  phone: "+44 20 7946 0958"
  url: https://ada.dev
  location:
    city: London
  profiles:
    - network: GitHub
      url: https://github.com/ada
    - network: LinkedIn
      url: https://www.linkedin.com/in/ada
education:
  - institution: University of London
    studyType: BSc
  - institution: Imperial College London
"""


@pytest.fixture
def matcher() -> ResumeFieldMatcher:
    return ResumeFieldMatcher.from_resume_yaml(RESUME_YAML)


class TestPersonalInfo:
    def test_reads_json_resume_keys(self, matcher: ResumeFieldMatcher) -> None:
        info = matcher.info

        assert info.email == "ada@example.com"
        assert info.city == "London"
        assert info.github == "https://github.com/ada"
        assert info.linkedin == "https://www.linkedin.com/in/ada"
        assert info.schools == ["University of London", "Imperial College London"]

    def test_reads_plain_resume_keys(self) -> None:
        info = PersonalInfo.from_resume({
            "personal_information": {"email": "bob@example.com", "city": "Lyon", "github": "https://github.com/bob"},
            "education_details": [{"university": "Universite de Lyon"}],
        })

        assert info.city == "Lyon"
        assert info.github == "https://github.com/bob"
        assert info.schools == ["Universite de Lyon"]

    def test_split_phone(self) -> None:
        assert split_phone("+33 6 12 34 56 78") == ("+33", "6 12 34 56 78")
        assert split_phone("020 7946 0958") == ("", "020 7946 0958")

    def test_bad_yaml_never_matches(self) -> None:
        matcher = ResumeFieldMatcher.from_resume_yaml("basics: [unclosed")

        assert matcher.match_by_question("Email address") is None


class TestMatchByElement:
    def test_national_phone_number(self, matcher: ResumeFieldMatcher) -> None:
        field = create_mock_locator(elem_id="single-line-text-form-component-phoneNumber-nationalNumber")

        assert matcher.match_by_element(field) == "20 7946 0958"

    def test_full_phone_by_name(self, matcher: ResumeFieldMatcher) -> None:
        assert matcher.match_by_element(create_mock_locator(name="phone")) == "+44 20 7946 0958"

    def test_city_by_geo_location_id(self, matcher: ResumeFieldMatcher) -> None:
        field = create_mock_locator(elem_id="typeahead-geo-location-input")

        assert matcher.match_by_element(field) == "London"

    def test_email(self, matcher: ResumeFieldMatcher) -> None:
        assert matcher.match_by_element(create_mock_locator(elem_id="form-email-input")) == "ada@example.com"

    def test_unrelated_field(self, matcher: ResumeFieldMatcher) -> None:
        assert matcher.match_by_element(create_mock_locator(elem_id="years-python")) is None


class TestMatchByQuestion:
    def test_github_url(self, matcher: ResumeFieldMatcher) -> None:
        assert matcher.match_by_question("GitHub profile URL") == "https://github.com/ada"

    def test_generic_website_prefers_personal_site(self, matcher: ResumeFieldMatcher) -> None:
        assert matcher.match_by_question("Portfolio website") == "https://ada.dev"

    def test_phone_but_not_prefix(self, matcher: ResumeFieldMatcher) -> None:
        assert matcher.match_by_question("Mobile phone number") == "+44 20 7946 0958"
        assert matcher.match_by_question("Phone country prefix") is None

    def test_city(self, matcher: ResumeFieldMatcher) -> None:
        assert matcher.match_by_question("Current city") == "London"

    def test_relocation_is_not_location(self, matcher: ResumeFieldMatcher) -> None:
        assert matcher.match_by_question("Are you open to relocation?") is None

    def test_other_questions_left_to_answerer(self, matcher: ResumeFieldMatcher) -> None:
        assert matcher.match_by_question("Years of Python experience") is None


class TestMatchSchool:
    def test_exact_school(self, matcher: ResumeFieldMatcher) -> None:
        options = ["Oxford University", "University of London", "Other"]

        assert matcher.match_school("Which university did you attend?", options) == "University of London"

    def test_significant_word(self, matcher: ResumeFieldMatcher) -> None:
        options = ["King's College", "Imperial (ICL)", "Other"]

        assert matcher.match_school("School", options) == "Imperial (ICL)"

    def test_only_for_school_questions(self, matcher: ResumeFieldMatcher) -> None:
        assert matcher.match_school("Highest degree", ["University of London"]) is None

    def test_no_school_in_options(self, matcher: ResumeFieldMatcher) -> None:
        assert matcher.match_school("School", ["Sorbonne", "Other"]) is None
