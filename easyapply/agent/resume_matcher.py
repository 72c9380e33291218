"""Contact and school answers taken straight from the candidate's resume."""
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Optional

import yaml
from playwright.sync_api import Locator

from .answer_cache import contains_phrase, normalize_text, rank_options

logger = logging.getLogger(__name__)

_PHONE_PREFIX = re.compile(r"^\s*(\+\d{1,3})[\s.\-]*(\S.*)$")
_WORD_SPLIT = re.compile(r"[\s\-(),]+")

URL_KEYWORDS = ("website", "url", "portfolio", "personal site", "github", "linkedin")
SCHOOL_KEYWORDS = ("school", "university", "college", "institution")
SCHOOL_STOP_WORDS = {"university", "universite", "institut", "institute", "ecole", "college", "school"}
MIN_SCHOOL_WORD_CHARS = 5


def split_phone(phone: str) -> tuple[str, str]:
    """Split ``+33 6 12 34 56 78`` into ``("+33", "6 12 34 56 78")``.

    Numbers without an international prefix come back as ``("", phone)``.
    """
    match = _PHONE_PREFIX.match(phone or "")
    if not match:
        return "", (phone or "").strip()
    return match.group(1), match.group(2).strip()


@dataclass
class PersonalInfo:
    """The resume fields forms ask for directly."""
    email: str = ""
    phone: str = ""
    city: str = ""
    linkedin: str = ""
    github: str = ""
    website: str = ""
    schools: list[str] = field(default_factory=list)

    @property
    def phone_prefix(self) -> str:
        return split_phone(self.phone)[0]

    @property
    def phone_national(self) -> str:
        return split_phone(self.phone)[1]

    @classmethod
    def from_resume(cls, data: dict[str, Any]) -> "PersonalInfo":
        """Read a JSON Resume style mapping, or the older plain-resume keys."""
        basics = data.get("basics") or data.get("personal_information") or {}
        education = data.get("education") or data.get("education_details") or []

        location = basics.get("location")
        if isinstance(location, dict):
            city = location.get("city") or ""
        else:
            city = basics.get("city") or ""

        profiles = {
            str(p.get("network", "")).lower(): p.get("url") or ""
            for p in basics.get("profiles") or []
            if isinstance(p, dict)
        }
        schools = [
            str(edu.get("institution") or edu.get("university") or "")
            for edu in education
            if isinstance(edu, dict)
        ]
        return cls(
            email=str(basics.get("email") or ""),
            phone=str(basics.get("phone") or ""),
            city=str(city),
            linkedin=profiles.get("linkedin") or str(basics.get("linkedin") or ""),
            github=profiles.get("github") or str(basics.get("github") or ""),
            website=str(basics.get("url") or ""),
            schools=[s for s in schools if s],
        )


class ResumeFieldMatcher:
    """Answers contact, link and school questions from :class:`PersonalInfo`."""

    def __init__(self, info: PersonalInfo) -> None:
        self._info = info

    @classmethod
    def from_resume_yaml(cls, text: str) -> "ResumeFieldMatcher":
        """Build from resume YAML; unreadable YAML gives a matcher that never matches."""
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as e:
            logger.warning(f"Resume YAML unreadable, contact fields go to the answerer: {e}")
            data = {}
        if not isinstance(data, dict):
            data = {}
        return cls(PersonalInfo.from_resume(data))

    @property
    def info(self) -> PersonalInfo:
        return self._info

    def match_by_element(self, control: Locator) -> Optional[str]:
        """Value for a field recognised by its id or name attribute."""
        try:
            if control.count() == 0:
                return None
            element_id = (control.get_attribute("id") or "").lower()
            element_name = (control.get_attribute("name") or "").lower()
        except Exception as e:
            logger.debug(f"Could not read field attributes: {e}")
            return None

        info = self._info
        if "geo-location" in element_id or "location-geo" in element_id or "location" in element_name:
            if info.city:
                return info.city
        if "phonenumber-nationalnumber" in element_id or "phone-national" in element_id:
            if info.phone_national:
                return info.phone_national
        elif "phone" in element_name and info.phone:
            return info.phone
        if ("email" in element_id or "email" in element_name) and info.email:
            return info.email
        return None

    def match_by_question(self, question: str) -> Optional[str]:
        """Value for a field recognised by whole words in its question."""
        text = normalize_text(question)
        info = self._info

        if any(contains_phrase(text, keyword) for keyword in URL_KEYWORDS):
            url = self._url_for(text)
            if url:
                return url
        if contains_phrase(text, "phone") and not contains_phrase(text, "prefix") and info.phone:
            return info.phone
        if (contains_phrase(text, "city") or contains_phrase(text, "location")) and info.city:
            return info.city
        if (contains_phrase(text, "email") or contains_phrase(text, "e-mail")) and info.email:
            return info.email
        return None

    def match_school(self, question: str, options: list[str]) -> Optional[str]:
        """Dropdown option naming one of the resume's schools, for school questions only."""
        text = normalize_text(question)
        if not any(keyword in text for keyword in SCHOOL_KEYWORDS):
            return None

        normalized = [normalize_text(o) for o in options]
        for school in self._info.schools:
            ranked = rank_options(school, options)
            if ranked:
                return options[ranked[0]]

            words = [
                w for w in _WORD_SPLIT.split(normalize_text(school))
                if len(w) >= MIN_SCHOOL_WORD_CHARS and w not in SCHOOL_STOP_WORDS
            ]
            for word in words:
                for option, norm in zip(options, normalized):
                    if contains_phrase(norm, word):
                        return option
        return None

    def _url_for(self, question: str) -> Optional[str]:
        info = self._info
        if contains_phrase(question, "github") and info.github:
            return info.github
        if contains_phrase(question, "linkedin") and info.linkedin:
            return info.linkedin
        return info.website or info.github or info.linkedin or None
