"""
Applicant Profile Data Models
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# Sentinel test type used by the intake form when no French test was taken
NO_TEST_SENTINEL = "None"

# Resume-derived figures may arrive as text ("5+") and are kept as written
LooseNumber = Union[float, str]


class UserType(str, Enum):
    """Applicant category selecting which analysis instructions apply."""

    STUDENT = "Student"
    SKILLED_WORKER = "Skilled Worker"


class LanguageTestDetails(BaseModel):
    """Result of a single language test (IELTS, CELPIP, TEF, TCF, ...)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    test_type: str
    overall_score: float
    reading: float
    writing: float
    listening: float
    speaking: float

    def is_sentinel(self) -> bool:
        """True when the form recorded that no test was taken."""
        return self.test_type == NO_TEST_SENTINEL


class UserProfile(BaseModel):
    """Applicant profile as submitted for analysis.

    Attributes:
        name: Applicant name
        age: Age in years
        country_of_residence: Current country of residence
        education_level: Highest completed education (e.g. "Bachelor's")
        field_of_study: Field of the highest credential
        work_experience_years: Years of skilled work experience
        savings: Personal savings
        settlement_funds: Funds available for settlement
        english_score: Overall English score when only a single number is known
        language_details: English test breakdown
        french_details: French test breakdown (test_type "None" when absent)
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: Optional[str] = None
    age: Optional[int] = None
    country_of_residence: Optional[str] = None
    education_level: Optional[str] = None
    field_of_study: Optional[str] = None
    work_experience_years: Optional[LooseNumber] = None
    savings: Optional[float] = None
    settlement_funds: Optional[float] = None
    english_score: Optional[LooseNumber] = None
    language_details: Optional[LanguageTestDetails] = None
    french_details: Optional[LanguageTestDetails] = None

    def merge(self, partial: "PartialUserProfile") -> "UserProfile":
        """Return a copy with resume-extracted fields filling the gaps.

        Values the applicant already entered are kept; a field from
        ``partial`` is applied only where this profile has None.
        """
        missing = {
            field: value
            for field, value in partial.model_dump(exclude_none=True).items()
            if getattr(self, field) is None
        }
        return self.model_copy(update=missing)


class PartialUserProfile(BaseModel):
    """Fields extracted from an uploaded resume; anything not found stays None."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: Optional[str] = None
    country_of_residence: Optional[str] = None
    education_level: Optional[str] = None
    field_of_study: Optional[str] = None
    work_experience_years: Optional[LooseNumber] = None
    english_score: Optional[LooseNumber] = None

    def is_empty(self) -> bool:
        """Check whether nothing was extracted.

        Returns:
            True if every field is None
        """
        return not self.model_dump(exclude_none=True)


class ResumeExtraction(BaseModel):
    """Raw shape of the resume parsing reply, keyed as the model returns it."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    name: Optional[str] = None
    country: Optional[str] = None
    education_level: Optional[str] = None
    field_of_study: Optional[str] = None
    work_experience_years: Optional[LooseNumber] = None
    english_score: Optional[LooseNumber] = None

    def to_partial_profile(self) -> PartialUserProfile:
        """Map reply fields onto the profile shape.

        An empty or missing ``country`` becomes None, never an empty string.
        """
        return PartialUserProfile(
            name=self.name,
            country_of_residence=self.country or None,
            education_level=self.education_level,
            field_of_study=self.field_of_study,
            work_experience_years=self.work_experience_years,
            english_score=self.english_score,
        )

