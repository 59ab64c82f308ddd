"""Validated application form values.

Each section of the form is an immutable pydantic model. A submission is
assembled into :class:`ApplicationForm`, where every section is present and
validated; work in progress travels as :class:`ApplicationDraft`, where any
section may be missing or incomplete.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Applicants must be 18 on the intake cut-off date.
AGE_CUTOFF_DATE = date(2025, 2, 27)
MINIMUM_AGE = 18

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
NIGERIAN_PHONE_PATTERN = r"^\+234\d{10}$"
INTERNATIONAL_PHONE_PATTERN = r"^\+[1-9]\d{1,14}$"


class FormSection(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        str_strip_whitespace=True,
    )


class Disability(FormSection):
    has_disability: bool
    details: Optional[str] = None


class PersonalInfo(FormSection):
    surname: str = Field(min_length=2)
    first_name: str = Field(min_length=2)
    middle_name: Optional[str] = None
    contact_address: str = Field(min_length=10)
    nationality: str = Field(min_length=2)
    state_of_origin: str = Field(min_length=2)
    religion: Optional[str] = None
    phone_number: str = Field(pattern=NIGERIAN_PHONE_PATTERN)
    email: str = Field(pattern=EMAIL_PATTERN)
    date_of_birth: date
    gender: Literal["male", "female", "other"]
    marital_status: Literal["single", "married", "divorced"]
    disability: Disability

    @field_validator("date_of_birth")
    @classmethod
    def _old_enough(cls, value: date) -> date:
        latest = AGE_CUTOFF_DATE.replace(year=AGE_CUTOFF_DATE.year - MINIMUM_AGE)
        if value > latest:
            raise ValueError(
                f"You must be at least {MINIMUM_AGE} years old by {AGE_CUTOFF_DATE:%B %d, %Y}"
            )
        return value

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.surname}"


class Certificate(FormSection):
    type: str
    grade: str
    year: str


class AcademicBackground(FormSection):
    education_level: Literal["none", "primary", "js", "jsse", "ssce", "tertiary"]
    tertiary_education: Optional[
        Literal["none", "certificate", "national_diploma", "degree", "other"]
    ] = None
    certificates: tuple[Certificate, ...] = ()


class ProgramSelection(FormSection):
    program: str = Field(min_length=1)
    course: str = Field(min_length=1)
    start_date: str = Field(min_length=1)
    study_mode: Literal["full-time", "part-time", "weekend"]
    previous_experience: Optional[str] = None
    career_goals: str = Field(min_length=10, max_length=500)


class SponsorDetails(FormSection):
    name: str = Field(min_length=2)
    relationship: str = Field(min_length=2)
    contact: str = Field(min_length=5)


class Accommodation(FormSection):
    needs_accommodation: bool
    sponsorship_type: Literal["self", "organization", "guardian"]
    sponsor_details: SponsorDetails


class Referee(FormSection):
    name: str = Field(min_length=2)
    address: str = Field(min_length=10)
    phone: str = Field(pattern=INTERNATIONAL_PHONE_PATTERN)
    email: str = Field(pattern=EMAIL_PATTERN)
    relationship: str = Field(min_length=2)


SECTION_NAMES = (
    "personal_info",
    "academic_background",
    "program_selection",
    "accommodation",
    "referee",
)


class ApplicationForm(FormSection):
    """A complete application, ready for submission."""

    kind: Literal["final"] = "final"
    personal_info: PersonalInfo
    academic_background: AcademicBackground
    program_selection: ProgramSelection
    accommodation: Accommodation
    referee: Referee

    def sections(self) -> dict[str, dict[str, Any]]:
        return {
            name: getattr(self, name).model_dump(mode="json", by_alias=True)
            for name in SECTION_NAMES
        }


class ApplicationDraft(FormSection):
    """A partially filled application; sections are stored as entered."""

    kind: Literal["draft"] = "draft"
    personal_info: Optional[dict[str, Any]] = None
    academic_background: Optional[dict[str, Any]] = None
    program_selection: Optional[dict[str, Any]] = None
    accommodation: Optional[dict[str, Any]] = None
    referee: Optional[dict[str, Any]] = None

    def sections(self) -> dict[str, dict[str, Any]]:
        return {name: dict(getattr(self, name) or {}) for name in SECTION_NAMES}
