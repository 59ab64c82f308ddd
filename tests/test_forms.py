"""Validation rules of the application form."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from admissions.modules.applications import ApplicationDraft, ApplicationForm


def _with(form_data, section: str, **changes):
    form_data[section].update(changes)
    return form_data


def test_valid_form_serializes_sections_in_camel_case(form_data):
    form = ApplicationForm.model_validate(form_data)

    sections = form.sections()

    assert set(sections) == {
        "personal_info",
        "academic_background",
        "program_selection",
        "accommodation",
        "referee",
    }
    assert sections["personal_info"]["dateOfBirth"] == "2000-05-14"
    assert sections["accommodation"]["sponsorDetails"]["name"] == "Ngozi Okafor"
    assert form.personal_info.full_name == "Chidinma Okafor"
    assert form.kind == "final"


@pytest.mark.parametrize(
    ("date_of_birth", "valid"),
    [("2007-02-27", True), ("2007-02-28", False), ("1990-01-01", True)],
)
def test_applicant_must_be_eighteen_by_cutoff(form_data, date_of_birth, valid):
    data = _with(form_data, "personalInfo", dateOfBirth=date_of_birth)
    if valid:
        ApplicationForm.model_validate(data)
    else:
        with pytest.raises(ValidationError, match="at least 18 years old"):
            ApplicationForm.model_validate(data)


@pytest.mark.parametrize("phone", ["08012345678", "+23480123", "+2348012345678901"])
def test_applicant_phone_must_be_nigerian(form_data, phone):
    with pytest.raises(ValidationError):
        ApplicationForm.model_validate(_with(form_data, "personalInfo", phoneNumber=phone))


def test_referee_phone_accepts_international_numbers(form_data):
    form = ApplicationForm.model_validate(_with(form_data, "referee", phone="+447700900123"))
    assert form.referee.phone == "+447700900123"


@pytest.mark.parametrize("goals", ["too short", "x" * 501])
def test_career_goals_length(form_data, goals):
    with pytest.raises(ValidationError):
        ApplicationForm.model_validate(_with(form_data, "programSelection", careerGoals=goals))


def test_missing_section_is_rejected(form_data):
    del form_data["referee"]
    with pytest.raises(ValidationError):
        ApplicationForm.model_validate(form_data)


def test_form_is_immutable(form_data):
    form = ApplicationForm.model_validate(form_data)
    with pytest.raises(ValidationError):
        form.personal_info.surname = "Changed"


def test_draft_accepts_partial_sections():
    draft = ApplicationDraft.model_validate({"personalInfo": {"surname": "O"}})

    sections = draft.sections()

    assert draft.kind == "draft"
    assert sections["personal_info"] == {"surname": "O"}
    assert sections["referee"] == {}
