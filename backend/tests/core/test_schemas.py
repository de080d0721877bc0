"""Request schemas: required-field and alias handling."""

import pytest
from pydantic import ValidationError

from devconnect.schemas.post import PostText
from devconnect.schemas.profile import EducationCreate, ExperienceCreate, ProfileUpsert
from devconnect.schemas.user import UserCreate


def test_post_text_is_stripped():
    assert PostText(text="  hello ").text == "hello"


def test_post_text_whitespace_rejected():
    with pytest.raises(ValidationError):
        PostText(text="   ")


def test_profile_requires_status_and_skills():
    with pytest.raises(ValidationError):
        ProfileUpsert(status="Dev")
    with pytest.raises(ValidationError):
        ProfileUpsert(skills="a")
    with pytest.raises(ValidationError):
        ProfileUpsert(status="", skills="a")


def test_profile_skills_list_must_have_content():
    with pytest.raises(ValidationError):
        ProfileUpsert(status="Dev", skills=[" ", ""])


def test_experience_from_alias_round_trips_into_entry():
    exp = ExperienceCreate.model_validate(
        {"title": "Dev", "company": "Acme", "from": "2020-01-15"},
    )
    entry = exp.to_entry("e1")
    assert entry["id"] == "e1"
    assert entry["from"] == "2020-01-15"
    assert entry["to"] is None
    assert entry["current"] is False
    assert entry["title"] == "Dev"


def test_experience_requires_title_company_from():
    with pytest.raises(ValidationError):
        ExperienceCreate.model_validate({"company": "Acme", "from": "2020-01-01"})
    with pytest.raises(ValidationError):
        ExperienceCreate.model_validate({"title": "Dev", "company": "Acme"})
    with pytest.raises(ValidationError):
        ExperienceCreate.model_validate(
            {"title": " ", "company": "Acme", "from": "2020-01-01"},
        )


def test_education_requires_fieldofstudy():
    with pytest.raises(ValidationError):
        EducationCreate.model_validate(
            {"school": "MIT", "degree": "BSc", "from": "2010-09-01"},
        )


def test_user_password_min_length():
    with pytest.raises(ValidationError):
        UserCreate(name="A", email="a@example.com", password="123")


def test_profile_skills_of_only_separators_rejected():
    with pytest.raises(ValidationError):
        ProfileUpsert(status="Dev", skills=" , ")
    with pytest.raises(ValidationError):
        ProfileUpsert(status="Dev", skills=",,,")


def test_history_dates_accept_full_timestamps():
    exp = ExperienceCreate.model_validate({
        "title": "Dev", "company": "Acme",
        "from": "2020-01-15T09:30:00.000Z", "to": "2021-06-30T00:00:00",
    })
    entry = exp.to_entry("e1")
    assert entry["from"] == "2020-01-15"
    assert entry["to"] == "2021-06-30"


def test_history_date_garbage_still_rejected():
    with pytest.raises(ValidationError):
        ExperienceCreate.model_validate(
            {"title": "Dev", "company": "Acme", "from": "soonTnow"},
        )
