"""Unit tests for application form validation."""

import pytest

from dossier.contexts.intake.exceptions import FormValidationError
from dossier.contexts.intake.form import validate_application_form


@pytest.mark.unit
def test_valid_form_is_normalized(valid_form):
    form = validate_application_form(valid_form)

    assert form.first_name == "Ada"
    assert form.email == "ada@example.com"
    assert form.phone == "+1 (555) 123-4567"
    assert form.job_description == valid_form["job_description"]


@pytest.mark.unit
def test_blank_phone_becomes_none(valid_form):
    valid_form["phone"] = "   "
    assert validate_application_form(valid_form).phone is None

    del valid_form["phone"]
    assert validate_application_form(valid_form).phone is None


@pytest.mark.unit
def test_all_errors_reported_together():
    raw = {
        "first_name": "",
        "last_name": "R2-D2",
        "email": "not-an-email",
        "phone": "call me",
        "job_description": "short",
    }

    with pytest.raises(FormValidationError) as exc_info:
        validate_application_form(raw)

    errors = exc_info.value.errors
    assert set(errors) == {"first_name", "last_name", "email", "phone", "job_description"}
    assert errors["first_name"] == "First name is required"
    assert errors["last_name"] == (
        "Last name can only contain letters, spaces, hyphens, and apostrophes"
    )
    assert errors["email"] == "Invalid email address"
    assert errors["phone"] == "Please enter a valid phone number"
    assert errors["job_description"] == "Job description must be at least 10 characters"
    assert "email: Invalid email address" in str(exc_info.value)


@pytest.mark.unit
def test_names_allow_hyphens_apostrophes_and_spaces(valid_form):
    valid_form["first_name"] = "Mary Ann"
    valid_form["last_name"] = "O'Neil-Smith"
    form = validate_application_form(valid_form)
    assert form.last_name == "O'Neil-Smith"


@pytest.mark.unit
def test_name_length_limit(valid_form):
    valid_form["first_name"] = "A" * 51
    with pytest.raises(FormValidationError) as exc_info:
        validate_application_form(valid_form)
    assert exc_info.value.errors == {"first_name": "First name must be less than 50 characters"}


@pytest.mark.unit
def test_whitespace_job_description_rejected(valid_form):
    valid_form["job_description"] = " " * 12 + "x"
    with pytest.raises(FormValidationError) as exc_info:
        validate_application_form(valid_form)
    assert exc_info.value.errors["job_description"] == "Job description cannot be just whitespace"


@pytest.mark.unit
def test_job_description_length_limit(valid_form):
    valid_form["job_description"] = "x" * 2001
    with pytest.raises(FormValidationError):
        validate_application_form(valid_form)


@pytest.mark.unit
def test_short_phone_rejected(valid_form):
    valid_form["phone"] = "555-1234"
    with pytest.raises(FormValidationError) as exc_info:
        validate_application_form(valid_form)
    assert "phone" in exc_info.value.errors
