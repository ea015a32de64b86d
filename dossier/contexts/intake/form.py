"""
Application form validation.

Checks the applicant-supplied fields before anything is stored. All field
problems are collected and reported together.
"""

import re
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from dossier.contexts.intake.exceptions import FormValidationError

FORM_CONSTRAINTS = {
    "name_min_length": 1,
    "name_max_length": 50,
    "job_description_min_length": 10,
    "job_description_max_length": 2000,
    "email_max_length": 255,
    "phone_min_length": 10,
}

NAME_PATTERN = re.compile(r"^[a-zA-Z\s\-']+$")
PHONE_PATTERN = re.compile(r"^[\d\s\-\+\(\)]+$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass
class ApplicationForm:
    """Validated, normalized application form fields."""

    first_name: str
    last_name: str
    email: str
    job_description: str
    phone: Optional[str] = None


def _check_name(value: str, label: str) -> Optional[str]:
    if len(value) < FORM_CONSTRAINTS["name_min_length"]:
        return f"{label} is required"
    if len(value) > FORM_CONSTRAINTS["name_max_length"]:
        return f"{label} must be less than {FORM_CONSTRAINTS['name_max_length']} characters"
    if not NAME_PATTERN.match(value):
        return f"{label} can only contain letters, spaces, hyphens, and apostrophes"
    return None


def _check_email(value: str) -> Optional[str]:
    if not EMAIL_PATTERN.match(value):
        return "Invalid email address"
    if len(value) > FORM_CONSTRAINTS["email_max_length"]:
        return f"Email must be less than {FORM_CONSTRAINTS['email_max_length']} characters"
    return None


def _check_phone(value: str) -> Optional[str]:
    if not value.strip():
        return None
    if not PHONE_PATTERN.match(value) or len(value) < FORM_CONSTRAINTS["phone_min_length"]:
        return "Please enter a valid phone number"
    return None


def _check_job_description(value: str) -> Optional[str]:
    min_length = FORM_CONSTRAINTS["job_description_min_length"]
    max_length = FORM_CONSTRAINTS["job_description_max_length"]
    if len(value) < min_length:
        return f"Job description must be at least {min_length} characters"
    if len(value) > max_length:
        return f"Job description must be less than {max_length} characters"
    if len(value.strip()) < min_length:
        return "Job description cannot be just whitespace"
    return None


def validate_application_form(raw: Mapping[str, Optional[str]]) -> ApplicationForm:
    """
    Validate raw form fields and return a normalized ApplicationForm.

    Expected keys: first_name, last_name, email, phone (optional),
    job_description. Missing keys are treated as empty strings. The email is
    lower-cased; a blank phone becomes None.

    Args:
        raw: Field name -> submitted value

    Returns:
        ApplicationForm

    Raises:
        FormValidationError: With every invalid field
    """
    first_name = raw.get("first_name") or ""
    last_name = raw.get("last_name") or ""
    email = raw.get("email") or ""
    phone = raw.get("phone") or ""
    job_description = raw.get("job_description") or ""

    checks = {
        "first_name": _check_name(first_name, "First name"),
        "last_name": _check_name(last_name, "Last name"),
        "email": _check_email(email),
        "phone": _check_phone(phone),
        "job_description": _check_job_description(job_description),
    }
    errors: Dict[str, str] = {name: message for name, message in checks.items() if message}
    if errors:
        raise FormValidationError(errors)

    return ApplicationForm(
        first_name=first_name,
        last_name=last_name,
        email=email.lower(),
        job_description=job_description,
        phone=phone if phone.strip() else None,
    )
