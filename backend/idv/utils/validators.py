"""
Validators — Rule-based checks for identity numbers and contact fields.
"""
import re

EMAIL_PATTERN = re.compile(r"^[\w.+-]+@[\w-]+(\.[\w-]+)+$")


def validate_id_number(id_number: str | None) -> bool:
    """An ID number is acceptable for searching when it has visible characters."""
    return bool(id_number and id_number.strip())


def validate_email(email: str | None) -> bool:
    if not email:
        return False
    return bool(EMAIL_PATTERN.match(email.strip()))


def determine_id_type(id_number: str) -> str:
    """Infer the EPOS id_type from the shape of an ID number.

    Rules apply in order, so short alphanumeric codes such as ZM123456
    classify as passports before the driving-licence rule is reached.
    """
    has_letters = any(c.isalpha() for c in id_number)
    has_digits = any(c.isdigit() for c in id_number)

    if "/" in id_number and len(id_number) >= 10:
        return "national_id"
    if has_letters and 6 <= len(id_number) <= 12:
        return "passport"
    if has_letters and has_digits and len(id_number) >= 8:
        return "driving_license"
    return "national_id"
