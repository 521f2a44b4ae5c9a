"""Shared validation utilities"""

import re
import uuid
from typing import Callable, Optional

# Digits, spaces, hyphens and parentheses with an optional leading "+"
PHONE_PATTERN = re.compile(r"^[+]?[\d\s\-()]{10,15}$")
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)(:[0-5]\d)?$")

Notify = Callable[[str, str], None]


def validate_uuid(value: str) -> bool:
    """Validate UUID format"""
    try:
        uuid.UUID(value)
        return True
    except (ValueError, AttributeError, TypeError):
        return False


def validate_phone_number(phone: Optional[str]) -> bool:
    """
    Check a phone number against the loose signup pattern.

    Only the shape is checked (10-15 characters of digits, spaces, hyphens or
    parentheses, optionally prefixed with "+"); no numbering plan awareness.
    """
    if phone is None:
        return False
    return bool(PHONE_PATTERN.match(phone.strip()))


def validate_signup_fields(
    full_name: Optional[str], phone_number: Optional[str], notify: Optional[Notify] = None
) -> bool:
    """
    Validate the sign-up form fields.

    Args:
        full_name: Name as typed by the user
        phone_number: Phone number as typed by the user
        notify: Optional callback receiving (title, description) for the failure

    Returns:
        True when every field is present and the phone number is well formed
    """
    if not full_name or not full_name.strip():
        if notify:
            notify("Missing Information", "Please enter your full name")
        return False

    if not phone_number or not phone_number.strip():
        if notify:
            notify("Missing Information", "Please enter your phone number")
        return False

    if not validate_phone_number(phone_number):
        if notify:
            notify("Invalid Phone Number", "Please enter a valid phone number")
        return False

    return True


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def validate_time_of_day(value: Optional[str]) -> Optional[str]:
    """Normalize "HH:MM" or "HH:MM:SS" to "HH:MM"; raises ValueError otherwise"""
    if value is None:
        return value
    value = value.strip()
    if not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM format")
    return value[:5]
