import pytest

from turfconnect.shared.validators import (
    validate_email,
    validate_phone_number,
    validate_signup_fields,
    validate_time_of_day,
)


@pytest.mark.parametrize("phone", ["+91 98765 43210", "9876543210", "(080) 1234-5678"])
def test_phone_number_accepts_loose_formats(phone):
    assert validate_phone_number(phone) is True


@pytest.mark.parametrize("phone", ["123", "abcdefghij", "", None, "+91 98765 43210 99999"])
def test_phone_number_rejects_bad_shapes(phone):
    assert validate_phone_number(phone) is False


def test_phone_number_ignores_surrounding_whitespace():
    assert validate_phone_number("  9876543210  ") is True


def test_signup_fields_require_full_name():
    notices = []
    assert validate_signup_fields("", "9876543210", lambda t, d: notices.append((t, d))) is False
    assert notices == [("Missing Information", "Please enter your full name")]


def test_signup_fields_require_phone():
    notices = []
    assert validate_signup_fields("Jane Doe", "", lambda t, d: notices.append((t, d))) is False
    assert notices == [("Missing Information", "Please enter your phone number")]


def test_signup_fields_reject_invalid_phone():
    notices = []
    assert validate_signup_fields("Jane Doe", "12ab", lambda t, d: notices.append((t, d))) is False
    assert notices == [("Invalid Phone Number", "Please enter a valid phone number")]


def test_signup_fields_pass_without_notifying():
    notices = []
    assert validate_signup_fields("Jane Doe", "9876543210", lambda t, d: notices.append((t, d))) is True
    assert notices == []


def test_signup_fields_work_without_callback():
    assert validate_signup_fields("   ", "9876543210") is False


def test_email_is_normalized():
    assert validate_email("  Jane@Example.COM ") == "jane@example.com"


def test_email_rejects_garbage():
    with pytest.raises(ValueError):
        validate_email("not-an-email")


def test_time_of_day_drops_seconds():
    assert validate_time_of_day("18:30:00") == "18:30"


def test_time_of_day_rejects_out_of_range():
    with pytest.raises(ValueError):
        validate_time_of_day("24:00")
