"""Shared validation utilities"""

import re
from typing import Optional

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def validate_dk_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate and normalize a Danish phone number to E.164 format.

    Accepts "12345678", "+45 12 34 56 78", "0045 12345678".

    Raises:
        ValueError: If the number is not 8 digits after the country code
    """
    if not phone:
        return phone

    digits = re.sub(r"\D", "", phone)

    if digits.startswith("0045") and len(digits) == 12:
        digits = digits[4:]
    elif digits.startswith("45") and len(digits) == 10:
        digits = digits[2:]

    if len(digits) != 8:
        raise ValueError("Phone number must be 8 digits for Danish numbers")

    return f"+45{digits}"


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

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


def validate_cvr(cvr: Optional[str]) -> Optional[str]:
    """Danish company registration numbers are exactly 8 digits"""
    if cvr is None:
        return cvr
    cvr = cvr.strip().replace(" ", "")
    if not re.fullmatch(r"\d{8}", cvr):
        raise ValueError("CVR number must be 8 digits")
    return cvr


def validate_time(value: Optional[str]) -> Optional[str]:
    """24-hour HH:MM clock time"""
    if value is None:
        return value
    value = value.strip()
    if not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM format")
    return value


def time_to_minutes(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time(total: int) -> str:
    # Clamp at end of day; bookings never run past midnight
    total = max(0, min(total, 24 * 60 - 1))
    return f"{total // 60:02d}:{total % 60:02d}"


def sanitize_reason(reason: Optional[str], max_length: int = 500) -> Optional[str]:
    """Free-text reasons are cut to max_length and stripped of angle brackets"""
    if not reason:
        return None
    cleaned = str(reason)[:max_length].replace("<", "").replace(">", "").strip()
    return cleaned or None
