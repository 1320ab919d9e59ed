"""
Input Validation Utilities
Provides domain validation for record fields before they are assigned
"""
import re
import logging
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

# Two-letter codes for the 50 states, D.C. and the territories
STATE_ABBREVIATIONS = frozenset({
    'AL', 'AK', 'AZ', 'AR', 'CA', 'CO', 'CT', 'DE', 'FL', 'GA', 'HI', 'ID', 'IL', 'IN',
    'IA', 'KS', 'KY', 'LA', 'ME', 'MD', 'MA', 'MI', 'MN', 'MS', 'MO', 'MT', 'NE', 'NV',
    'NH', 'NJ', 'NM', 'NY', 'NC', 'ND', 'OH', 'OK', 'OR', 'PA', 'RI', 'SC', 'SD', 'TN',
    'TX', 'UT', 'VT', 'VA', 'WA', 'WV', 'WI', 'WY', 'AS', 'DC', 'FM', 'GU', 'MH', 'MP',
    'PW', 'PR', 'VI',
})

# Regex patterns
EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')
ZIP_PATTERN = re.compile(r'^\d{5}$')
NON_DIGITS = re.compile(r'[^0-9]')


class ValidationError(ValueError):
    """Raised when a value is rejected before it is assigned to a record"""
    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(self.message)


def ensure_valid(result: Tuple[bool, Optional[str]], field: Optional[str] = None) -> None:
    """
    Raise a ValidationError for a failed (is_valid, error_message) result

    Args:
        result: Tuple returned by one of the validate_* functions
        field: Field name reported with the error
    """
    is_valid, error = result
    if not is_valid:
        logger.debug(f"Validation failed for {field}: {error}")
        raise ValidationError(error, field)


def validate_email(email: str) -> Tuple[bool, Optional[str]]:
    """
    Validate email format

    Args:
        email: Email address to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not email or not isinstance(email, str):
        return False, "Email must be a non-empty string"

    if not EMAIL_PATTERN.match(email):
        return False, "Invalid E-mail format"

    if len(email) > 254:  # RFC 5321
        return False, "Email address too long"

    return True, None


def phone_digits(phone: str) -> str:
    """Strip everything except digits from a phone number string"""
    return NON_DIGITS.sub('', phone or '')


def validate_phone(phone: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a ten digit phone number, ignoring punctuation

    Args:
        phone: Phone number to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(phone, str):
        return False, "Phone must be a string"

    digits = phone_digits(phone)
    if len(digits) != 10:
        return False, f"'phonenumber' must be a valid 10-digit phone number (got {len(digits)} digits)"

    return True, None


def validate_state(state: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a two letter state abbreviation (case-insensitive)

    Args:
        state: State abbreviation to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(state, str) or len(state) != 2:
        return False, "State must be exactly a two character string"

    if state.upper() not in STATE_ABBREVIATIONS:
        return False, "State must be a valid abbreviation"

    return True, None


def validate_zip(zip_code: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a five digit zip code

    Args:
        zip_code: Zip code to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(zip_code, str) or len(zip_code) != 5:
        return False, "Zip must be exactly 5 characters in length"

    if not ZIP_PATTERN.match(zip_code):
        return False, "Zip must be a numeric string"

    return True, None

