"""
Immutable value types grouped out of record fields: addresses, coordinates,
money and telephone numbers. All compare by value.
"""

import math
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from typing import Optional

from validators import (
    ValidationError, ensure_valid, phone_digits, validate_phone, validate_state, validate_zip
)

EARTH_RADIUS_MILES = 3959


@dataclass(frozen=True)
class Address:
    """Street address. State and zip are validated whenever they are set."""

    street: str = ''
    city: str = ''
    state: str = ''
    zip: str = ''

    def __post_init__(self):
        if self.state:
            ensure_valid(validate_state(self.state), field='State')
            object.__setattr__(self, 'state', self.state.upper())
        if self.zip:
            ensure_valid(validate_zip(self.zip), field='Zip')

    def with_changes(self, **changes):
        """Return a copy with some fields replaced (validated the same way)."""
        return replace(self, **changes)

    def __str__(self):
        return f"{self.street}, {self.city}, {self.state} {self.zip}"


@dataclass(frozen=True)
class GeographicCoordinates:
    latitude: float = 0.0
    longitude: float = 0.0

    @classmethod
    def from_strings(cls, latitude, longitude):
        try:
            return cls(float(latitude), float(longitude))
        except (TypeError, ValueError):
            raise ValidationError(
                f"Could not convert to valid coordinates ({latitude}, {longitude})",
                field='Coordinates',
            )

    @property
    def is_empty(self):
        return self.latitude == 0 and self.longitude == 0

    def distance_from(self, other, precision=2):
        """Great-circle distance in miles (haversine)."""
        d_lat = math.radians(other.latitude - self.latitude)
        d_long = math.radians(other.longitude - self.longitude)

        a = (math.sin(d_lat / 2) ** 2
             + math.cos(math.radians(self.latitude))
             * math.cos(math.radians(other.latitude))
             * math.sin(d_long / 2) ** 2)
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
        return round(EARTH_RADIUS_MILES * c, precision)

    def format_distance(self, other, precision=2):
        return f"{self.distance_from(other, precision)} mi."

    def __str__(self):
        return f"{self.latitude}, {self.longitude}"


@dataclass(frozen=True)
class Money:
    """US currency amount. Zero doubles as 'not set' for fee columns."""

    value: Decimal = Decimal('0')

    def __post_init__(self):
        if not isinstance(self.value, Decimal):
            object.__setattr__(self, 'value', Decimal(str(self.value)))

    @classmethod
    def parse(cls, text):
        """Parse a stored amount, falling back to zero when it is not numeric."""
        if text is None:
            return cls()
        try:
            value = Decimal(str(text).replace('$', '').replace(',', '').strip())
        except InvalidOperation:
            return cls()
        if not value.is_finite():
            return cls()
        return cls(value)

    @property
    def is_zero(self):
        return self.value == 0

    def __str__(self):
        amount = abs(self.value).quantize(Decimal('0.01'))
        sign = '-' if self.value < 0 else ''
        return f"{sign}${amount:,}"


@dataclass(frozen=True)
class TelephoneNumber:
    """Ten digit phone number held as area code, exchange and line."""

    area: int = 0
    exchange: int = 0
    line: int = 0
    extension: Optional[int] = None

    @classmethod
    def parse(cls, phone_number, extension=''):
        """
        Parse any punctuation around ten digits, e.g. "410-290-8913" or "(410) 290 8913".

        A string with no digits gives an empty number; anything other than
        ten digits raises ValidationError.
        """
        digits = phone_digits(phone_number)
        if not digits:
            return cls()

        ensure_valid(validate_phone(phone_number), field='Phone')

        ext_digits = phone_digits(str(extension)) if extension is not None else ''
        return cls(
            area=int(digits[:3]),
            exchange=int(digits[3:6]),
            line=int(digits[6:]),
            extension=int(ext_digits) if ext_digits else None,
        )

    @property
    def is_empty(self):
        return self.area == 0 and self.exchange == 0 and self.line == 0

    @property
    def number(self):
        if self.is_empty:
            return ''
        return f"{self.area:03d}{self.exchange:03d}{self.line:04d}"

    @property
    def ext(self):
        return '' if self.extension is None else str(self.extension)

    def __str__(self):
        if self.is_empty:
            return ''
        formatted = f"{self.area:03d}-{self.exchange:03d}-{self.line:04d}"
        if self.extension is not None:
            formatted += f"x{self.extension}"
        return formatted
