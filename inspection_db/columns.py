"""
Column/value pairs for INSERT and UPDATE statements.

A ColumnValue carries two renderings of the same typed input:

* ``param`` is what gets bound to the statement and sent to the server.
* ``value`` is the sanitized text form (quotes doubled, ``NULL`` marker) used
  when the statement is rendered for logs and error messages.

Sentinel inputs collapse to NULL: dates before the epoch floor and numeric
zero for floats/decimals.
"""

from datetime import date, datetime
from decimal import Decimal

NULL = 'NULL'

# Dates earlier than this are zero-initialised defaults, not real timestamps
EPOCH_FLOOR = datetime(2000, 1, 1)

DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def before_epoch_floor(value):
    """True for dates/datetimes that predate EPOCH_FLOOR."""
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    return value.replace(tzinfo=None) < EPOCH_FLOOR


class ColumnValue:
    """A column name paired with a typed value ready for a write statement."""

    __slots__ = ('column', 'value', 'param', '_quoted')

    def __init__(self, column, raw):
        if not column:
            raise ValueError("The column name passed to ColumnValue must not be empty")

        self.column = column
        self.param, self.value, self._quoted = _convert(raw)

    @property
    def is_null(self):
        return self.param is None

    @property
    def literal(self):
        """The sanitized value as it would appear inside SQL text."""
        if self.is_null:
            return NULL
        if self._quoted:
            return f"'{self.value}'"
        return self.value

    def __eq__(self, other):
        if not isinstance(other, ColumnValue):
            return NotImplemented
        return (self.column, self.value, self.param) == (other.column, other.value, other.param)

    def __hash__(self):
        return hash((self.column, self.value))

    def __repr__(self):
        return f"ColumnValue({self.column!r}, {self.literal})"


def _convert(raw):
    """Return (bound parameter, sanitized text, needs quoting) for a raw value."""
    if raw is None:
        return None, NULL, False

    if isinstance(raw, str):
        return raw, raw.replace("'", "''"), True

    # bool before int: bool is an int subclass
    if isinstance(raw, bool):
        return raw, '1' if raw else '0', False

    if isinstance(raw, int):
        return raw, str(raw), False

    if isinstance(raw, (datetime, date)):
        if before_epoch_floor(raw):
            return None, NULL, False
        if not isinstance(raw, datetime):
            raw = datetime(raw.year, raw.month, raw.day)
        return raw, raw.strftime(DATE_FORMAT), True

    if isinstance(raw, (float, Decimal)):
        if raw == 0:
            return None, NULL, False
        return raw, str(raw), False

    raise TypeError(f"Unsupported column value type: {type(raw).__name__}")
