"""
Base class for everything loaded from or saved to the database.

A TrackedRecord keeps one pending EditRecord per column while its property
setters run. Committing writes the row (INSERT when the record has no
identity yet, UPDATE otherwise) and then one audit row per pending edit.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional

from inspection_db.audit import AuditLog
from inspection_db.columns import before_epoch_floor
from inspection_db.exceptions import RowCountError
from inspection_db.structs import Address

logger = logging.getLogger(__name__)

DATE_FORMATS = (
    '%m/%d/%Y %I:%M:%S %p',
    '%m/%d/%Y %H:%M:%S',
    '%m/%d/%Y',
)


@dataclass
class EditRecord:
    """One field-level change waiting to be committed."""

    table_name: str
    item_id: Optional[int]
    column_name: str
    old_value: str
    new_value: str

    def __str__(self):
        return f"{self.column_name}: {self.old_value} -> {self.new_value}"


# =============================================================================
# DEFENSIVE PARSING
# =============================================================================
# Stored values are parsed leniently: anything unparseable becomes the
# field's zero value instead of raising.

def as_text(value):
    if value is None:
        return ''
    return str(value).strip()


def parse_int(value, default=0):
    if isinstance(value, bool):
        return int(value)
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        try:
            return int(float(str(value).strip()))
        except (TypeError, ValueError):
            return default


def parse_float(value, default=0.0):
    try:
        parsed = float(str(value).strip())
    except (TypeError, ValueError):
        return default
    return parsed if math.isfinite(parsed) else default


def parse_decimal(value, default=Decimal('0')):
    if value is None:
        return default
    try:
        parsed = Decimal(str(value).strip())
    except InvalidOperation:
        return default
    return parsed if parsed.is_finite() else default


def parse_bool(value, default=False):
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    text = as_text(value).lower()
    if text in ('true', '1'):
        return True
    if text in ('false', '0'):
        return False
    return default


def parse_datetime(value, default=None):
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    text = as_text(value)
    if not text:
        return default
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return default


def format_datetime(value):
    """Display form used in edit records; blank for unset dates."""
    if value is None or before_epoch_floor(value):
        return ''
    return value.strftime('%m/%d/%Y %I:%M:%S %p')


# =============================================================================
# TRACKED RECORD
# =============================================================================

class TrackedRecord:
    """
    Base for Company, Building, Contact, Elevator and Inspection.

    Subclasses set ``table_name`` and ``id_column`` and implement
    ``column_values()``.
    """

    table_name: str = None
    id_column: str = None

    def __init__(self, gateway=None):
        self.gateway = gateway
        self._id: Optional[int] = None
        self._edits: Dict[str, EditRecord] = {}

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------

    @property
    def id(self) -> Optional[int]:
        """Identity assigned by the database; None until the row is inserted."""
        return self._id

    @property
    def is_new(self):
        return self._id is None

    def _assign_id(self, value):
        if value is None:
            return
        if self._id is not None and self._id != value:
            raise ValueError(
                f"{type(self).__name__} already has identity {self._id}; cannot reassign to {value}"
            )
        self._id = value

    # -------------------------------------------------------------------------
    # Edit tracking
    # -------------------------------------------------------------------------

    @property
    def is_edited(self):
        return bool(self._edits)

    @property
    def edits(self) -> List[str]:
        """Pending edits as "Column: old -> new" strings."""
        return [str(edit) for edit in self._edits.values()]

    @property
    def pending_edits(self) -> List[EditRecord]:
        return list(self._edits.values())

    def record_edit(self, column_name, old_value, new_value):
        """
        Note a change to ``column_name``.

        A column already pending keeps its first old value and only takes
        the new one, so the audit trail reads first value -> final value.
        """
        old_value = '' if old_value is None else str(old_value)
        new_value = '' if new_value is None else str(new_value)

        existing = self._edits.get(column_name)
        if existing is not None:
            existing.new_value = new_value
            return existing

        edit = EditRecord(type(self).__name__, self._id, column_name, old_value, new_value)
        self._edits[column_name] = edit
        return edit

    def record_date_edit(self, column_name, old_date, new_date):
        return self.record_edit(column_name, format_datetime(old_date), format_datetime(new_date))

    def record_int_edit(self, column_name, old_int, new_int):
        old_value = '' if not old_int else str(old_int)
        return self.record_edit(column_name, old_value, str(new_int))

    def discard_edits(self):
        self._edits.clear()

    def _update_text(self, attr, column_name, value):
        """Shared text setter: blank or unchanged values are ignored."""
        value = as_text(value)
        current = getattr(self, attr)
        if not value or value == current:
            return False
        self.record_edit(column_name, current, value)
        setattr(self, attr, value)
        return True

    def _update_int(self, attr, column_name, value):
        """Shared foreign-key setter: zero or unchanged values are ignored."""
        value = parse_int(value)
        current = getattr(self, attr)
        if not value or value == current:
            return False
        self.record_int_edit(column_name, current, value)
        setattr(self, attr, value)
        return True

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def column_values(self):
        """ColumnValue list describing the whole row."""
        raise NotImplementedError

    def _after_row_saved(self, gateway):
        """Hook for subclasses that write related rows after their own."""

    def _require_gateway(self, gateway=None):
        gateway = gateway or self.gateway
        if gateway is None:
            raise RuntimeError(f"{type(self).__name__} has no query gateway to talk to")
        return gateway

    def commit(self, gateway=None, audit=None) -> bool:
        """
        Save the row, then write the pending edits to the audit table.

        Returns:
            True if the row was written and every audit row was written.
            Edits whose audit write failed stay pending.
        """
        gateway = self._require_gateway(gateway)
        values = self.column_values()

        if self._id is None:
            self._assign_id(gateway.insert(self.table_name, values, source=self))
            logger.info(f"Inserted {self.table_name} {self._id}")
        else:
            gateway.update(
                self.table_name,
                values,
                f"{self.id_column} = :row_id",
                {'row_id': self._id},
                row_id=self._id,
                source=self,
            )
            logger.info(f"Updated {self.table_name} {self._id}")

        self._after_row_saved(gateway)
        return self._commit_edits(audit or AuditLog(gateway))

    def _commit_edits(self, audit):
        success = True
        for column_name, edit in list(self._edits.items()):
            if audit.log_edit(edit, item_id=self._id):
                del self._edits[column_name]
            else:
                success = False

        if not success:
            logger.warning(f"{len(self._edits)} edit(s) on {self.table_name} {self._id} were not logged")
        return success

    # -------------------------------------------------------------------------
    # Confirmation
    # -------------------------------------------------------------------------

    def display_title(self):
        return self.table_name

    def confirmation_text(self, title=None):
        """
        Heading and body describing the pending edits, or None if there are none.
        """
        if not self._edits:
            return None
        heading = f"Save the Following Changes to {title or self.display_title()}?"
        return heading, '\n'.join(self.edits)

    def save_confirmation(self, confirm, title=None):
        """
        Ask ``confirm(heading, body)`` whether to save the pending edits.

        Returns False without asking when nothing is pending.
        """
        text = self.confirmation_text(title)
        if text is None:
            return False
        return bool(confirm(*text))

    # -------------------------------------------------------------------------
    # Loading helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def affirm_one_row(rows, context=None):
        """Return the only row of ``rows``; anything else is a RowCountError."""
        if len(rows) != 1:
            raise RowCountError(len(rows), context)
        return rows[0]

    def __repr__(self):
        return f"<{type(self).__name__} {self._id}>"


class AddressedRecord(TrackedRecord):
    """
    A TrackedRecord with an embedded Address.

    ``ADDRESS_COLUMNS`` maps each Address field to the column it is stored in.
    """

    ADDRESS_COLUMNS = {
        'street': 'Street',
        'city': 'City',
        'state': 'State',
        'zip': 'Zip',
    }

    def __init__(self, gateway=None):
        super().__init__(gateway)
        self._address = Address()

    @property
    def address(self) -> Address:
        return self._address

    def _set_address_part(self, field, value):
        value = as_text(value)
        current = getattr(self._address, field)
        if not value or value == current:
            return False
        # Validates before anything is recorded
        updated = self._address.with_changes(**{field: value})
        new_value = getattr(updated, field)
        if new_value == current:
            return False
        self.record_edit(self.ADDRESS_COLUMNS[field], current, new_value)
        self._address = updated
        return True

    @property
    def street(self):
        return self._address.street

    @street.setter
    def street(self, value):
        self._set_address_part('street', value)

    @property
    def city(self):
        return self._address.city

    @city.setter
    def city(self, value):
        self._set_address_part('city', value)

    @property
    def state(self):
        return self._address.state

    @state.setter
    def state(self, value):
        self._set_address_part('state', value)

    @property
    def zip(self):
        return self._address.zip

    @zip.setter
    def zip(self, value):
        self._set_address_part('zip', value)

    @staticmethod
    def _address_from_row(row, street_column='Street'):
        return Address(
            street=as_text(row.get(street_column)),
            city=as_text(row.get('City')),
            state=as_text(row.get('State')),
            zip=as_text(row.get('Zip')),
        )
