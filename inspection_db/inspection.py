"""
Inspection - one inspection visit to one elevator.
"""

from datetime import date, datetime
from typing import List, Optional

from inspection_db.columns import ColumnValue, before_epoch_floor
from inspection_db.elevator import stored_tag
from inspection_db.record import TrackedRecord, as_text, parse_datetime, parse_int
from inspection_db.vocabulary import InspectionStatus, InspectionType
from validators import ValidationError


class Inspection(TrackedRecord):
    table_name = 'Inspection'
    id_column = 'Inspection_ID'

    def __init__(self, gateway=None):
        super().__init__(gateway)
        self._elevator_id = 0
        self._date: Optional[datetime] = None
        self._type: Optional[InspectionType] = None
        self._status: Optional[InspectionStatus] = None
        self._inspector = ''
        self._report = ''

    @staticmethod
    def types() -> List[str]:
        return InspectionType.labels()

    @staticmethod
    def statuses() -> List[str]:
        return InspectionStatus.labels()

    @classmethod
    def from_row(cls, row, gateway=None):
        inspection = cls(gateway)
        inspection._assign_id(parse_int(row.get('Inspection_ID')) or None)
        inspection._elevator_id = parse_int(row.get('Elevator_ID'))
        inspection._date = parse_datetime(row.get('Date'))
        inspection._type = stored_tag(InspectionType, row.get('Type'))
        inspection._status = stored_tag(InspectionStatus, row.get('Status'))
        inspection._inspector = as_text(row.get('Inspector'))
        inspection._report = as_text(row.get('Report'))
        return inspection

    @classmethod
    def load(cls, gateway, inspection_id):
        rows = gateway.select(
            "SELECT * FROM Inspection WHERE Inspection_ID = :inspection_id",
            {'inspection_id': inspection_id},
        )
        return cls.from_row(cls.affirm_one_row(rows, f"Inspection_ID = {inspection_id}"), gateway)

    @classmethod
    def for_elevator(cls, gateway, elevator_id):
        """Every inspection of an elevator, newest first."""
        rows = gateway.select(
            "SELECT * FROM Inspection WHERE Elevator_ID = :elevator_id ORDER BY Date DESC",
            {'elevator_id': elevator_id},
        )
        return [cls.from_row(row, gateway) for row in rows]

    # =========================================================================
    # FIELDS
    # =========================================================================

    @property
    def elevator_id(self):
        return self._elevator_id

    @elevator_id.setter
    def elevator_id(self, value):
        self._update_int('_elevator_id', 'Elevator_ID', value)

    @property
    def date(self) -> Optional[datetime]:
        return self._date

    @date.setter
    def date(self, value):
        if value is None:
            return
        if isinstance(value, (datetime, date)):
            parsed = parse_datetime(value)
        else:
            if not as_text(value):
                return
            parsed = parse_datetime(value)
            if parsed is None:
                raise ValidationError(f"Invalid inspection date: {value!r}", field='Date')
        # Dates before the floor mean "not set"
        if before_epoch_floor(parsed) or parsed == self._date:
            return
        self.record_date_edit('Date', self._date, parsed)
        self._date = parsed

    @property
    def inspection_type(self) -> Optional[InspectionType]:
        return self._type

    @inspection_type.setter
    def inspection_type(self, value):
        if not isinstance(value, InspectionType):
            if not as_text(value):
                return
            value = InspectionType.from_string(value)
        if value is self._type:
            return
        self.record_edit('Type', self._type.label if self._type else '', value.label)
        self._type = value

    @property
    def status(self) -> Optional[InspectionStatus]:
        return self._status

    @status.setter
    def status(self, value):
        if not isinstance(value, InspectionStatus):
            if not as_text(value):
                return
            value = InspectionStatus.from_string(value)
        if value is self._status:
            return
        self.record_edit('Status', self._status.label if self._status else '', value.label)
        self._status = value

    @property
    def inspector(self):
        return self._inspector

    @inspector.setter
    def inspector(self, value):
        self._update_text('_inspector', 'Inspector', value)

    @property
    def report_file(self):
        return self._report

    @report_file.setter
    def report_file(self, value):
        self._update_text('_report', 'Report', value)

    @property
    def has_report(self):
        return bool(self._report)

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    def column_values(self):
        return [
            ColumnValue('Elevator_ID', self._elevator_id or None),
            ColumnValue('Date', self._date),
            ColumnValue('Type', self._type.label if self._type else None),
            ColumnValue('Status', self._status.label if self._status else None),
            ColumnValue('Inspector', self._inspector),
            ColumnValue('Report', self._report),
        ]

    def display_title(self):
        when = self._date.strftime('%m/%d/%Y') if self._date else 'new'
        return f"Inspection ({when})"
