"""
Elevator - one unit within a building.
"""

from typing import List, Optional

from inspection_db.columns import ColumnValue
from inspection_db.record import TrackedRecord, as_text, parse_int
from inspection_db.vocabulary import ElevatorType


def stored_tag(vocabulary, value):
    """Blank stored values mean "unset"; anything else must be recognised."""
    text = as_text(value)
    if not text:
        return None
    return vocabulary.from_string(text)


class Elevator(TrackedRecord):
    table_name = 'Elevator'
    id_column = 'Elevator_ID'

    def __init__(self, gateway=None):
        super().__init__(gateway)
        self._building_id = 0
        self._number = ''
        self._type: Optional[ElevatorType] = None
        self._nickname = ''

    @staticmethod
    def types() -> List[str]:
        return ElevatorType.labels()

    @classmethod
    def from_row(cls, row, gateway=None):
        elevator = cls(gateway)
        elevator._assign_id(parse_int(row.get('Elevator_ID')) or None)
        elevator._building_id = parse_int(row.get('Building_ID'))
        elevator._number = as_text(row.get('Number'))
        elevator._type = stored_tag(ElevatorType, row.get('Type'))
        elevator._nickname = as_text(row.get('Nickname'))
        return elevator

    @classmethod
    def load(cls, gateway, elevator_id):
        rows = gateway.select_where('*', 'Elevator', 'Elevator_ID = :elevator_id', {'elevator_id': elevator_id})
        return cls.from_row(cls.affirm_one_row(rows, f"Elevator_ID = {elevator_id}"), gateway)

    @classmethod
    def for_building(cls, gateway, building_id):
        """Every elevator in a building, ordered by number."""
        rows = gateway.select_where(
            '*', 'Elevator', 'Building_ID = :building_id ORDER BY Number',
            {'building_id': building_id},
        )
        return [cls.from_row(row, gateway) for row in rows]

    # =========================================================================
    # FIELDS
    # =========================================================================

    @property
    def owner_id(self):
        """Building_ID of the building this elevator is in."""
        return self._building_id

    @owner_id.setter
    def owner_id(self, value):
        self._update_int('_building_id', 'Building_ID', value)

    @property
    def number(self):
        return self._number

    @number.setter
    def number(self, value):
        self._update_text('_number', 'Number', value)

    @property
    def elevator_type(self) -> Optional[ElevatorType]:
        return self._type

    @elevator_type.setter
    def elevator_type(self, value):
        if not isinstance(value, ElevatorType):
            if not as_text(value):
                return
            value = ElevatorType.from_string(value)
        if value is self._type:
            return
        self.record_edit('Type', self.type_label, value.label)
        self._type = value

    @property
    def type_label(self):
        return self._type.label if self._type else ''

    @property
    def nickname(self):
        return self._nickname

    @nickname.setter
    def nickname(self, value):
        self._update_text('_nickname', 'Nickname', value)

    # =========================================================================
    # RELATED ROWS
    # =========================================================================

    def inspections(self):
        from inspection_db.inspection import Inspection

        if self.is_new:
            return []
        return Inspection.for_elevator(self._require_gateway(), self.id)

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    def column_values(self):
        return [
            ColumnValue('Building_ID', self._building_id or None),
            ColumnValue('Number', self._number),
            ColumnValue('Type', self._type.label if self._type else None),
            ColumnValue('Nickname', self._nickname),
        ]

    def display_title(self):
        return f"Elevator {self._number}"

    def to_condensed_string(self):
        """Pipe-separated id, building id, number, type and nickname."""
        return '|'.join([
            '' if self.id is None else str(self.id),
            str(self._building_id),
            self._number,
            self.type_label,
            self._nickname,
        ])

    def __str__(self):
        return self._nickname or self._number
