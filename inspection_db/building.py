"""
Building - a site under an inspection contract.

Buildings carry the contract details (proposal, fees, anniversary month),
the site address and coordinates, and link up to the owning Company and down
to the elevators on site.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from inspection_db.columns import ColumnValue
from inspection_db.record import (
    AddressedRecord, as_text, parse_bool, parse_datetime, parse_float, parse_int
)
from inspection_db.structs import GeographicCoordinates, Money
from inspection_db.vocabulary import CountyName, Month


@dataclass
class InspectionHistory:
    """One inspection visit as listed against a building."""

    date: Optional[datetime]
    type: str
    status: str
    inspector: str
    has_report: bool

    @classmethod
    def from_row(cls, row):
        return cls(
            date=parse_datetime(row.get('Date')),
            type=as_text(row.get('Type')),
            status=as_text(row.get('Status')),
            inspector=as_text(row.get('Inspector')),
            has_report=bool(as_text(row.get('Report'))),
        )


def _stored_month(value):
    """Anniversary is stored as a month number; older rows hold the month name."""
    text = as_text(value)
    if not text:
        return Month.NONE
    if text.isdigit():
        return Month.from_number(text)
    return Month.from_string(text)


def _as_money(value):
    if isinstance(value, Money):
        return value
    return Money.parse(value)


class Building(AddressedRecord):
    table_name = 'Building'
    id_column = 'Building_ID'

    # The street is kept in the Address column
    ADDRESS_COLUMNS = {
        'street': 'Address',
        'city': 'City',
        'state': 'State',
        'zip': 'Zip',
    }

    def __init__(self, gateway=None):
        super().__init__(gateway)
        self._company_id = 0
        self._proposal_number = ''
        self._proposal_file = ''
        self._name = ''
        self._county = CountyName.NONE
        self._firm_fee = Money()
        self._hourly_fee = Money()
        self._anniversary = Month.NONE
        self._contractor = ''
        self._active = True
        self._coordinates = GeographicCoordinates()

    # =========================================================================
    # LOADING
    # =========================================================================

    @classmethod
    def from_row(cls, row, gateway=None):
        """
        Hydrate from a Building row.

        Numbers, flags and coordinates fall back to their zero values when they
        cannot be parsed. County and anniversary must be recognised values.
        """
        building = cls(gateway)
        building._assign_id(parse_int(row.get('Building_ID')) or None)
        building._company_id = parse_int(row.get('Company_ID'))
        building._proposal_number = as_text(row.get('ProposalNumber'))
        building._proposal_file = as_text(row.get('ProposalFile'))
        building._name = as_text(row.get('Name'))
        building._address = cls._address_from_row(row, street_column='Address')
        building._county = CountyName.from_string(row.get('County'))
        building._firm_fee = Money.parse(row.get('Firm_Fee'))
        building._hourly_fee = Money.parse(row.get('Hourly_Fee'))
        building._anniversary = _stored_month(row.get('Anniversary'))
        building._contractor = as_text(row.get('Contractor'))
        building._active = parse_bool(row.get('Active'))

        latitude = parse_float(row.get('Latitude'))
        longitude = parse_float(row.get('Longitude'))
        if latitude and longitude:
            building._coordinates = GeographicCoordinates(latitude, longitude)
        return building

    @classmethod
    def load(cls, gateway, building_id):
        rows = gateway.select_where('*', 'Building', 'Building_ID = :building_id', {'building_id': building_id})
        return cls.from_row(cls.affirm_one_row(rows, f"Building_ID = {building_id}"), gateway)

    @classmethod
    def load_by_address(cls, gateway, address):
        rows = gateway.select_where('*', 'Building', 'Address = :address', {'address': address})
        return cls.from_row(cls.affirm_one_row(rows, f"Building at '{address}'"), gateway)

    @classmethod
    def addresses(cls, gateway, active_only=False) -> List[str]:
        """Street address of every building, alphabetically."""
        query = "SELECT Address FROM Building"
        if active_only:
            query += " WHERE Active = 1"
        rows = gateway.select(query + " ORDER BY Address")
        return [as_text(row['Address']) for row in rows]

    # =========================================================================
    # OWNER
    # =========================================================================

    @property
    def company_id(self):
        return self._company_id

    @company_id.setter
    def company_id(self, value):
        self._update_int('_company_id', 'Company_ID', value)

    @property
    def owner(self):
        """The owning Company, or None when no owner is set."""
        from inspection_db.company import Company

        if not self._company_id:
            return None
        return Company.load(self._require_gateway(), self._company_id)

    @owner.setter
    def owner(self, company):
        if company is None:
            return
        if company.id is None:
            raise ValueError("The owning company must be saved before it can own a building")
        self.company_id = company.id

    # =========================================================================
    # CONTRACT
    # =========================================================================

    @property
    def proposal_number(self):
        return self._proposal_number

    @proposal_number.setter
    def proposal_number(self, value):
        self._update_text('_proposal_number', 'ProposalNumber', value)

    @property
    def proposal_file(self):
        return self._proposal_file

    @proposal_file.setter
    def proposal_file(self, value):
        self._update_text('_proposal_file', 'ProposalFile', value)

    @property
    def firm_fee(self) -> Money:
        return self._firm_fee

    @firm_fee.setter
    def firm_fee(self, value):
        self._set_fee('_firm_fee', 'Firm_Fee', value)

    @property
    def hourly_fee(self) -> Money:
        return self._hourly_fee

    @hourly_fee.setter
    def hourly_fee(self, value):
        self._set_fee('_hourly_fee', 'Hourly_Fee', value)

    def _set_fee(self, attr, column_name, value):
        fee = _as_money(value)
        current = getattr(self, attr)
        # Zero means "not set"; it never overwrites a fee
        if fee.is_zero or fee == current:
            return
        self.record_edit(column_name, current.value, fee.value)
        setattr(self, attr, fee)

    @property
    def anniversary(self) -> Month:
        return self._anniversary

    @anniversary.setter
    def anniversary(self, value):
        if isinstance(value, Month):
            month = value
        elif isinstance(value, int):
            month = Month.from_number(value)
        else:
            if not as_text(value):
                return
            month = Month.from_string(value)

        if month is Month.NONE or month is self._anniversary:
            return
        self.record_edit('Anniversary', self._anniversary.label, month.label)
        self._anniversary = month

    @property
    def contractor(self):
        return self._contractor

    @contractor.setter
    def contractor(self, value):
        self._update_text('_contractor', 'Contractor', value)

    @property
    def active(self):
        return self._active

    @active.setter
    def active(self, value):
        value = parse_bool(value, default=self._active)
        if value == self._active:
            return
        self.record_edit('Active', self._active, value)
        self._active = value

    # =========================================================================
    # SITE
    # =========================================================================

    @property
    def name(self):
        """The building name, or its street address when it has none."""
        return self._name or self._address.street

    @name.setter
    def name(self, value):
        self._update_text('_name', 'Name', value)

    @property
    def county(self) -> CountyName:
        return self._county

    @county.setter
    def county(self, value):
        if not isinstance(value, CountyName):
            if not as_text(value):
                return
            value = CountyName.from_string(value)
        if value is CountyName.NONE or value is self._county:
            return
        self.record_edit('County', self._county.label, value.label)
        self._county = value

    @property
    def coordinates(self) -> GeographicCoordinates:
        return self._coordinates

    @coordinates.setter
    def coordinates(self, value):
        if value is None or value.is_empty or value == self._coordinates:
            return
        if value.latitude != self._coordinates.latitude:
            self.record_edit('Latitude', self._coordinates.latitude, value.latitude)
        if value.longitude != self._coordinates.longitude:
            self.record_edit('Longitude', self._coordinates.longitude, value.longitude)
        self._coordinates = value

    @property
    def formatted_address(self):
        return str(self._address)

    # =========================================================================
    # RELATED ROWS
    # =========================================================================

    def elevators(self):
        from inspection_db.elevator import Elevator

        if self.is_new:
            return []
        return Elevator.for_building(self._require_gateway(), self.id)

    def inspection_history(self) -> List[InspectionHistory]:
        """Inspections of every elevator in the building, newest first."""
        if self.is_new:
            return []
        rows = self._require_gateway().select(
            "SELECT DISTINCT Date, Type, Status, Inspector, Report FROM Inspection "
            "WHERE Elevator_ID IN (SELECT Elevator_ID FROM Elevator WHERE Building_ID = :building_id) "
            "ORDER BY Date DESC",
            {'building_id': self.id},
        )
        return [InspectionHistory.from_row(row) for row in rows]

    def contacts(self):
        from inspection_db.contact import Contact

        if self.is_new:
            return []
        gateway = self._require_gateway()
        rows = gateway.select(
            "SELECT DISTINCT Contact.* FROM Contact "
            "JOIN Building_Contact_Relations ON Building_Contact_Relations.Contact_ID = Contact.Contact_ID "
            "WHERE Building_Contact_Relations.Building_ID = :building_id "
            "ORDER BY Contact.Name",
            {'building_id': self.id},
        )
        return [Contact.from_row(row, gateway) for row in rows]

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    def column_values(self):
        return [
            ColumnValue('Company_ID', self._company_id or None),
            ColumnValue('ProposalNumber', self._proposal_number),
            ColumnValue('ProposalFile', self._proposal_file),
            ColumnValue('Name', self._name),
            ColumnValue('Address', self._address.street),
            ColumnValue('City', self._address.city),
            ColumnValue('State', self._address.state),
            ColumnValue('Zip', self._address.zip),
            ColumnValue('County', self._county.label),
            ColumnValue('Firm_Fee', self._firm_fee.value),
            ColumnValue('Hourly_Fee', self._hourly_fee.value),
            ColumnValue('Anniversary', self._anniversary.number),
            ColumnValue('Contractor', self._contractor),
            ColumnValue('Active', self._active),
            ColumnValue('Latitude', float(self._coordinates.latitude)),
            ColumnValue('Longitude', float(self._coordinates.longitude)),
        ]

    def display_title(self):
        return self._address.street

    def __str__(self):
        return self.name
