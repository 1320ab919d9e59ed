"""
Contact - people we deal with at the companies and buildings.

A contact can be related to any number of companies and buildings through
the *_Contact_Relations tables. New relations are written when the contact
is committed; removing a relation deletes it straight away.
"""

import logging
from typing import Dict, List

from inspection_db.columns import ColumnValue
from inspection_db.record import TrackedRecord, as_text, parse_int
from inspection_db.structs import TelephoneNumber
from validators import ensure_valid, validate_email

logger = logging.getLogger(__name__)

COMPANY_RELATIONS = 'Company_Contact_Relations'
BUILDING_RELATIONS = 'Building_Contact_Relations'


def _as_phone(value, extension=''):
    if isinstance(value, TelephoneNumber):
        return value
    return TelephoneNumber.parse(as_text(value), extension)


class Contact(TrackedRecord):
    table_name = 'Contact'
    id_column = 'Contact_ID'

    def __init__(self, gateway=None):
        super().__init__(gateway)
        self._name = ''
        self._office_phone = TelephoneNumber()
        self._cell_phone = TelephoneNumber()
        self._fax = TelephoneNumber()
        self._email = ''
        # id -> display name
        self._companies: Dict[int, str] = {}
        self._buildings: Dict[int, str] = {}
        # Relations added since the last commit
        self._new_companies: List[int] = []
        self._new_buildings: List[int] = []

    # =========================================================================
    # LOADING
    # =========================================================================

    @classmethod
    def from_row(cls, row, gateway=None, load_relations=True):
        """
        Hydrate from a Contact row.

        Stored phone numbers that do not hold ten digits are treated as empty.
        """
        contact = cls(gateway)
        contact._assign_id(parse_int(row.get('Contact_ID')) or None)
        contact._name = as_text(row.get('Name'))
        contact._office_phone = cls._stored_phone(row.get('OfficePhone'), row.get('OfficeExt'))
        contact._cell_phone = cls._stored_phone(row.get('CellPhone'))
        contact._fax = cls._stored_phone(row.get('Fax'))
        contact._email = as_text(row.get('Email'))

        if load_relations and gateway is not None and contact.id is not None:
            contact._load_relations(gateway)
        return contact

    @staticmethod
    def _stored_phone(number, extension=''):
        try:
            return TelephoneNumber.parse(as_text(number), as_text(extension))
        except ValueError:
            logger.warning(f"Ignoring malformed stored phone number {number!r}")
            return TelephoneNumber()

    @classmethod
    def load(cls, gateway, contact_id):
        rows = gateway.select_where('*', 'Contact', 'Contact_ID = :contact_id', {'contact_id': contact_id})
        return cls.from_row(cls.affirm_one_row(rows, f"Contact_ID = {contact_id}"), gateway)

    def _load_relations(self, gateway):
        rows = gateway.select(
            f"SELECT DISTINCT Company.Company_ID, Company.Name FROM Company "
            f"JOIN {COMPANY_RELATIONS} ON {COMPANY_RELATIONS}.Company_ID = Company.Company_ID "
            f"WHERE {COMPANY_RELATIONS}.Contact_ID = :contact_id ORDER BY Company.Name",
            {'contact_id': self.id},
        )
        self._companies = {parse_int(row['Company_ID']): as_text(row['Name']) for row in rows}

        rows = gateway.select(
            f"SELECT DISTINCT Building.Building_ID, Building.Address FROM Building "
            f"JOIN {BUILDING_RELATIONS} ON {BUILDING_RELATIONS}.Building_ID = Building.Building_ID "
            f"WHERE {BUILDING_RELATIONS}.Contact_ID = :contact_id ORDER BY Building.Address",
            {'contact_id': self.id},
        )
        self._buildings = {parse_int(row['Building_ID']): as_text(row['Address']) for row in rows}

    # =========================================================================
    # FIELDS
    # =========================================================================

    @property
    def name(self):
        return self._name

    @name.setter
    def name(self, value):
        self._update_text('_name', 'Name', value)

    @property
    def office_phone(self) -> TelephoneNumber:
        return self._office_phone

    @office_phone.setter
    def office_phone(self, value):
        phone = _as_phone(value)
        if phone.is_empty or phone == self._office_phone:
            return
        # Number and extension live in separate columns
        if phone.number != self._office_phone.number:
            self.record_edit('OfficePhone', self._office_phone.number, phone.number)
        if phone.ext != self._office_phone.ext:
            self.record_edit('OfficeExt', self._office_phone.ext, phone.ext)
        self._office_phone = phone

    @property
    def cell_phone(self) -> TelephoneNumber:
        return self._cell_phone

    @cell_phone.setter
    def cell_phone(self, value):
        self._set_phone('_cell_phone', 'CellPhone', value)

    @property
    def fax(self) -> TelephoneNumber:
        return self._fax

    @fax.setter
    def fax(self, value):
        self._set_phone('_fax', 'Fax', value)

    def _set_phone(self, attr, column_name, value):
        phone = _as_phone(value)
        current = getattr(self, attr)
        if phone.is_empty or phone.number == current.number:
            return
        self.record_edit(column_name, current.number, phone.number)
        setattr(self, attr, phone)

    @property
    def email(self):
        return self._email

    @email.setter
    def email(self, value):
        value = as_text(value)
        if not value or value == self._email:
            return
        ensure_valid(validate_email(value), field='Email')
        self.record_edit('Email', self._email, value)
        self._email = value

    # =========================================================================
    # RELATIONS
    # =========================================================================

    @property
    def company_names(self) -> List[str]:
        return list(self._companies.values())

    @property
    def building_names(self) -> List[str]:
        return list(self._buildings.values())

    def add_company(self, company_name):
        """Relate this contact to a company by name; saved on the next commit."""
        gateway = self._require_gateway()
        row = self.affirm_one_row(
            gateway.select_where('Company_ID', 'Company', 'Name = :name', {'name': company_name}),
            f"Company '{company_name}'",
        )
        company_id = parse_int(row['Company_ID'])
        if company_id in self._companies:
            return
        self._companies[company_id] = company_name
        self._new_companies.append(company_id)

    def add_building(self, building_address):
        """Relate this contact to a building by street address; saved on the next commit."""
        gateway = self._require_gateway()
        row = self.affirm_one_row(
            gateway.select_where('Building_ID', 'Building', 'Address = :address', {'address': building_address}),
            f"Building at '{building_address}'",
        )
        building_id = parse_int(row['Building_ID'])
        if building_id in self._buildings:
            return
        self._buildings[building_id] = building_address
        self._new_buildings.append(building_id)

    def remove_from_company(self, company):
        """
        Delete the relation to a company.

        Args:
            company: Company_ID, or the company name
        """
        gateway = self._require_gateway()
        if isinstance(company, str):
            row = self.affirm_one_row(
                gateway.select_where('Company_ID', 'Company', 'Name = :name', {'name': company}),
                f"Company '{company}'",
            )
            company = parse_int(row['Company_ID'])

        self._companies.pop(company, None)
        if company in self._new_companies:
            self._new_companies.remove(company)
            return
        if self.id is not None:
            gateway.delete(
                COMPANY_RELATIONS,
                'Contact_ID = :contact_id AND Company_ID = :company_id',
                {'contact_id': self.id, 'company_id': company},
            )

    def remove_from_building(self, building):
        """
        Delete the relation to a building.

        Args:
            building: Building_ID, or the building's street address
        """
        gateway = self._require_gateway()
        if isinstance(building, str):
            row = self.affirm_one_row(
                gateway.select_where('Building_ID', 'Building', 'Address = :address', {'address': building}),
                f"Building at '{building}'",
            )
            building = parse_int(row['Building_ID'])

        self._buildings.pop(building, None)
        if building in self._new_buildings:
            self._new_buildings.remove(building)
            return
        if self.id is not None:
            gateway.delete(
                BUILDING_RELATIONS,
                'Contact_ID = :contact_id AND Building_ID = :building_id',
                {'contact_id': self.id, 'building_id': building},
            )

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    def column_values(self):
        return [
            ColumnValue('Name', self._name),
            ColumnValue('OfficePhone', self._office_phone.number),
            ColumnValue('OfficeExt', self._office_phone.ext),
            ColumnValue('CellPhone', self._cell_phone.number),
            ColumnValue('Fax', self._fax.number),
            ColumnValue('Email', self._email),
        ]

    def _after_row_saved(self, gateway):
        while self._new_companies:
            gateway.insert(COMPANY_RELATIONS, [
                ColumnValue('Company_ID', self._new_companies[0]),
                ColumnValue('Contact_ID', self.id),
            ])
            self._new_companies.pop(0)

        while self._new_buildings:
            gateway.insert(BUILDING_RELATIONS, [
                ColumnValue('Building_ID', self._new_buildings[0]),
                ColumnValue('Contact_ID', self.id),
            ])
            self._new_buildings.pop(0)

    def display_title(self):
        return self._name

    def __str__(self):
        return self._name
