"""
Company - owners of the buildings under contract.
"""

from typing import List

from inspection_db.columns import ColumnValue
from inspection_db.record import AddressedRecord, as_text, parse_int


class Company(AddressedRecord):
    table_name = 'Company'
    id_column = 'Company_ID'

    def __init__(self, gateway=None):
        super().__init__(gateway)
        self._name = ''

    # =========================================================================
    # LOADING
    # =========================================================================

    @classmethod
    def from_row(cls, row, gateway=None):
        company = cls(gateway)
        company._assign_id(parse_int(row.get('Company_ID')) or None)
        company._name = as_text(row.get('Name'))
        company._address = cls._address_from_row(row)
        return company

    @classmethod
    def load(cls, gateway, company_id):
        rows = gateway.select(
            "SELECT * FROM Company WHERE Company_ID = :company_id",
            {'company_id': company_id},
        )
        return cls.from_row(cls.affirm_one_row(rows, f"Company_ID = {company_id}"), gateway)

    @classmethod
    def load_by_name(cls, gateway, name):
        rows = gateway.select("SELECT * FROM Company WHERE Name = :name", {'name': name})
        return cls.from_row(cls.affirm_one_row(rows, f"Company '{name}'"), gateway)

    @classmethod
    def names(cls, gateway) -> List[str]:
        """Every company name, alphabetically."""
        rows = gateway.select("SELECT Name FROM Company ORDER BY Name")
        return [as_text(row['Name']) for row in rows]

    # =========================================================================
    # FIELDS
    # =========================================================================

    @property
    def name(self):
        return self._name

    @name.setter
    def name(self, value):
        self._update_text('_name', 'Name', value)

    # =========================================================================
    # RELATED ROWS
    # =========================================================================

    def building_names(self) -> List[str]:
        """Street addresses of every building this company owns."""
        if self.is_new:
            return []
        gateway = self._require_gateway()
        rows = gateway.select_where(
            'Address', 'Building', 'Company_ID = :company_id ORDER BY Address',
            {'company_id': self.id},
        )
        return [as_text(row['Address']) for row in rows]

    def buildings(self):
        from inspection_db.building import Building

        if self.is_new:
            return []
        gateway = self._require_gateway()
        rows = gateway.select(
            "SELECT * FROM Building WHERE Company_ID = :company_id ORDER BY Address",
            {'company_id': self.id},
        )
        return [Building.from_row(row, gateway) for row in rows]

    def contacts(self):
        from inspection_db.contact import Contact

        if self.is_new:
            return []
        gateway = self._require_gateway()
        rows = gateway.select(
            "SELECT DISTINCT Contact.* FROM Contact "
            "JOIN Company_Contact_Relations ON Company_Contact_Relations.Contact_ID = Contact.Contact_ID "
            "WHERE Company_Contact_Relations.Company_ID = :company_id "
            "ORDER BY Contact.Name",
            {'company_id': self.id},
        )
        return [Contact.from_row(row, gateway) for row in rows]

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    def column_values(self):
        return [
            ColumnValue('Name', self._name),
            ColumnValue('Street', self._address.street),
            ColumnValue('City', self._address.city),
            ColumnValue('State', self._address.state),
            ColumnValue('Zip', self._address.zip),
        ]

    def display_title(self):
        return self._name

    def to_condensed_string(self):
        """Pipe-separated id, name, street, city, state and zip."""
        return '|'.join([
            '' if self.id is None else str(self.id),
            self._name,
            self._address.street,
            self._address.city,
            self._address.state,
            self._address.zip,
        ])

    def __str__(self):
        return self._name
