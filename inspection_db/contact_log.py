"""
Contact log - read-only notes from calls and visits, listed per company or building.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from inspection_db.record import as_text, parse_datetime, parse_int

CONTACT_LOG_QUERY = (
    "SELECT ContactLog.ContactLog_ID, "
    "ContactLog.Contact_ID, Contact.Name AS Contact, "
    "ContactLog.Company_ID, Company.Name AS Company, "
    "ContactLog.Building_ID, Building.Address AS Building, "
    "ContactLog.Date, ContactLog.Notes "
    "FROM ContactLog "
    "LEFT JOIN Contact ON Contact.Contact_ID = ContactLog.Contact_ID "
    "LEFT JOIN Company ON Company.Company_ID = ContactLog.Company_ID "
    "LEFT JOIN Building ON Building.Building_ID = ContactLog.Building_ID "
    "WHERE ContactLog.{column} = :item_id "
    "ORDER BY ContactLog.Date DESC"
)


@dataclass(frozen=True)
class ContactLog:
    id: Optional[int]
    contact_id: int
    contact: str
    company_id: int
    company: str
    building_id: int
    building: str
    date: Optional[datetime]
    notes: str

    @classmethod
    def from_row(cls, row):
        return cls(
            id=parse_int(row.get('ContactLog_ID')) or None,
            contact_id=parse_int(row.get('Contact_ID')),
            contact=as_text(row.get('Contact')),
            company_id=parse_int(row.get('Company_ID')),
            company=as_text(row.get('Company')),
            building_id=parse_int(row.get('Building_ID')),
            building=as_text(row.get('Building')),
            date=parse_datetime(row.get('Date')),
            notes=as_text(row.get('Notes')),
        )

    @classmethod
    def for_company(cls, gateway, company) -> List['ContactLog']:
        """Log entries recorded against a company, newest first."""
        return cls._for(gateway, 'Company_ID', company.id)

    @classmethod
    def for_building(cls, gateway, building) -> List['ContactLog']:
        """Log entries recorded against a building, newest first."""
        return cls._for(gateway, 'Building_ID', building.id)

    @classmethod
    def _for(cls, gateway, column, item_id):
        if item_id is None:
            return []
        rows = gateway.select(CONTACT_LOG_QUERY.format(column=column), {'item_id': item_id})
        return [cls.from_row(row) for row in rows]
