"""
SQLAlchemy models for the inspection records database.
Defines the business tables, the contact relation tables and the DBEdits audit table.

Table and column names follow the existing SQL Server schema; identity
columns are named <Table>_ID.
"""

from datetime import datetime
from sqlalchemy import (
    Column, String, Text, Integer, SmallInteger, Float, Numeric, Boolean,
    DateTime, ForeignKey, Index, UniqueConstraint
)
from inspection_db.connection import Base

AUDIT_TABLE = 'DBEdits'

# Deletes are only allowed on tables with this suffix
RELATION_SUFFIX = '_Relations'


# =============================================================================
# COMPANIES & BUILDINGS
# =============================================================================

class CompanyRow(Base):
    """Companies that own buildings."""
    __tablename__ = 'Company'

    Company_ID = Column(Integer, primary_key=True, autoincrement=True)
    Name = Column(String(255), nullable=False, unique=True)
    Street = Column(String(255))
    City = Column(String(100))
    State = Column(String(2))
    Zip = Column(String(5))


class BuildingRow(Base):
    """Buildings under an inspection contract."""
    __tablename__ = 'Building'

    Building_ID = Column(Integer, primary_key=True, autoincrement=True)
    Company_ID = Column(Integer, ForeignKey('Company.Company_ID'))
    ProposalNumber = Column(String(50))
    ProposalFile = Column(String(255))
    Name = Column(String(255))
    Address = Column(String(255), nullable=False)
    City = Column(String(100))
    State = Column(String(2))
    Zip = Column(String(5))
    County = Column(String(50))
    Firm_Fee = Column(Numeric(10, 2))
    Hourly_Fee = Column(Numeric(10, 2))
    Anniversary = Column(SmallInteger, default=0)  # month number, 0 = none
    Contractor = Column(String(255))
    Active = Column(Boolean, default=True)
    Latitude = Column(Float)
    Longitude = Column(Float)

    __table_args__ = (
        Index('ix_building_company', 'Company_ID'),
        Index('ix_building_address', 'Address'),
    )


# =============================================================================
# CONTACTS
# =============================================================================

class ContactRow(Base):
    """People we deal with at companies and buildings."""
    __tablename__ = 'Contact'

    Contact_ID = Column(Integer, primary_key=True, autoincrement=True)
    Name = Column(String(255), nullable=False)
    OfficePhone = Column(String(10))
    OfficeExt = Column(String(10))
    CellPhone = Column(String(10))
    Fax = Column(String(10))
    Email = Column(String(254))


class CompanyContactRelation(Base):
    """Many-to-many link between companies and contacts."""
    __tablename__ = 'Company_Contact_Relations'

    Company_ID = Column(Integer, ForeignKey('Company.Company_ID'), primary_key=True)
    Contact_ID = Column(Integer, ForeignKey('Contact.Contact_ID'), primary_key=True)


class BuildingContactRelation(Base):
    """Many-to-many link between buildings and contacts."""
    __tablename__ = 'Building_Contact_Relations'

    Building_ID = Column(Integer, ForeignKey('Building.Building_ID'), primary_key=True)
    Contact_ID = Column(Integer, ForeignKey('Contact.Contact_ID'), primary_key=True)


class ContactLogRow(Base):
    """Notes from calls and visits with a contact."""
    __tablename__ = 'ContactLog'

    ContactLog_ID = Column(Integer, primary_key=True, autoincrement=True)
    Contact_ID = Column(Integer, ForeignKey('Contact.Contact_ID'))
    Company_ID = Column(Integer, ForeignKey('Company.Company_ID'))
    Building_ID = Column(Integer, ForeignKey('Building.Building_ID'))
    Date = Column(DateTime, default=datetime.now)
    Notes = Column(Text)


# =============================================================================
# ELEVATORS & INSPECTIONS
# =============================================================================

class ElevatorRow(Base):
    """Individual units within a building."""
    __tablename__ = 'Elevator'

    Elevator_ID = Column(Integer, primary_key=True, autoincrement=True)
    Building_ID = Column(Integer, ForeignKey('Building.Building_ID'), nullable=False)
    Number = Column(String(50))  # state certificate number
    Type = Column(String(50))
    Nickname = Column(String(100))  # unit number as known on site

    __table_args__ = (
        UniqueConstraint('Building_ID', 'Number', name='uq_elevator_building_number'),
    )


class InspectionRow(Base):
    """One inspection of one elevator."""
    __tablename__ = 'Inspection'

    Inspection_ID = Column(Integer, primary_key=True, autoincrement=True)
    Elevator_ID = Column(Integer, ForeignKey('Elevator.Elevator_ID'), nullable=False)
    Date = Column(DateTime)
    Type = Column(String(50))
    Status = Column(String(50))
    Inspector = Column(String(100))
    Report = Column(String(255))

    __table_args__ = (
        Index('ix_inspection_elevator', 'Elevator_ID'),
    )


# =============================================================================
# AUDIT
# =============================================================================

class DBEditRow(Base):
    """Field-level edit history written on every commit."""
    __tablename__ = AUDIT_TABLE

    DBEdit_ID = Column(Integer, primary_key=True, autoincrement=True)
    TableName = Column(String(50), nullable=False)
    Item_ID = Column(Integer)
    ColumnName = Column(String(50), nullable=False)
    TimeStamp = Column(DateTime, nullable=False, default=datetime.now)
    OldValue = Column(Text)
    NewValue = Column(Text)
    UserName = Column(String(100))

    __table_args__ = (
        Index('ix_dbedits_item', 'TableName', 'Item_ID'),
        Index('ix_dbedits_timestamp', 'TimeStamp'),
    )
