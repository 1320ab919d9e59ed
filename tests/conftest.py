"""
Pytest configuration and shared fixtures
"""
import sys
import pytest
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from sqlalchemy.pool import StaticPool

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from inspection_db.columns import ColumnValue  # noqa: E402
from inspection_db.connection import ConnectionSettings, create_db_engine, init_db  # noqa: E402
from inspection_db.query import QueryGateway  # noqa: E402


@pytest.fixture
def app_config():
    """Fixture providing test configuration"""
    from config import TestingConfig
    return TestingConfig


@pytest.fixture
def engine(app_config):
    """In-memory SQLite engine with the schema created"""
    settings = ConnectionSettings.from_config(app_config)
    eng = create_db_engine(
        settings,
        poolclass=StaticPool,
        connect_args={'check_same_thread': False},
    )
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def gateway(engine):
    """Query gateway over the test engine"""
    return QueryGateway(engine)


@pytest.fixture
def sample_rows(gateway):
    """
    Fixture inserting one company with one building, two elevators,
    an inspection and a contact. Returns the identities.
    """
    company_id = gateway.insert('Company', [
        ColumnValue('Name', 'Acme Property Management'),
        ColumnValue('Street', '100 Main St'),
        ColumnValue('City', 'Baltimore'),
        ColumnValue('State', 'MD'),
        ColumnValue('Zip', '21201'),
    ])
    building_id = gateway.insert('Building', [
        ColumnValue('Company_ID', company_id),
        ColumnValue('ProposalNumber', 'P-1001'),
        ColumnValue('Name', 'Acme Tower'),
        ColumnValue('Address', '200 Pratt St'),
        ColumnValue('City', 'Baltimore'),
        ColumnValue('State', 'MD'),
        ColumnValue('Zip', '21202'),
        ColumnValue('County', 'Baltimore City'),
        ColumnValue('Firm_Fee', Decimal('1200.50')),
        ColumnValue('Hourly_Fee', Decimal('95.00')),
        ColumnValue('Anniversary', 3),
        ColumnValue('Contractor', 'Otis'),
        ColumnValue('Active', True),
        ColumnValue('Latitude', 39.2866),
        ColumnValue('Longitude', -76.6122),
    ])
    elevator_ids = [
        gateway.insert('Elevator', [
            ColumnValue('Building_ID', building_id),
            ColumnValue('Number', number),
            ColumnValue('Type', elevator_type),
            ColumnValue('Nickname', nickname),
        ])
        for number, elevator_type, nickname in (
            ('12345', 'Traction', 'P1'),
            ('12346', 'Hydraulic', 'F1'),
        )
    ]
    inspection_id = gateway.insert('Inspection', [
        ColumnValue('Elevator_ID', elevator_ids[0]),
        ColumnValue('Date', datetime(2024, 3, 14, 9, 30)),
        ColumnValue('Type', 'Periodic'),
        ColumnValue('Status', 'Clean'),
        ColumnValue('Inspector', 'Jon Smith'),
        ColumnValue('Report', 'reports/2024-03-14.pdf'),
    ])
    contact_id = gateway.insert('Contact', [
        ColumnValue('Name', 'Dana Reyes'),
        ColumnValue('OfficePhone', '4102908913'),
        ColumnValue('OfficeExt', '12'),
        ColumnValue('CellPhone', '4435550100'),
        ColumnValue('Fax', ''),
        ColumnValue('Email', 'dana@acme.example.com'),
    ])
    gateway.insert('Company_Contact_Relations', [
        ColumnValue('Company_ID', company_id),
        ColumnValue('Contact_ID', contact_id),
    ])
    return {
        'company_id': company_id,
        'building_id': building_id,
        'elevator_ids': elevator_ids,
        'inspection_id': inspection_id,
        'contact_id': contact_id,
    }


@pytest.fixture
def building_row():
    """A Building row as the driver might hand it back, every value as text"""
    return {
        'Building_ID': '7',
        'Company_ID': '3',
        'ProposalNumber': 'P-2002',
        'ProposalFile': '',
        'Name': '',
        'Address': '1 Market Pl',
        'City': 'Upper Marlboro',
        'State': 'MD',
        'Zip': '20772',
        'County': "Prince George's",
        'Firm_Fee': '1200.50',
        'Hourly_Fee': 'n/a',
        'Anniversary': '11',
        'Contractor': 'Schindler',
        'Active': 'True',
        'Latitude': '38.8159',
        'Longitude': '-76.7497',
    }
