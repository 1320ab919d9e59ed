"""
Inspection records database library.
Provides the query gateway, change-tracked entities and their value types.
"""

from inspection_db.connection import (
    Base,
    ConnectionSettings,
    create_db_engine,
    open_connection,
    connection_up,
    current_user,
    init_db
)

from inspection_db.exceptions import (
    InspectionDBError,
    ConnectivityError,
    QueryError,
    DuplicateEntryError,
    RowCountError,
    RestrictedTableError
)

from inspection_db.columns import ColumnValue
from inspection_db.query import QueryGateway, QueryEvent, WriteIntent
from inspection_db.statistics import ConnectionStatistics
from inspection_db.audit import AuditLog
from inspection_db.record import EditRecord, TrackedRecord
from inspection_db.structs import Address, GeographicCoordinates, Money, TelephoneNumber
from inspection_db.vocabulary import (
    CountyName,
    Month,
    ElevatorType,
    InspectionType,
    InspectionStatus
)

from inspection_db.company import Company
from inspection_db.building import Building, InspectionHistory
from inspection_db.contact import Contact
from inspection_db.elevator import Elevator
from inspection_db.inspection import Inspection
from inspection_db.contact_log import ContactLog

__all__ = [
    # Connection
    'Base',
    'ConnectionSettings',
    'create_db_engine',
    'open_connection',
    'connection_up',
    'current_user',
    'init_db',
    # Errors
    'InspectionDBError',
    'ConnectivityError',
    'QueryError',
    'DuplicateEntryError',
    'RowCountError',
    'RestrictedTableError',
    # Queries
    'ColumnValue',
    'QueryGateway',
    'QueryEvent',
    'WriteIntent',
    'ConnectionStatistics',
    'AuditLog',
    'EditRecord',
    'TrackedRecord',
    # Value types
    'Address',
    'GeographicCoordinates',
    'Money',
    'TelephoneNumber',
    'CountyName',
    'Month',
    'ElevatorType',
    'InspectionType',
    'InspectionStatus',
    # Entities
    'Company',
    'Building',
    'InspectionHistory',
    'Contact',
    'Elevator',
    'Inspection',
    'ContactLog'
]
