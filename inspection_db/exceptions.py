"""
Exceptions raised by the inspection database library.

Domain validation faults use validators.ValidationError; everything raised
from talking to the backend derives from InspectionDBError.
"""


class InspectionDBError(Exception):
    """Base class for backend and contract faults."""


class ConnectivityError(InspectionDBError):
    """A connection-level failure that is not a recognised host or login problem."""


class QueryError(InspectionDBError):
    """
    A statement failed on the server.

    Carries the statement text and the driver diagnostic so the failure can be
    diagnosed afterwards. Credentials never appear in either.
    """

    def __init__(self, query, diagnostic):
        self.query = query
        self.diagnostic = diagnostic
        super().__init__(
            f"An error occurred in the following SQL statement:\n{query}\nDetails: {diagnostic}"
        )


class DuplicateEntryError(QueryError):
    """A write collided with an existing row (primary key or unique constraint)."""

    def __init__(self, query, diagnostic, failed_object=None):
        super().__init__(query, diagnostic)
        self.failed_object = failed_object


class RowCountError(InspectionDBError):
    """A lookup expected exactly one row and got some other number."""

    def __init__(self, count, context=None):
        self.count = count
        message = f"Expected exactly one row, got {count}"
        if context:
            message = f"{message} ({context})"
        super().__init__(message)


class RestrictedTableError(InspectionDBError):
    """Deletes are only permitted on the contact relation tables."""
