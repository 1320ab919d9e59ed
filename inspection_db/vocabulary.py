"""
Closed vocabularies stored as display strings: counties, months, elevator
types, inspection types and inspection statuses.

Each member's value is its canonical display string. Lookups from text are
case-insensitive and always return the canonical member; anything outside
the set raises ValidationError.
"""

from enum import Enum

from validators import ValidationError


class Vocabulary(Enum):
    """Base for enums whose value is the display string."""

    @classmethod
    def from_string(cls, text):
        if text is None:
            text = ''
        key = str(text).strip().casefold()
        for member in cls:
            if member.value.casefold() == key:
                return member
        raise ValidationError(f"Invalid {cls.__name__}: {text!r}", field=cls.__name__)

    @classmethod
    def labels(cls):
        """Display strings in declaration order, skipping the blank 'none' entry."""
        return [member.value for member in cls if member.value]

    @property
    def label(self):
        return self.value

    def __str__(self):
        return self.value


class CountyName(Vocabulary):
    NONE = ''
    ALLEGANY = 'Allegany'
    ANNE_ARUNDEL = 'Anne Arundel'
    BALTIMORE = 'Baltimore'
    BALTIMORE_CITY = 'Baltimore City'
    CALVERT = 'Calvert'
    CAROLINE = 'Caroline'
    CARROLL = 'Carroll'
    CECIL = 'Cecil'
    CHARLES = 'Charles'
    DORCHESTER = 'Dorchester'
    FREDERICK = 'Frederick'
    GARRETT = 'Garrett'
    HARFORD = 'Harford'
    HOWARD = 'Howard'
    KENT = 'Kent'
    MONTGOMERY = 'Montgomery'
    PRINCE_GEORGES = "Prince George's"
    QUEEN_ANNES = "Queen Anne's"
    SAINT_MARYS = "Saint Mary's"
    SOMERSET = 'Somerset'
    TALBOT = 'Talbot'
    WASHINGTON = 'Washington'
    WICOMICO = 'Wicomico'
    WORCESTER = 'Worcester'
    WASHINGTON_DC = 'Washington D.C.'


class Month(Vocabulary):
    NONE = ''
    JAN = 'January'
    FEB = 'February'
    MAR = 'March'
    APR = 'April'
    MAY = 'May'
    JUN = 'June'
    JUL = 'July'
    AUG = 'August'
    SEP = 'September'
    OCT = 'October'
    NOV = 'November'
    DEC = 'December'

    @property
    def number(self):
        """1-12, or 0 for NONE."""
        return _MONTH_ORDER.index(self)

    @classmethod
    def from_number(cls, number):
        try:
            number = int(number)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid month number: {number!r}", field='Month')
        if not 0 <= number <= 12:
            raise ValidationError(f"Invalid month number: {number}", field='Month')
        return _MONTH_ORDER[number]


_MONTH_ORDER = list(Month)


class ElevatorType(Vocabulary):
    HYDRAULIC = 'Hydraulic'
    TRACTION = 'Traction'
    ESCALATOR = 'Escalator'
    WHEELCHAIR_LIFT = 'Wheelchair Lift'
    DUMBWAITER = 'Dumbwaiter'
    INCLINED_LIFT = 'Inclined Lift'
    LULA_LIFT = 'LULA Lift'
    HANDICAPPED_LIFT = 'Handicapped Lift'
    VERTICAL_LIFT = 'Vertical Lift'


class InspectionType(Vocabulary):
    PERIODIC = 'Periodic'
    PERIODIC_REINSPECTION = 'Periodic Reinspection'
    CAT1_PERIODIC = 'Category 1 & Periodic'
    CAT1_PERIODIC_REINSPECTION = 'Category 1 & Periodic Reinspection'
    CAT5_PERIODIC = 'Category 5 & Periodic'
    CAT5_PERIODIC_REINSPECTION = 'Category 5 & Periodic Reinspection'
    ANNUAL = 'Annual'
    REINSPECTION = 'Reinspection'
    FIVE_YEAR = 'Five Year Test'


class InspectionStatus(Vocabulary):
    CLEAN = 'Clean'
    OUTSTANDING = 'Outstanding Items'
    PAPERWORK = 'Paperwork Only'
    NO_INSPECTION = 'No Inspection'


def string_to_tag(vocabulary, text):
    return vocabulary.from_string(text)


def tag_to_string(tag):
    return tag.value


def month_to_number(month):
    return month.number


def number_to_month(number):
    return Month.from_number(number)
