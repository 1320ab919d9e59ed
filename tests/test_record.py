"""
Tests for change tracking shared by every record
"""
import pytest
from datetime import date, datetime
from decimal import Decimal

from inspection_db.company import Company
from inspection_db.elevator import Elevator
from inspection_db.exceptions import RowCountError
from inspection_db.record import (
    EditRecord, TrackedRecord, format_datetime, parse_bool, parse_datetime,
    parse_decimal, parse_float, parse_int
)
from validators import ValidationError


@pytest.mark.unit
class TestParsers:
    """Tests for lenient parsing of stored values"""

    @pytest.mark.parametrize('raw, expected', [
        ('7', 7), (7, 7), ('7.0', 7), (True, 1), ('', 0), (None, 0), ('seven', 0),
    ])
    def test_parse_int(self, raw, expected):
        """Test integers fall back to zero"""
        assert parse_int(raw) == expected

    def test_parse_float(self):
        """Test floats fall back to zero"""
        assert parse_float('38.8159') == 38.8159
        assert parse_float('n/a') == 0.0
        assert parse_float('nan') == 0.0
        assert parse_float('inf') == 0.0

    def test_parse_decimal(self):
        """Test decimals fall back to zero"""
        assert parse_decimal('1200.50') == Decimal('1200.50')
        assert parse_decimal('x') == Decimal('0')
        assert parse_decimal('NaN') == Decimal('0')
        assert parse_decimal('-Infinity') == Decimal('0')

    @pytest.mark.parametrize('raw, expected', [
        ('True', True), ('true', True), ('1', True), (1, True),
        ('False', False), ('0', False), (0, False), (False, False),
    ])
    def test_parse_bool(self, raw, expected):
        """Test the stored forms of a bit column"""
        assert parse_bool(raw) is expected

    def test_parse_bool_default(self):
        """Test unrecognised flags use the default"""
        assert parse_bool('maybe') is False
        assert parse_bool('maybe', default=True) is True

    @pytest.mark.parametrize('raw', [
        '2024-03-14 09:30:00', '2024-03-14 09:30:00.000000', '03/14/2024 09:30:00 AM',
        datetime(2024, 3, 14, 9, 30),
    ])
    def test_parse_datetime(self, raw):
        """Test ISO, driver and display forms"""
        assert parse_datetime(raw) == datetime(2024, 3, 14, 9, 30)

    def test_parse_date(self):
        """Test dates widen to midnight"""
        assert parse_datetime(date(2024, 3, 14)) == datetime(2024, 3, 14)
        assert parse_datetime('03/14/2024') == datetime(2024, 3, 14)

    def test_parse_datetime_default(self):
        """Test unparseable dates give the default"""
        assert parse_datetime('someday') is None
        assert parse_datetime('') is None

    def test_format_datetime(self):
        """Test unset and pre-2000 dates display blank"""
        assert format_datetime(None) == ''
        assert format_datetime(datetime(1, 1, 1)) == ''
        assert format_datetime(datetime(2024, 3, 14, 13, 5)) == '03/14/2024 01:05:00 PM'


@pytest.mark.unit
class TestEditTracking:
    """Tests for recording pending edits"""

    def test_new_record_is_unedited(self):
        """Test a fresh record has nothing pending"""
        company = Company()
        assert company.is_new is True
        assert company.is_edited is False
        assert company.edits == []

    def test_setter_records_edit(self):
        """Test a changed value is recorded with old and new text"""
        company = Company()
        company.name = 'Acme'
        assert company.is_edited is True
        assert company.edits == ['Name:  -> Acme']
        edit = company.pending_edits[0]
        assert edit == EditRecord('Company', None, 'Name', '', 'Acme')

    def test_same_value_is_not_an_edit(self):
        """Test assigning the current value records nothing"""
        company = Company.from_row({'Company_ID': 1, 'Name': 'Acme'})
        company.name = 'Acme'
        assert company.is_edited is False

    def test_blank_value_is_ignored(self):
        """Test blank input never clears a field"""
        company = Company.from_row({'Company_ID': 1, 'Name': 'Acme'})
        company.name = '   '
        assert company.name == 'Acme'
        assert company.is_edited is False

    def test_second_edit_keeps_first_old_value(self):
        """Test the audit row reads first value to final value"""
        company = Company.from_row({'Company_ID': 1, 'Name': 'Acme'})
        company.name = 'Acme Holdings'
        company.name = 'Acme Group'
        assert company.edits == ['Name: Acme -> Acme Group']
        assert len(company.pending_edits) == 1

    def test_edit_carries_current_identity(self):
        """Test edits on loaded rows know their item id"""
        elevator = Elevator.from_row({'Elevator_ID': 9, 'Number': '100'})
        elevator.number = '101'
        assert elevator.pending_edits[0].item_id == 9
        assert elevator.pending_edits[0].table_name == 'Elevator'

    def test_int_edit_blanks_zero(self):
        """Test an unset foreign key reads as blank in the edit"""
        elevator = Elevator()
        elevator.owner_id = 4
        assert elevator.edits == ['Building_ID:  -> 4']

    def test_zero_foreign_key_is_ignored(self):
        """Test zero never overwrites a foreign key"""
        elevator = Elevator.from_row({'Elevator_ID': 9, 'Building_ID': 4})
        elevator.owner_id = 0
        assert elevator.owner_id == 4
        assert elevator.is_edited is False

    def test_invalid_value_leaves_record_untouched(self):
        """Test validation runs before anything is recorded"""
        company = Company.from_row({'Company_ID': 1, 'Name': 'Acme', 'State': 'MD'})
        with pytest.raises(ValidationError):
            company.state = 'ZZ'
        assert company.state == 'MD'
        assert company.is_edited is False

    def test_state_is_recorded_uppercase(self):
        """Test the canonical form is what gets recorded"""
        company = Company()
        company.state = 'va'
        assert company.state == 'VA'
        assert company.edits == ['State:  -> VA']

    def test_same_state_different_case_is_not_an_edit(self):
        """Test case-only changes to the state are ignored"""
        company = Company.from_row({'Company_ID': 1, 'Name': 'Acme', 'State': 'MD'})
        company.state = 'md'
        assert company.is_edited is False

    def test_discard_edits(self):
        """Test pending edits can be dropped"""
        company = Company()
        company.name = 'Acme'
        company.discard_edits()
        assert company.is_edited is False


@pytest.mark.unit
class TestIdentity:
    """Tests for identity assignment"""

    def test_identity_cannot_change(self):
        """Test an assigned identity is permanent"""
        company = Company.from_row({'Company_ID': 3, 'Name': 'Acme'})
        with pytest.raises(ValueError):
            company._assign_id(4)

    def test_reassigning_same_identity_is_allowed(self):
        """Test the same value can be assigned again"""
        company = Company.from_row({'Company_ID': 3, 'Name': 'Acme'})
        company._assign_id(3)
        assert company.id == 3

    def test_commit_without_gateway(self):
        """Test a record with nowhere to save raises"""
        with pytest.raises(RuntimeError):
            Company().commit()

    def test_base_class_has_no_columns(self):
        """Test subclasses must describe their row"""
        with pytest.raises(NotImplementedError):
            TrackedRecord().column_values()

    def test_affirm_one_row(self):
        """Test anything but one row raises RowCountError"""
        assert TrackedRecord.affirm_one_row([{'a': 1}]) == {'a': 1}
        with pytest.raises(RowCountError) as exc_info:
            TrackedRecord.affirm_one_row([], 'Company_ID = 5')
        assert exc_info.value.count == 0
        assert 'Company_ID = 5' in str(exc_info.value)


@pytest.mark.unit
class TestConfirmation:
    """Tests for the save confirmation text"""

    def test_nothing_pending(self):
        """Test no confirmation without edits"""
        company = Company()
        assert company.confirmation_text() is None
        assert company.save_confirmation(lambda heading, body: True) is False

    def test_heading_and_body(self):
        """Test the heading names the record and the body lists edits"""
        company = Company.from_row({'Company_ID': 1, 'Name': 'Acme'})
        company.city = 'Towson'
        company.zip = '21204'
        heading, body = company.confirmation_text()
        assert heading == 'Save the Following Changes to Acme?'
        assert body == 'City:  -> Towson\nZip:  -> 21204'

    def test_title_override(self):
        """Test an explicit title replaces the default"""
        elevator = Elevator()
        elevator.number = '100'
        heading, _ = elevator.confirmation_text(title='Unit 100')
        assert heading == 'Save the Following Changes to Unit 100?'

    def test_confirm_callback_decides(self):
        """Test the callback's answer is returned"""
        company = Company()
        company.name = 'Acme'
        asked = []

        def confirm(heading, body):
            asked.append((heading, body))
            return False

        assert company.save_confirmation(confirm) is False
        assert asked == [('Save the Following Changes to Acme?', 'Name:  -> Acme')]
