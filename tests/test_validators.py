"""
Tests for input validation utilities
"""
import pytest
from validators import (
    ValidationError,
    ensure_valid,
    validate_email,
    validate_phone,
    validate_state,
    validate_zip,
    phone_digits
)


@pytest.mark.unit
class TestEmailValidation:
    """Tests for email validation"""

    def test_valid_email(self):
        """Test valid email passes"""
        assert validate_email('dana@acme.example.com') == (True, None)

    @pytest.mark.parametrize('email', ['dana', 'dana@acme', 'dana.acme.com', '@acme.com'])
    def test_invalid_email(self, email):
        """Test malformed emails fail"""
        is_valid, error = validate_email(email)
        assert is_valid is False
        assert error == 'Invalid E-mail format'

    def test_empty_email(self):
        """Test empty email fails"""
        is_valid, _ = validate_email('')
        assert is_valid is False


@pytest.mark.unit
class TestPhoneValidation:
    """Tests for phone validation"""

    def test_phone_digits_strips_punctuation(self):
        """Test punctuation is removed"""
        assert phone_digits('(410) 290-8913') == '4102908913'

    @pytest.mark.parametrize('phone', ['410-290-8913', '4102908913', '(410) 290.8913'])
    def test_valid_phone(self, phone):
        """Test ten digit numbers pass"""
        assert validate_phone(phone) == (True, None)

    @pytest.mark.parametrize('phone', ['410-290-891', '1-410-290-8913'])
    def test_wrong_digit_count(self, phone):
        """Test 9 and 11 digit numbers fail"""
        is_valid, _ = validate_phone(phone)
        assert is_valid is False


@pytest.mark.unit
class TestStateAndZip:
    """Tests for address validation"""

    def test_valid_state(self):
        """Test a real state passes"""
        assert validate_state('MD') == (True, None)

    def test_state_is_case_insensitive(self):
        """Test lower case abbreviations pass"""
        assert validate_state('md') == (True, None)

    def test_territories_and_dc(self):
        """Test DC and territories pass"""
        for code in ('DC', 'PR', 'GU', 'VI'):
            assert validate_state(code)[0] is True

    @pytest.mark.parametrize('state', ['ZZ', 'M', 'MDX', ''])
    def test_invalid_state(self, state):
        """Test unknown or wrong-length states fail"""
        assert validate_state(state)[0] is False

    def test_valid_zip(self):
        """Test five digit zip passes"""
        assert validate_zip('21201') == (True, None)

    @pytest.mark.parametrize('zip_code', ['2120', '212011', 'ABCDE', '2120A'])
    def test_invalid_zip(self, zip_code):
        """Test malformed zips fail"""
        assert validate_zip(zip_code)[0] is False


@pytest.mark.unit
class TestEnsureValid:
    """Tests for turning a failed result into an exception"""

    def test_passes_through_valid_result(self):
        """Test a valid result does not raise"""
        ensure_valid((True, None), field='State')

    def test_raises_validation_error(self):
        """Test a failed result raises with message and field"""
        with pytest.raises(ValidationError) as exc_info:
            ensure_valid(validate_state('ZZ'), field='State')
        assert exc_info.value.field == 'State'
        assert 'abbreviation' in exc_info.value.message

    def test_validation_error_is_value_error(self):
        """Test callers catching ValueError also catch validation faults"""
        assert issubclass(ValidationError, ValueError)

