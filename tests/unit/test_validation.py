"""Unit tests for field validation rules."""

import pytest

from user_service.kernel.identity.validation import (
    FULL_NAME_FIELD,
    PASSWORD_FIELD,
    PHONE_NUMBER_FIELD,
    validate_full_name,
    validate_password,
    validate_phone_number,
    validate_profile_update,
    validate_registration,
)

LENGTH_MESSAGE = "must be minimum 10 characters and maximum 13 characters"
PREFIX_MESSAGE = "must start with the Indonesia country code “+62”"


class TestFullName:
    
    @pytest.mark.parametrize("name", ["abc", "fullloooo", "x" * 60])
    def test_valid(self, name):
        assert validate_full_name(name) is None
    
    @pytest.mark.parametrize("name", ["", "ab", "x" * 61])
    def test_invalid_length(self, name):
        assert validate_full_name(name) == (
            "must be at minimum 3 characters and maximum 60 characters"
        )
    
    @pytest.mark.parametrize("name", ["日本", "é" * 30])
    def test_length_counts_utf8_bytes(self, name):
        """Two CJK characters are six bytes; thirty accented letters are sixty."""
        assert validate_full_name(name) is None

    @pytest.mark.parametrize("name", ["é", "é" * 31])
    def test_byte_length_out_of_range(self, name):
        assert validate_full_name(name) == (
            "must be at minimum 3 characters and maximum 60 characters"
        )


class TestPhoneNumber:
    
    @pytest.mark.parametrize("phone", ["+6281234567", "+62812345678", "+628123456789"])
    def test_valid(self, phone):
        assert validate_phone_number(phone) is None
    
    def test_length_and_prefix_both_reported(self):
        assert validate_phone_number("08123456") == f"{LENGTH_MESSAGE} & {PREFIX_MESSAGE}"
    
    def test_prefix_only(self):
        assert validate_phone_number("0812345678") == PREFIX_MESSAGE
    
    def test_length_only(self):
        assert validate_phone_number("+6281234567890") == LENGTH_MESSAGE
    
    @pytest.mark.parametrize("phone", ["", "0", "08"])
    def test_too_short_for_prefix_check(self, phone):
        """Fewer than three characters only trips the length rule."""
        assert validate_phone_number(phone) == LENGTH_MESSAGE
    
    def test_three_characters_checks_prefix(self):
        assert validate_phone_number("081") == f"{LENGTH_MESSAGE} & {PREFIX_MESSAGE}"
        assert validate_phone_number("+62") == LENGTH_MESSAGE

    def test_length_counts_utf8_bytes(self):
        """A two-byte character counts twice toward both bounds."""
        assert validate_phone_number("+6281234é") is None
        assert validate_phone_number("+6281234567é") is None
        assert validate_phone_number("+62812345678é") == LENGTH_MESSAGE


class TestPassword:
    
    COMPOSITION = (
        "must containing at least 1 capital characters AND 1 number "
        "AND 1 special (non alpha-numeric) characters"
    )
    LENGTH = "must be minimum 6 characters and maximum 64 characters"
    
    @pytest.mark.parametrize("password", ["AAssff1!", "Ab1$xy", "Ab1" + "+" * 61])
    def test_valid(self, password):
        assert validate_password(password) is None
    
    def test_length_and_composition_both_reported(self):
        assert validate_password("asfa") == f"{self.LENGTH} & {self.COMPOSITION}"
    
    def test_too_long(self):
        assert validate_password("Ab1!" + "a" * 61) == self.LENGTH
    
    @pytest.mark.parametrize("password", ["abcdef1!", "ABCDEFG!", "ABCdef12"])
    def test_missing_class(self, password):
        assert validate_password(password) == self.COMPOSITION
    
    def test_unicode_classes(self):
        """Non-ASCII uppercase, digits and symbols count."""
        assert validate_password("Ünïcode٣€") is None
    
    def test_length_counts_characters(self):
        """Five characters, even if some are multi-byte, are too short."""
        assert validate_password("Ä1€bc") == self.LENGTH


class TestAggregates:
    
    def test_registration_valid(self):
        assert validate_registration("+62812345678", "fullloooo", "AAssff1!") == {}
    
    def test_registration_collects_every_field(self):
        outcome = validate_registration("08123456", "ab", "asfa")
        
        assert set(outcome) == {FULL_NAME_FIELD, PASSWORD_FIELD, PHONE_NUMBER_FIELD}
        assert " & " in outcome[PHONE_NUMBER_FIELD]
        assert " & " in outcome[PASSWORD_FIELD]
    
    def test_profile_update_skips_empty_fields(self):
        assert validate_profile_update(phone_number="", full_name="") == {}
        assert validate_profile_update() == {}
    
    def test_profile_update_checks_supplied_fields(self):
        outcome = validate_profile_update(phone_number="0812", full_name="new name")
        
        assert set(outcome) == {PHONE_NUMBER_FIELD}
