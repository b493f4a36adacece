"""Tests for login and password policies."""

import pytest

from docserver.core.modules.user.validators import validate_login, validate_password
from docserver.errors import InvalidLoginError, ValidationError, WeakPasswordError


class TestValidateLogin:
    def test_valid_logins(self):
        validate_login("alice1234")
        validate_login("ABCDEFGH")
        validate_login("12345678")

    def test_too_short(self):
        with pytest.raises(InvalidLoginError, match="at least 8 characters"):
            validate_login("alice12")

    @pytest.mark.parametrize("login", ["alice_1234", "alice 1234", "alice-1234", "алиса12345", "alice1234!"])
    def test_non_latin_alphanumeric_rejected(self, login):
        with pytest.raises(InvalidLoginError, match="latin letters and digits"):
            validate_login(login)

    def test_is_validation_error(self):
        with pytest.raises(ValidationError):
            validate_login("")


class TestValidatePassword:
    def test_valid_password(self):
        validate_password("Secur3P@ss")

    def test_too_short(self):
        with pytest.raises(WeakPasswordError, match="at least 8 characters"):
            validate_password("S3c@ss")

    def test_missing_uppercase(self):
        with pytest.raises(WeakPasswordError, match="uppercase and lowercase"):
            validate_password("secur3p@ss")

    def test_missing_lowercase(self):
        with pytest.raises(WeakPasswordError, match="uppercase and lowercase"):
            validate_password("SECUR3P@SS")

    def test_missing_digit(self):
        with pytest.raises(WeakPasswordError, match="digit"):
            validate_password("SecureP@ss")

    def test_missing_special_character(self):
        with pytest.raises(WeakPasswordError, match="special character"):
            validate_password("Secur3Pass")

    def test_space_counts_as_special(self):
        validate_password("Secur3 Pass")

    def test_longer_than_bcrypt_limit(self):
        with pytest.raises(WeakPasswordError, match="at most 72 bytes"):
            validate_password("Secur3P@ss" + "x" * 70)

    def test_limit_counts_utf8_bytes(self):
        validate_password("Secur3P@ss" + "x" * 62)
        with pytest.raises(WeakPasswordError, match="at most 72 bytes"):
            validate_password("Secur3P@ss" + "é" * 32)
