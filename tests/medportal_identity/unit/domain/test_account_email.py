"""Tests for the AccountEmail value object."""

import pytest

from medportal_identity import AccountEmail, InvalidEmailError


class TestAccountEmail:
    def test_normalizes_case_and_whitespace(self):
        email = AccountEmail("  Alice@SaniatRmel.Hospital ")
        assert email.value == "alice@saniatrmel.hospital"

    def test_rejects_malformed(self):
        with pytest.raises(InvalidEmailError):
            AccountEmail("not-an-email")

    def test_rejects_empty(self):
        with pytest.raises(InvalidEmailError):
            AccountEmail("")

    def test_from_username_appends_domain(self):
        email = AccountEmail.from_username("alice", "saniatrmel.hospital")
        assert str(email) == "alice@saniatrmel.hospital"
        assert email.local_part == "alice"

    def test_from_username_rejects_blank(self):
        with pytest.raises(InvalidEmailError, match="cannot be empty"):
            AccountEmail.from_username("   ", "saniatrmel.hospital")

    def test_from_username_rejects_full_email(self):
        """Users type a username, never an email."""
        with pytest.raises(InvalidEmailError):
            AccountEmail.from_username("alice@example.com", "saniatrmel.hospital")
