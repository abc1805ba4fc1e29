"""Tests for PasswordHashingService."""

import pytest

from medportal_identity import WeakPasswordError


class TestPasswordHashingService:
    def test_hash_and_verify(self, password_service):
        hashed = password_service.hash("secret-123")

        assert hashed != "secret-123"
        assert password_service.verify("secret-123", hashed)
        assert not password_service.verify("secret-124", hashed)

    def test_verify_garbage_hash(self, password_service):
        assert not password_service.verify("secret-123", "not-a-hash")

    @pytest.mark.parametrize("password", ["", "12345", "x" * 73])
    def test_weak_passwords(self, password_service, password):
        with pytest.raises(WeakPasswordError):
            password_service.hash(password)

    def test_backend_message_for_short_password(self, password_service):
        with pytest.raises(WeakPasswordError, match="at least 6 characters"):
            password_service.validate_strength("12345")
