"""Identity infrastructure services."""

from medportal_identity.services.password_service import PasswordHashingService

__all__ = ["PasswordHashingService"]
