"""Password hashing for locally held accounts.

The hosted backend hashes its own passwords; this service backs the
in-process auth backend used for development and tests so that it
enforces the same rules the hosted one does.
"""

import bcrypt

from medportal_identity.exceptions import WeakPasswordError


class PasswordHashingService:
    """bcrypt hashing plus the backend's password strength rule.

    Examples
    --------
    >>> service = PasswordHashingService(rounds=4)
    >>> hashed = service.hash("secret-123")
    >>> service.verify("secret-123", hashed)
    True
    """

    MIN_LENGTH = 6
    MAX_LENGTH = 72  # bcrypt only looks at the first 72 bytes

    def __init__(self, rounds: int = 12):
        """
        Parameters
        ----------
        rounds
            The bcrypt work factor. Tests use 4 to stay fast.
        """
        self._rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Raises
        ------
        WeakPasswordError
            If password doesn't meet requirements
        """
        self.validate_strength(password)
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"),
                password_hash.encode("utf-8"),
            )
        except (ValueError, TypeError):
            return False

    def validate_strength(self, password: str) -> None:
        if not password:
            msg = "Password cannot be empty"
            raise WeakPasswordError(msg)

        if len(password) < self.MIN_LENGTH:
            msg = f"Password should be at least {self.MIN_LENGTH} characters."
            raise WeakPasswordError(msg)

        if len(password.encode("utf-8")) > self.MAX_LENGTH:
            msg = f"Password cannot exceed {self.MAX_LENGTH} bytes"
            raise WeakPasswordError(msg)
