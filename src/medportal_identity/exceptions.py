"""Identity and session exceptions.

Sign-in and sign-up never raise these to their caller; they are returned
inside an ``AuthResult`` so the portal can render them inline. Storage
errors are raised by key-value store adapters and swallowed by the
session resolver.
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class RegistrationError(AuthError):
    """Raised when the backend refuses to register an account.

    The message is the backend's own (duplicate identifier, malformed
    identifier, weak password).
    """

    def __init__(self, message: str = "Registration failed"):
        super().__init__(message)


class AuthenticationError(AuthError):
    """Raised when the backend rejects a credential during sign-in."""

    def __init__(self, message: str = "Invalid login credentials"):
        super().__init__(message)


class WeakPasswordError(RegistrationError):
    """Raised when a password doesn't meet strength requirements."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)


class AccountAlreadyExistsError(RegistrationError):
    """Raised when an account with the same email is already registered."""

    def __init__(self, message: str = "User already registered"):
        super().__init__(message)


class BackendUnavailableError(AuthError):
    """Raised when the hosted backend cannot be reached."""

    def __init__(self, message: str = "Authentication service unavailable"):
        super().__init__(message)


class TransientStorageError(AuthError):
    """Raised when the persisted key-value store cannot be read or written."""

    def __init__(self, message: str = "Persisted storage unavailable"):
        super().__init__(message)
