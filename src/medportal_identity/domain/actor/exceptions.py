"""Actor domain exceptions."""


class InvalidEmailError(ValueError):
    """Raised when an account email cannot be built from a username."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class InvalidActorError(ValueError):
    """Raised when actor attributes violate the actor invariants."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
