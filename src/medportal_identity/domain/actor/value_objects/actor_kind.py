from enum import Enum


class ActorKind(str, Enum):
    """What the current actor is allowed to do."""

    ANONYMOUS = "anonymous"
    STANDARD = "standard"
    ADMIN = "admin"


class ActorSource(str, Enum):
    """Where the current actor was resolved from."""

    NONE = "none"
    REMOTE = "remote"
    ADMIN_OVERRIDE = "admin_override"
    TEST_OVERRIDE = "test_override"

    @property
    def is_override(self) -> bool:
        return self in (ActorSource.ADMIN_OVERRIDE, ActorSource.TEST_OVERRIDE)
