"""Override records - locally persisted identities that beat the remote session.

Two variants exist and they are mutually exclusive: the admin override
pins an actor to a managed facility, the test override pins a single fixed
non-admin identity. Each lives under its own key of the persisted
key-value store as JSON.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from medportal_identity.domain.actor.actor import Actor
from medportal_identity.domain.actor.value_objects import ActorSource

ADMIN_OVERRIDE_KEY = "adminUser"
TEST_OVERRIDE_KEY = "mockUser"


class OverrideKind(str, Enum):
    ADMIN = "admin"
    TEST = "test"

    @property
    def storage_key(self) -> str:
        if self == OverrideKind.ADMIN:
            return ADMIN_OVERRIDE_KEY
        return TEST_OVERRIDE_KEY

    @property
    def actor_source(self) -> ActorSource:
        if self == OverrideKind.ADMIN:
            return ActorSource.ADMIN_OVERRIDE
        return ActorSource.TEST_OVERRIDE

    @classmethod
    def from_storage_key(cls, key: str | None) -> OverrideKind | None:
        for kind in cls:
            if kind.storage_key == key:
                return kind
        return None


class OverrideRecord(BaseModel):
    """Persisted override identity."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    kind: OverrideKind
    user_id: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    facility_id: str | None = None
    facility_name: str | None = None

    @model_validator(mode="after")
    def _check_facility(self) -> OverrideRecord:
        if self.kind == OverrideKind.ADMIN:
            if not self.facility_id or not self.facility_name:
                msg = "Admin override requires facility_id and facility_name"
                raise ValueError(msg)
        elif self.facility_id or self.facility_name:
            msg = "Test override cannot carry a facility"
            raise ValueError(msg)
        return self

    @property
    def storage_key(self) -> str:
        return self.kind.storage_key

    def to_json(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_json(cls, raw: str) -> OverrideRecord:
        """Parse a stored value; raises pydantic.ValidationError when malformed."""
        return cls.model_validate_json(raw)

    def to_actor(self) -> Actor:
        if self.kind == OverrideKind.ADMIN:
            return Actor.admin(
                identifier=self.email,
                facility_id=self.facility_id or "",
                facility_name=self.facility_name or "",
                user_id=self.user_id,
                source=ActorSource.ADMIN_OVERRIDE,
            )
        return Actor.standard(
            identifier=self.email,
            user_id=self.user_id,
            source=ActorSource.TEST_OVERRIDE,
        )
