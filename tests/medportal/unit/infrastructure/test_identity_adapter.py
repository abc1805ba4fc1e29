"""Tests for IdentityAdapter and PortalContext."""

from unittest.mock import Mock

from medportal.application.ports import CurrentActor
from medportal.infrastructure import InMemoryRowStore, PortalContext
from medportal.infrastructure.adapters.identity import IdentityAdapter
from medportal_identity import Actor


class TestIdentityAdapter:
    def test_anonymous(self):
        assert IdentityAdapter.to_current_actor(Actor.anonymous()) == CurrentActor.anonymous()

    def test_admin(self):
        actor = Actor.admin(
            "admin@saniatrmel.hospital",
            facility_id="saniat-rmel",
            facility_name="Saniat Rmel Hospital",
            user_id="admin-saniat-rmel-id",
        )

        current = IdentityAdapter.to_current_actor(actor)

        assert current.is_admin
        assert current.facility_id == "saniat-rmel"
        assert current.user_id == "admin-saniat-rmel-id"
        assert current.display_label == "admin"

    def test_standard(self):
        current = IdentityAdapter.to_current_actor(
            Actor.standard("alice@saniatrmel.hospital", user_id="u-1")
        )
        assert current.is_authenticated
        assert not current.is_admin
        assert current.facility_id is None


class TestPortalContext:
    def test_actor_read_on_every_access(self):
        resolver = Mock()
        resolver.actor = Actor.anonymous()
        context = PortalContext(
            InMemoryRowStore(),
            actor=lambda: IdentityAdapter.current_actor_of(resolver),
        )
        assert not context.current_actor.is_authenticated

        resolver.actor = Actor.standard("bob@saniatrmel.hospital")

        assert context.current_actor.identifier == "bob@saniatrmel.hospital"

    def test_capabilities_shared(self):
        context = PortalContext(InMemoryRowStore())
        assert context.column_capabilities() is context.column_capabilities()
