from medportal.infrastructure.adapters.identity.identity_adapter import IdentityAdapter

__all__ = ["IdentityAdapter"]
