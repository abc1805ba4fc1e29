from medportal.infrastructure.adapters.identity import IdentityAdapter

__all__ = ["IdentityAdapter"]
