from medportal.application.factories.portal_factory import PortalFactory

__all__ = ["PortalFactory"]
