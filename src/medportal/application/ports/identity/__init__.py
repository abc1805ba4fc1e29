from medportal.application.ports.identity.current_actor import CurrentActor

__all__ = ["CurrentActor"]
