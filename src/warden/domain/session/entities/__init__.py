from warden.domain.session.entities.user_session import UserSession

__all__ = ["UserSession"]
