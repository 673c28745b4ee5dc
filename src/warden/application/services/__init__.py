from warden.application.services.authentication_service import (
    AuthenticationService,
)
from warden.application.services.session_service import SessionService, SessionView

__all__ = [
    "AuthenticationService",
    "SessionService",
    "SessionView",
]
