"""Session domain.

A session is the server-side half of a login: the token handed to the
client is only honoured while its session row exists and is unexpired.
"""

from warden.domain.session.entities import UserSession
from warden.domain.session.exceptions import SessionIssueError, SessionNotFoundError
from warden.domain.session.repositories import SessionRepository
from warden.domain.session.value_objects import UNKNOWN_DEVICE, Device

__all__ = [
    "UNKNOWN_DEVICE",
    "Device",
    "SessionIssueError",
    "SessionNotFoundError",
    "SessionRepository",
    "UserSession",
]
