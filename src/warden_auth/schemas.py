"""Auth schemas and data structures.

Simple data classes used for transferring token data between components.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class TokenPayload:
    """Decoded JWT token payload.

    Attributes
    ----------
    user_id
        The unique identifier of the user (``sub`` claim)
    token_id
        Random identifier of this particular token (``jti`` claim)
    exp
        Token expiration timestamp
    """

    user_id: UUID
    token_id: str
    exp: datetime
