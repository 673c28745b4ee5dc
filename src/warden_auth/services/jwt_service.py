"""JWT token service.

Provides JWT token creation and verification for session authentication.
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

import jwt

from warden_auth.exceptions import InvalidTokenError
from warden_auth.schemas import TokenPayload


class JWTService:
    """Service for JWT token creation and verification.

    Every token carries the user id as ``sub`` and a random ``jti`` so that
    two tokens issued for the same user in the same second still differ.
    Server-side sessions store the token verbatim, which makes the token
    the lookup key for revocation.

    Examples
    --------
    >>> service = JWTService(secret_key="your-secret-key")
    >>> token = service.create_token(user_id)
    >>> payload = service.verify_token(token)
    >>> print(payload.user_id)
    """

    DEFAULT_EXPIRE_DAYS = 30
    ALGORITHM = "HS256"

    def __init__(
        self,
        secret_key: str,
        token_expire_days: int = DEFAULT_EXPIRE_DAYS,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            Secret key for signing tokens. Must be kept secure.
        token_expire_days
            Days until a token expires when no explicit expiry is given
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._expire = timedelta(days=token_expire_days)

    def create_token(
        self,
        user_id: UUID,
        expires_at: datetime | None = None,
    ) -> str:
        """Create a signed token for a user.

        Parameters
        ----------
        user_id
            The user's unique identifier
        expires_at
            Absolute expiry (optional). Sessions pass their own expiry so
            that the token and the session record expire together.

        Returns
        -------
        The encoded JWT token string
        """
        now = datetime.now(tz=timezone.utc)
        expire = expires_at or now + self._expire

        payload = {
            "sub": str(user_id),
            "jti": uuid4().hex,
            "iat": now,
            "exp": expire,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify and decode a JWT token.

        Parameters
        ----------
        token
            The JWT token string to verify

        Returns
        -------
        TokenPayload containing the decoded data

        Raises
        ------
        InvalidTokenError
            If token is invalid, expired, or malformed
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
            )

            return TokenPayload(
                user_id=UUID(payload["sub"]),
                token_id=str(payload.get("jti", "")),
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )

        except jwt.ExpiredSignatureError as e:
            msg = "Token has expired"
            raise InvalidTokenError(msg) from e
        except jwt.InvalidTokenError as e:
            msg = f"Invalid token: {e}"
            raise InvalidTokenError(msg) from e
        except (KeyError, ValueError, TypeError) as e:
            msg = f"Malformed token payload: {e}"
            raise InvalidTokenError(msg) from e
