"""UserSession entity."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from uuid import UUID, uuid4

from warden.domain.session.value_objects import Device
from warden.domain.shared.time import ensure_tz_aware, utc_now


@dataclass
class UserSession:
    """Server-side record binding an issued token to a user.

    A request is authorized only while a session with its exact token
    exists and ``expiry_date`` lies in the future. Deleting the row
    revokes the token even though its signature stays valid.
    """

    user_id: UUID
    token: str
    ip: str
    device: Device
    expiry_date: datetime
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        self.expiry_date = ensure_tz_aware(self.expiry_date)
        self.created_at = ensure_tz_aware(self.created_at)

    @classmethod
    def issue(  # NOQA: PLR0913
        cls,
        user_id: UUID,
        token: str,
        ip: str,
        device: Device,
        lifetime: timedelta | None = None,
        expiry_date: datetime | None = None,
    ) -> "UserSession":
        """Open a new session. Give either ``lifetime`` or ``expiry_date``."""
        now = utc_now()
        if expiry_date is None:
            if lifetime is None:
                msg = "Either lifetime or expiry_date is required"
                raise ValueError(msg)
            expiry_date = now + lifetime
        return cls(
            user_id=user_id,
            token=token,
            ip=ip,
            device=device,
            expiry_date=expiry_date,
            created_at=now,
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        return self.expiry_date <= (now or utc_now())
