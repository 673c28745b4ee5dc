from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from warden.application.services import SessionView


class DeviceResponse(BaseModel):
    name: str
    version: Optional[str] = None


class SessionResponse(BaseModel):
    """One login session of the caller."""

    id: UUID
    ip: str
    device: DeviceResponse
    expiry_date: datetime
    created_at: datetime
    current: bool = False

    @classmethod
    def from_view(cls, view: SessionView) -> "SessionResponse":
        return cls(
            id=view.id,
            ip=view.ip,
            device=DeviceResponse(name=view.device.name, version=view.device.version),
            expiry_date=view.expiry_date,
            created_at=view.created_at,
            current=view.current,
        )
