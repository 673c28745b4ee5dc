"""Request metadata recorded on new sessions (client IP and device)."""

from typing import Annotated

from fastapi import Depends, Request

from warden.domain.session import Device
from warden.presentation.api.dependencies import SettingsDep

DEFAULT_CLIENT_IP = "127.0.0.1"


def get_client_ip(request: Request, settings: SettingsDep) -> str:
    """Resolve the caller's IP address.

    Behind a reverse proxy the first ``X-Forwarded-For`` entry is the
    original client. The header is only honoured when the deployment
    says a proxy sets it.
    """
    if settings.api_trust_proxy_headers:
        forwarded = request.headers.get("x-forwarded-for", "")
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    if request.client and request.client.host:
        return request.client.host
    return DEFAULT_CLIENT_IP


def get_client_device(request: Request) -> Device:
    return Device.from_user_agent(request.headers.get("user-agent"))


ClientIP = Annotated[str, Depends(get_client_ip)]
ClientDevice = Annotated[Device, Depends(get_client_device)]
