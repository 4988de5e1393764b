"""Client identification helpers."""
from __future__ import annotations

from starlette.requests import Request

UNKNOWN_CLIENT = "unknown"


def forwarded_client(header: str | None) -> str | None:
    """Return the address the nearest proxy appended to ``X-Forwarded-For``.

    Only the last entry comes from the trusted hop; everything before it was
    sent by the client and may be forged.
    """

    if not header:
        return None
    last = header.split(",")[-1].strip()
    return last or None


def client_identifier(request: Request, *, trust_proxy: bool = False) -> str:
    """Key used to bucket download requests for ``request``."""

    if trust_proxy:
        forwarded = forwarded_client(request.headers.get("x-forwarded-for"))
        if forwarded:
            return forwarded
    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_CLIENT
