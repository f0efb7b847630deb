import logging
import os
import uuid
from dataclasses import dataclass

import requests
from fastapi import Header

from loyalty_ledger.errors import InternalError, Unauthorized


logger = logging.getLogger(__name__)

IDENTITY_PROVIDER_URL = os.getenv("IDENTITY_PROVIDER_URL", "").rstrip("/")
IDENTITY_PROVIDER_API_KEY = os.getenv("IDENTITY_PROVIDER_API_KEY", "")
IDENTITY_PROVIDER_TIMEOUT = float(os.getenv("IDENTITY_PROVIDER_TIMEOUT", "10"))


@dataclass(frozen=True)
class Caller:
    id: uuid.UUID
    email: str | None = None


def _headers(token: str) -> dict:
    headers = {
        "Authorization": f"Bearer {token}",
        "Accept": "application/json",
    }
    if IDENTITY_PROVIDER_API_KEY:
        headers["apikey"] = IDENTITY_PROVIDER_API_KEY
    return headers


def resolve_caller(token: str) -> Caller:
    """
    Ask the identity provider who owns `token`.
    The provider is trusted: whatever id it returns is the caller for the whole request.
    """
    if not IDENTITY_PROVIDER_URL:
        raise InternalError("Identity provider is not configured")

    try:
        r = requests.get(
            f"{IDENTITY_PROVIDER_URL}/auth/v1/user",
            headers=_headers(token),
            timeout=IDENTITY_PROVIDER_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.warning("identity provider unreachable: %s", e)
        raise Unauthorized()

    if r.status_code != 200:
        raise Unauthorized()

    try:
        data = r.json()
        caller_id = uuid.UUID(str(data.get("id")))
    except (ValueError, AttributeError):
        raise Unauthorized()

    return Caller(id=caller_id, email=data.get("email"))


def get_caller(authorization: str | None = Header(default=None, alias="Authorization")) -> Caller:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise Unauthorized()

    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise Unauthorized()

    return resolve_caller(token)
