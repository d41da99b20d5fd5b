# app/auth.py
import secrets
from typing import Optional

from fastapi import Header, Request

from .errors import UnauthorizedError

API_KEY_HEADER = "X-API-Key"


def authenticate(provided_key: Optional[str], expected_key: str) -> None:
    """Exact match against the shared secret; absent or wrong key raises."""
    if not provided_key:
        raise UnauthorizedError()
    if not secrets.compare_digest(provided_key.encode("utf-8"), expected_key.encode("utf-8")):
        raise UnauthorizedError()


async def require_api_key(request: Request, x_api_key: Optional[str] = Header(None)) -> None:
    # expected key is fixed per app instance, see create_app()
    authenticate(x_api_key, request.app.state.api_key)
