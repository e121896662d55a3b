"""
Token Middleware - extracts the bearer token for each request.
"""
import re
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

_BEARER = re.compile(r"^bearer +(\S+) *$", re.IGNORECASE)


def extract_token(auth_header: Optional[str]) -> Optional[str]:
    """Extract the token from an Authorization header (``Bearer <token>``, any number of spaces)."""
    if not auth_header:
        return None

    match = _BEARER.match(auth_header)
    if not match:
        return None

    return match.group(1)


class TokenMiddleware(BaseHTTPMiddleware):
    """Stores the Authorization bearer token on request.state."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request.state.token = extract_token(request.headers.get("authorization"))

        response = await call_next(request)
        return response
