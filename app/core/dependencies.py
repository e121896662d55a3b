"""
FastAPI dependencies for route protection and service wiring.
"""
import hmac
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.ai.client import WorkersAIClient, ai_client
from app.core.config import settings
from app.core.database import get_db
from app.core.exceptions import InvalidToken, NotAuthenticated
from app.service.postcard_service import PostcardService
from app.storage.blob_store import BlobStore, build_blob_store

# Security scheme for OpenAPI docs (shows lock icon and Authorization header)
bearer_scheme = HTTPBearer(
    scheme_name="Bearer",
    description="Shared API token",
    auto_error=False,
)


async def require_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """
    Validates the token extracted by the middleware against BEARER_TOKEN.

    Raises:
        NotAuthenticated: No token provided
        InvalidToken: Token does not match (or no token is configured)
    """
    token = getattr(request.state, "token", None)
    if not token:
        raise NotAuthenticated()

    expected = settings.BEARER_TOKEN
    if not expected or not hmac.compare_digest(token.encode(), expected.encode()):
        raise InvalidToken()

    return token


def get_blob_store() -> BlobStore:
    return build_blob_store()


def get_ai_client() -> WorkersAIClient:
    return ai_client


def get_postcard_service(
    db: Session = Depends(get_db),
    blob_store: BlobStore = Depends(get_blob_store),
    ai: WorkersAIClient = Depends(get_ai_client),
) -> PostcardService:
    return PostcardService(db, blob_store=blob_store, ai=ai)
