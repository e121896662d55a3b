"""
API Router - all endpoints.
"""
from fastapi import APIRouter, Depends

from app.core.config import settings
from app.core.dependencies import require_token
from app.router.api import generate, postcards, save

api_router = APIRouter(prefix=settings.API_PREFIX)


@api_router.get("/", include_in_schema=False)
async def api_root():
    return {"message": f"Hello! This is the {settings.PROJECT_NAME} API"}


api_router.include_router(
    generate.router,
    prefix="/generate",
    tags=["Generation"],
    dependencies=[Depends(require_token)],
)

api_router.include_router(
    save.router,
    prefix="/save",
    tags=["Postcards"],
    dependencies=[Depends(require_token)],
)

api_router.include_router(
    postcards.router,
    tags=["Postcards"],
)
