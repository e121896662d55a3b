"""
Save API: persist a previewed postcard (record row + image blob).
"""
from fastapi import APIRouter, Depends

from app.core.dependencies import get_postcard_service
from app.schema.postcard import SavePostcardRequest, SavePostcardResponse
from app.service.postcard_service import PostcardService

router = APIRouter()


@router.post("/postcard", response_model=SavePostcardResponse)
def save_postcard(
    body: SavePostcardRequest,
    service: PostcardService = Depends(get_postcard_service),
):
    """Insert the postcard row, store the decoded image, and link the two. Requires Bearer token."""
    return service.save_postcard(body.city, body.prompt, body.imageData)
