"""
Postcards API: image fetch and gallery (public), delete (protected).
"""
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from app.core.dependencies import get_postcard_service, require_token
from app.schema.postcard import DeletePostcardResponse, GalleryItem
from app.service.postcard_service import PostcardService

router = APIRouter()


@router.get("/image/{postcard_id}", response_class=Response)
def get_image(
    postcard_id: int,
    service: PostcardService = Depends(get_postcard_service),
):
    """Stream the stored image bytes with their stored content type."""
    image = service.fetch_image(postcard_id)
    return Response(content=image.body, media_type=image.content_type)


@router.get("/gallery", response_model=List[GalleryItem])
def list_gallery(service: PostcardService = Depends(get_postcard_service)):
    """Saved postcards that have an image, newest first."""
    return service.list_gallery()


@router.delete(
    "/postcard/{postcard_id}",
    response_model=DeletePostcardResponse,
    dependencies=[Depends(require_token)],
)
def delete_postcard(
    postcard_id: int,
    service: PostcardService = Depends(get_postcard_service),
):
    """Delete the image (best-effort) then the postcard row. Requires Bearer token."""
    return service.delete_postcard(postcard_id)
