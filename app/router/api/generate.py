"""
Generation API: prompt, temporary preview image, regenerate-by-id.
All routes require the shared bearer token.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import Response

from app.core.dependencies import get_postcard_service
from app.schema.postcard import PromptRequest, PromptResponse, TempImageRequest
from app.service.postcard_service import PostcardService

router = APIRouter()


@router.post("/prompt", response_model=PromptResponse)
def generate_prompt(
    body: PromptRequest,
    service: PostcardService = Depends(get_postcard_service),
):
    """Turn a city name into a postcard-style image prompt. Nothing is stored."""
    return service.generate_prompt(body.city)


@router.post("/temp-image", response_class=Response)
def generate_temp_image(
    body: TempImageRequest,
    service: PostcardService = Depends(get_postcard_service),
):
    """Render a preview image for a prompt. Call /save/postcard to keep it."""
    image = service.generate_temp_image(body.city, body.prompt)
    return Response(content=image.body, media_type=image.content_type)


@router.post("/image/{postcard_id}", response_class=Response)
def regenerate_image(
    postcard_id: int,
    service: PostcardService = Depends(get_postcard_service),
):
    """Render the stored prompt again, replace the postcard's image key, return the new image."""
    image = service.regenerate_image(postcard_id)
    return Response(content=image.body, media_type=image.content_type)
