"""
Postcard schemas.
Request fields are optional so missing values are reported as 400 by the service.
"""
from typing import Optional

from pydantic import BaseModel, Field


class PromptRequest(BaseModel):
    """Body for POST /generate/prompt."""
    city: Optional[str] = None


class PromptResponse(BaseModel):
    prompt: str
    city: str


class TempImageRequest(BaseModel):
    """Body for POST /generate/temp-image."""
    city: Optional[str] = None
    prompt: Optional[str] = None


class SavePostcardRequest(BaseModel):
    """Body for POST /save/postcard. imageData is base64 without a data: prefix."""
    city: Optional[str] = None
    prompt: Optional[str] = None
    imageData: Optional[str] = None


class SavePostcardResponse(BaseModel):
    message: str = "Postcard saved successfully"
    id: int
    imageKey: str


class GalleryItem(BaseModel):
    id: int
    city: str
    imageUrl: str = Field(..., description="Path of the image fetch endpoint for this postcard.")
    prompt: str
    imageKey: str


class DeletePostcardResponse(BaseModel):
    message: str = "Postcard deleted successfully"
    deletedId: int
