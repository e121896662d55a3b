"""
Postcard service: prompt and image generation, save, gallery, fetch and delete.

Each method is one linear request flow against the text/image models, the
record store and the blob store. Nothing is retried and nothing is compensated:
if the blob write fails after the row insert, the row stays without an image key
and never shows up in the gallery.
"""
import base64
import binascii
import logging
import re
import time
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.ai.client import WorkersAIClient, WorkersAIError
from app.ai.prompts import POSTCARD_INSTRUCTIONS, extract_output_text
from app.core.config import settings
from app.core.exceptions import (
    InvalidImageData,
    MissingFields,
    NotFound,
    PersistenceError,
    UpstreamModelError,
)
from app.crud import postcard_crud
from app.schema.postcard import (
    DeletePostcardResponse,
    GalleryItem,
    PromptResponse,
    SavePostcardResponse,
)
from app.storage.blob_store import DEFAULT_CONTENT_TYPE, BlobStore, BlobStoreError
from app.utils.image_metadata import extract_image_metadata

logger = logging.getLogger(__name__)

_DATA_URL_PREFIX = re.compile(r"^data:[^,]*;base64,", re.IGNORECASE)


@dataclass
class ImagePayload:
    body: bytes
    content_type: str


def build_image_key(city: str, extension: str = ".png", now_ms: Optional[int] = None) -> str:
    """<city-slug>-<epoch millis><extension>, e.g. New-York-1760000000000.png"""
    slug = re.sub(r"[^\w-]+", "-", city.strip()).strip("-") or "postcard"
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{slug}-{stamp}{extension}"


def decode_base64_image(data: str) -> bytes:
    """Decode base64 image data, tolerating a data: URL prefix and whitespace."""
    cleaned = "".join(_DATA_URL_PREFIX.sub("", data.strip()).split())
    try:
        body = base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError):
        raise InvalidImageData()
    if not body:
        raise InvalidImageData()
    return body


class PostcardService:
    def __init__(self, db: Session, *, blob_store: BlobStore, ai: WorkersAIClient):
        self.db = db
        self.blob_store = blob_store
        self.ai = ai

    # --- generation -------------------------------------------------------

    def generate_prompt(self, city: Optional[str]) -> PromptResponse:
        if not city or not city.strip():
            raise MissingFields("City is required")

        try:
            response = self.ai.generate_text(POSTCARD_INSTRUCTIONS, city)
        except WorkersAIError as e:
            logger.error("Prompt generation failed for %s: %s", city, e)
            raise UpstreamModelError("Failed to generate prompt")

        return PromptResponse(prompt=extract_output_text(response), city=city)

    def _render(self, prompt: str) -> ImagePayload:
        try:
            result = self.ai.generate_image(prompt)
        except WorkersAIError as e:
            logger.error("Image generation failed: %s", e)
            raise UpstreamModelError("Failed to generate image")

        image = result.get("image")
        if not image or not isinstance(image, str):
            raise UpstreamModelError("Failed to generate image")
        try:
            body = base64.b64decode(image)
        except (binascii.Error, ValueError):
            raise UpstreamModelError("Failed to generate image")
        if not body:
            raise UpstreamModelError("Failed to generate image")

        meta = extract_image_metadata(body)
        return ImagePayload(body=body, content_type=meta["content_type"])

    def generate_temp_image(self, city: Optional[str], prompt: Optional[str]) -> ImagePayload:
        """Preview image for a prompt; nothing is stored."""
        if not prompt:
            raise MissingFields("Prompt is required")
        return self._render(prompt)

    # --- persistence ------------------------------------------------------

    def _store_blob(self, city: str, body: bytes) -> str:
        meta = extract_image_metadata(body)
        key = build_image_key(city, meta["extension"])
        self.blob_store.put(key, body, meta["content_type"])
        logger.info(
            "Stored image %s (%s, %sx%s, %s KB)",
            key, meta["format"], meta["width"], meta["height"], meta["size_kb"],
        )
        return key

    def save_postcard(
        self, city: Optional[str], prompt: Optional[str], image_data: Optional[str]
    ) -> SavePostcardResponse:
        if not city or not prompt or not image_data:
            raise MissingFields("City, prompt, and imageData are required")
        body = decode_base64_image(image_data)

        try:
            postcard = postcard_crud.create_pending(self.db, city=city, prompt=prompt)
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Error inserting postcard for %s", city)
            raise PersistenceError("Failed to save postcard to database")

        try:
            key = self._store_blob(city, body)
            postcard_crud.set_image_key(self.db, postcard_id=postcard.id, image_key=key)
        except (BlobStoreError, SQLAlchemyError):
            self.db.rollback()
            logger.exception("Error saving image for postcard %s; row left without image", postcard.id)
            raise PersistenceError("Failed to save postcard")

        logger.info("Saved postcard %s (%s) as %s", postcard.id, city, key)
        return SavePostcardResponse(id=postcard.id, imageKey=key)

    def regenerate_image(self, postcard_id: int) -> ImagePayload:
        """Render the stored prompt again and point the row at the new blob."""
        postcard = postcard_crud.get(self.db, postcard_id)
        if not postcard or not postcard.image_prompt:
            raise NotFound(message="Prompt not found")

        image = self._render(postcard.image_prompt)
        try:
            key = self._store_blob(postcard.city, image.body)
            postcard_crud.set_image_key(self.db, postcard_id=postcard.id, image_key=key)
        except (BlobStoreError, SQLAlchemyError):
            self.db.rollback()
            logger.exception("Error storing regenerated image for postcard %s", postcard_id)
            raise PersistenceError("Failed to save regenerated image")

        # The previous blob is left in place.
        logger.info("Regenerated postcard %s as %s", postcard_id, key)
        return image

    # --- reads ------------------------------------------------------------

    def fetch_image(self, postcard_id: int) -> ImagePayload:
        postcard = postcard_crud.get(self.db, postcard_id)
        if not postcard or not postcard.image_key:
            raise NotFound(message="Image key not found in database")

        try:
            blob = self.blob_store.get(postcard.image_key)
        except BlobStoreError:
            logger.exception("Error reading image %s", postcard.image_key)
            raise PersistenceError("Failed to read image")
        if blob is None:
            raise NotFound(message="Image not found in storage")

        return ImagePayload(body=blob.body, content_type=blob.content_type or DEFAULT_CONTENT_TYPE)

    def list_gallery(self) -> List[GalleryItem]:
        return [
            GalleryItem(
                id=p.id,
                city=p.city,
                imageUrl=f"{settings.API_PREFIX}/image/{p.id}",
                prompt=p.image_prompt,
                imageKey=p.image_key,
            )
            for p in postcard_crud.list_with_image(self.db)
        ]

    # --- delete -----------------------------------------------------------

    def delete_postcard(self, postcard_id: int) -> DeletePostcardResponse:
        try:
            postcard = postcard_crud.get(self.db, postcard_id)
            if not postcard:
                raise NotFound("Postcard")

            if postcard.image_key:
                try:
                    self.blob_store.delete(postcard.image_key)
                except BlobStoreError as e:
                    logger.error("Error deleting image %s: %s", postcard.image_key, e)

            if postcard_crud.remove(self.db, id=postcard_id) == 0:
                raise NotFound("Postcard")
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Error deleting postcard %s", postcard_id)
            raise PersistenceError("Failed to delete postcard")

        logger.info("Deleted postcard %s", postcard_id)
        return DeletePostcardResponse(deletedId=postcard_id)
