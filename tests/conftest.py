"""Shared pytest fixtures for Postcard Studio tests."""

import base64
import os
import struct
import zlib
from io import BytesIO
from typing import Dict, Generator, List, Optional

# Settings are read at import time; point them at throwaway resources first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BEARER_TOKEN"] = "test-token"
os.environ.pop("S3_BUCKET_NAME", None)
os.environ.pop("DB_SECRET_NAME", None)

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.ai.client import WorkersAIError
from app.core.database import Base, get_db
from app.core.dependencies import get_ai_client, get_blob_store
from app.model import Postcard  # noqa: F401
from app.storage.blob_store import BlobStore, BlobStoreError, StoredBlob
from main import app

TOKEN = "test-token"


def make_png(color: str = "red", size=(8, 6)) -> bytes:
    buf = BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()


def make_oversized_png(width: int = 20000, height: int = 20000) -> bytes:
    """A small PNG whose IHDR claims dimensions past Pillow's decompression-bomb limit."""
    png = make_png()
    # 8-byte signature, 4-byte length, b"IHDR", 13 bytes of data, 4-byte CRC
    ihdr = struct.pack(">II", width, height) + png[24:29]
    crc = struct.pack(">I", zlib.crc32(b"IHDR" + ihdr) & 0xFFFFFFFF)
    return png[:16] + ihdr + crc + png[33:]


class InMemoryBlobStore(BlobStore):
    """Dict-backed blob store with switchable failures."""

    def __init__(self):
        self.blobs: Dict[str, StoredBlob] = {}
        self.fail_put = False
        self.fail_delete = False

    def put(self, key: str, body: bytes, content_type: str) -> None:
        if self.fail_put:
            raise BlobStoreError("put failed")
        self.blobs[key] = StoredBlob(body=body, content_type=content_type)

    def get(self, key: str) -> Optional[StoredBlob]:
        return self.blobs.get(key)

    def delete(self, key: str) -> None:
        if self.fail_delete:
            raise BlobStoreError("delete failed")
        self.blobs.pop(key, None)


class FakeAIClient:
    """Stands in for WorkersAIClient; records calls and returns canned results."""

    def __init__(self):
        self.prompt_text = "A vintage postcard of the city at golden hour"
        self.text_response: Optional[dict] = None
        self.image_bytes = make_png()
        self.image_response: Optional[dict] = None
        self.fail = False
        self.text_calls: List[tuple] = []
        self.image_calls: List[str] = []

    def generate_text(self, instructions: str, text: str) -> dict:
        self.text_calls.append((instructions, text))
        if self.fail:
            raise WorkersAIError("upstream down", status_code=503)
        if self.text_response is not None:
            return self.text_response
        return {
            "output": [
                {"type": "reasoning", "content": [{"type": "reasoning_text", "text": "thinking"}]},
                {
                    "type": "message",
                    "role": "assistant",
                    "content": [{"type": "output_text", "text": self.prompt_text}],
                },
            ]
        }

    def generate_image(self, prompt: str, num_steps: Optional[int] = None) -> dict:
        self.image_calls.append(prompt)
        if self.fail:
            raise WorkersAIError("upstream down", status_code=503)
        if self.image_response is not None:
            return self.image_response
        return {"image": base64.b64encode(self.image_bytes).decode()}


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def db_session(db_engine) -> Generator[Session, None, None]:
    session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def fake_ai() -> FakeAIClient:
    return FakeAIClient()


@pytest.fixture
def test_client(db_engine, blob_store, fake_ai) -> Generator[TestClient, None, None]:
    """TestClient with the database, blob store and AI client swapped for fakes."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    app.dependency_overrides[get_ai_client] = lambda: fake_ai
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {TOKEN}"}


@pytest.fixture
def png_bytes() -> bytes:
    return make_png("blue")


@pytest.fixture
def png_factory():
    return make_png


@pytest.fixture
def oversized_png() -> bytes:
    return make_oversized_png()
