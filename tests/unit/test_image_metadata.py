"""Tests for app.utils.image_metadata — Pillow format sniffing."""

from io import BytesIO

from PIL import Image

from app.utils.image_metadata import extract_image_metadata


def _encode(fmt: str) -> bytes:
    buf = BytesIO()
    Image.new("RGB", (12, 7), "white").save(buf, format=fmt)
    return buf.getvalue()


class TestExtractImageMetadata:
    def test_png(self):
        meta = extract_image_metadata(_encode("PNG"))
        assert meta["format"] == "PNG"
        assert meta["content_type"] == "image/png"
        assert meta["extension"] == ".png"
        assert (meta["width"], meta["height"]) == (12, 7)

    def test_jpeg(self):
        meta = extract_image_metadata(_encode("JPEG"))
        assert meta["content_type"] == "image/jpeg"
        assert meta["extension"] == ".jpg"

    def test_unrecognised_bytes_default_to_png(self):
        meta = extract_image_metadata(b"definitely not an image")
        assert meta["format"] is None
        assert meta["content_type"] == "image/png"
        assert meta["extension"] == ".png"
        assert meta["width"] is None

    def test_size_kb(self):
        meta = extract_image_metadata(b"\x00" * 2048)
        assert meta["size_kb"] == 2.0

    def test_decompression_bomb_defaults_to_png(self, oversized_png):
        meta = extract_image_metadata(oversized_png)
        assert meta["format"] is None
        assert meta["content_type"] == "image/png"
        assert meta["extension"] == ".png"
        assert meta["width"] is None
