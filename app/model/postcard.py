"""
Postcard model.
One row per saved postcard: city, generated prompt, and the blob key of its image.
"""
from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from app.core.database import Base


class Postcard(Base):
    __tablename__ = "postcards"

    id = Column(Integer, primary_key=True, autoincrement=True)
    city = Column(String, nullable=False)
    image_prompt = Column(Text, nullable=False)

    # Null until the image is stored; rows without a key are hidden from the gallery
    image_key = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
