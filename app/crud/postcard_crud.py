"""
Postcard CRUD operations.
"""
from typing import Any, Dict, List

from sqlalchemy import desc
from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.model.postcard import Postcard


class CRUDPostcard(CRUDBase[Postcard, Dict[str, Any], Dict[str, Any]]):
    """Postcard CRUD; gallery queries only see rows with a stored image."""

    def create_pending(self, db: Session, *, city: str, prompt: str) -> Postcard:
        """Insert a row without an image key and return it with its assigned id."""
        return self.create_from_dict(db, obj_in={"city": city, "image_prompt": prompt})

    def set_image_key(self, db: Session, *, postcard_id: int, image_key: str) -> int:
        count = (
            db.query(self.model)
            .filter(self.model.id == postcard_id)
            .update({self.model.image_key: image_key}, synchronize_session=False)
        )
        db.commit()
        return count

    def list_with_image(self, db: Session) -> List[Postcard]:
        """All postcards that have an image key, newest id first."""
        return (
            db.query(self.model)
            .filter(self.model.image_key.isnot(None))
            .order_by(desc(self.model.id))
            .all()
        )


postcard_crud = CRUDPostcard(Postcard)
