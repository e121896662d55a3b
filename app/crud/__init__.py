from app.crud.postcard_crud import postcard_crud

__all__ = [
    "postcard_crud",
]
