from app.model.postcard import Postcard

__all__ = ["Postcard"]
