"""Storage for uploaded timeline images."""

from services.storage.local_storage import LocalImageStorage

__all__ = ["LocalImageStorage"]
