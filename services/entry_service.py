from dataclasses import dataclass
from typing import BinaryIO

from core.exceptions import UnexpectedFieldException, ValidationException
from core.logging import get_logger
from schemas.timeline import TimelineEntry
from services.storage.local_storage import LocalImageStorage
from services.timeline_store import TimelineStore

logger = get_logger(__name__)


@dataclass
class UploadedImage:
    """A file part taken from the upload form"""

    filename: str
    file: BinaryIO


class EntryIngestionService:
    """
    Turns one upload (two text fields, two images) into a timeline entry.

    All input checks run before anything is written, so a rejected request
    leaves both the image directory and the timeline untouched. Images
    written for a request whose timeline append then fails are left in place.
    """

    FILE_FIELDS = ("avatar", "image")

    def __init__(self, storage: LocalImageStorage, store: TimelineStore) -> None:
        self.storage = storage
        self.store = store

    @staticmethod
    def _pick_single(field: str, files: list[UploadedImage] | None) -> UploadedImage | None:
        chosen = [f for f in files or [] if f.filename]
        if len(chosen) > 1:
            raise UnexpectedFieldException(field)
        return chosen[0] if chosen else None

    def validate(
        self,
        username: str | None,
        time: str | None,
        avatar: list[UploadedImage] | None,
        image: list[UploadedImage] | None,
    ) -> tuple[str, str, UploadedImage, UploadedImage]:
        """
        Check presence of all four inputs.

        Raises:
            UnexpectedFieldException: A file slot holds more than one file
            ValidationException: Any input is missing or empty
        """
        avatar_file = self._pick_single("avatar", avatar)
        image_file = self._pick_single("image", image)

        provided = {
            "username": username,
            "time": time,
            "avatar": avatar_file,
            "image": image_file,
        }
        missing = [name for name, value in provided.items() if not value]
        if missing:
            raise ValidationException("Missing fields", missing)

        return username, time, avatar_file, image_file

    async def ingest(
        self,
        username: str | None,
        time: str | None,
        avatar: list[UploadedImage] | None,
        image: list[UploadedImage] | None,
    ) -> TimelineEntry:
        """
        Validate, store both images, and append the entry to the timeline.

        Raises:
            ValidationException: Missing or surplus input, nothing written
            StorageUploadError: An image could not be stored
            TimelineWriteError: The timeline could not be rewritten
        """
        username, time, avatar_file, image_file = self.validate(
            username, time, avatar, image
        )

        stored_avatar = await self.storage.save(avatar_file.file, avatar_file.filename)
        stored_image = await self.storage.save(image_file.file, image_file.filename)

        entry = TimelineEntry(
            username=username,
            time=time,
            avatar=stored_avatar["public_path"],
            image=stored_image["public_path"],
        )
        await self.store.append(entry)
        return entry
