from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile

from api.deps import get_entry_service
from core.logging import get_logger
from schemas.timeline import EntryCreatedResponse, ErrorResponse
from services.entry_service import EntryIngestionService, UploadedImage

logger = get_logger(__name__)


router = APIRouter()


def _as_uploaded(files: list[UploadFile] | None) -> list[UploadedImage]:
    return [UploadedImage(filename=f.filename or "", file=f.file) for f in files or []]


@router.post(
    "/entries",
    response_model=EntryCreatedResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or unexpected fields"},
        500: {"model": ErrorResponse, "description": "Storage failure"},
    },
)
async def create_entry(
    entry_service: Annotated[EntryIngestionService, Depends(get_entry_service)],
    username: str | None = Form(None, description="Display name"),
    time: str | None = Form(None, description="Free-form time label"),
    avatar: list[UploadFile] | None = File(None, description="Avatar image (1 file)"),
    image: list[UploadFile] | None = File(None, description="Timeline image (1 file)"),
):
    """
    Upload an avatar and an image and append a timeline entry.

    Storage:
    - Images stored as assets/imgs/{uuid}{ext}
    - Entry appended to assets/json/timeline.json

    Validation errors and storage failures are raised as TimelineException
    subclasses and rendered by the handlers registered in main.py.
    """
    entry = await entry_service.ingest(
        username=username,
        time=time,
        avatar=_as_uploaded(avatar),
        image=_as_uploaded(image),
    )
    logger.debug(f"Entry stored: avatar={entry.avatar} image={entry.image}")
    return EntryCreatedResponse()
