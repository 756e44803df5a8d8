from fastapi import Depends, Request

from services.entry_service import EntryIngestionService
from services.storage.local_storage import LocalImageStorage
from services.timeline_store import TimelineStore


# The store and storage are created once per application in main.create_app;
# the store's lock only serializes appends when every request shares it.
def get_timeline_store(request: Request) -> TimelineStore:
    """Timeline store dependency (singleton)"""
    return request.app.state.timeline_store


def get_image_storage(request: Request) -> LocalImageStorage:
    """Image storage dependency (singleton)"""
    return request.app.state.image_storage


def get_entry_service(
    storage: LocalImageStorage = Depends(get_image_storage),
    store: TimelineStore = Depends(get_timeline_store),
) -> EntryIngestionService:
    return EntryIngestionService(storage, store)
