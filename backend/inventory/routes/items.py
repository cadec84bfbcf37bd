from typing import BinaryIO, Iterator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from inventory.dependencies import get_store
from inventory.schemas import DeleteResult, ItemResponse, ItemUpdate
from inventory.storage import InventoryStore

router = APIRouter(prefix="/inventory", tags=["inventory"])

CHUNK_SIZE = 64 * 1024


def _iter_file(handle: BinaryIO) -> Iterator[bytes]:
    with handle:
        while chunk := handle.read(CHUNK_SIZE):
            yield chunk


@router.get("", response_model=list[ItemResponse])
def list_items(store: InventoryStore = Depends(get_store)):
    return [ItemResponse.from_item(item) for item in store.list()]


@router.get("/{item_id}", response_model=ItemResponse)
def get_item(item_id: int, store: InventoryStore = Depends(get_store)):
    return ItemResponse.from_item(store.get(item_id))


@router.put("/{item_id}", response_model=ItemResponse)
def update_item(
    item_id: int, payload: ItemUpdate, store: InventoryStore = Depends(get_store)
):
    item = store.update(item_id, payload.model_dump(exclude_unset=True))
    return ItemResponse.from_item(item)


@router.delete("/{item_id}", response_model=DeleteResult)
def delete_item(item_id: int, store: InventoryStore = Depends(get_store)):
    return store.delete(item_id)


@router.get("/{item_id}/photo")
def get_item_photo(item_id: int, store: InventoryStore = Depends(get_store)):
    handle, content_type = store.get_photo(item_id)
    # Background close covers streams the client abandons midway.
    return StreamingResponse(
        _iter_file(handle),
        media_type=content_type,
        background=BackgroundTask(handle.close),
    )
