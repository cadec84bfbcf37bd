import shutil
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional
from uuid import uuid4

from fastapi import APIRouter, Depends, File, Form, UploadFile

from inventory.dependencies import get_store, get_upload_dir
from inventory.errors import UploadError
from inventory.schemas import ItemResponse
from inventory.services.photos import PhotoUpload
from inventory.storage import InventoryStore

router = APIRouter(tags=["uploads"])


@contextmanager
def staged_upload(
    file: Optional[UploadFile], upload_dir: Path
) -> Iterator[Optional[PhotoUpload]]:
    """Write a multipart file to `upload_dir` for the duration of the block.

    Yields None when the form carried no file.
    """

    if file is None or not file.filename:
        yield None
        return

    upload_dir.mkdir(parents=True, exist_ok=True)
    safe_name = file.filename.replace("/", "-").replace("\\", "-")
    target_path = upload_dir / f"{uuid4().hex}-{safe_name}"
    try:
        try:
            with target_path.open("wb") as handle:
                shutil.copyfileobj(file.file, handle)
        except OSError as err:
            raise UploadError(f"Could not receive upload: {err}") from err
        yield PhotoUpload(path=target_path, filename=safe_name)
    finally:
        target_path.unlink(missing_ok=True)


@router.post("/register", response_model=ItemResponse, status_code=201)
def register_item(
    inventory_name: str = Form(""),
    description: str = Form(""),
    photo: Optional[UploadFile] = File(None),
    store: InventoryStore = Depends(get_store),
    upload_dir: Path = Depends(get_upload_dir),
):
    with staged_upload(photo, upload_dir) as upload:
        item = store.create(inventory_name, description, upload)
    return ItemResponse.from_item(item)


@router.put("/inventory/{item_id}/photo", response_model=ItemResponse)
def replace_item_photo(
    item_id: int,
    photo: Optional[UploadFile] = File(None),
    store: InventoryStore = Depends(get_store),
    upload_dir: Path = Depends(get_upload_dir),
):
    with staged_upload(photo, upload_dir) as upload:
        item = store.replace_photo(item_id, upload)
    return ItemResponse.from_item(item)
