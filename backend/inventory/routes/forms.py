from typing import Optional

from fastapi import APIRouter, Depends, Form
from fastapi.responses import FileResponse

from inventory.config import STATIC_DIR
from inventory.dependencies import get_store
from inventory.schemas import ItemResponse
from inventory.storage import InventoryStore

router = APIRouter(tags=["forms"])


@router.get("/RegisterForm.html", include_in_schema=False)
async def register_form():
    return FileResponse(STATIC_DIR / "RegisterForm.html", media_type="text/html")


@router.get("/SearchForm.html", include_in_schema=False)
async def search_form():
    return FileResponse(STATIC_DIR / "SearchForm.html", media_type="text/html")


@router.post("/search", response_model=ItemResponse)
def search_item(
    id: int = Form(...),
    has_photo: Optional[str] = Form(None),
    store: InventoryStore = Depends(get_store),
):
    """Look an item up by id; `has_photo` appends the photo link to the description."""

    response = ItemResponse.from_item(store.get(id))
    if has_photo and response.photo_url:
        response.description = f"{response.description}\nPhoto: {response.photo_url}".lstrip()
    return response
