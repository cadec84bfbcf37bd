from pathlib import Path

from fastapi import Request

from inventory.storage import InventoryStore


def get_store(request: Request) -> InventoryStore:
    return request.app.state.store


def get_upload_dir(request: Request) -> Path:
    return request.app.state.upload_dir
