from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import BinaryIO, Optional

from pydantic import ValidationError as SchemaError

from inventory.errors import (
    AssetMissingError,
    InventoryError,
    NotFoundError,
    StorageIOError,
    ValidationError,
)
from inventory.schemas import Collection, DeleteResult, Item
from inventory.services.photos import PhotoAssetManager, PhotoUpload
from inventory.services.store import read_json, write_json

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = ("name", "description")


class InventoryStore:
    """Items and their photos, persisted as one JSON record.

    Every mutation reads the record, changes it and writes it back while
    holding `_lock`. Reads go straight to the file; the write is a rename
    into place so they never observe a half-written record.
    """

    def __init__(self, db_path: Path, photos: PhotoAssetManager):
        self.db_path = Path(db_path)
        self.photos = photos
        self._lock = threading.Lock()
        with self._lock:
            if not self.db_path.exists():
                self._save(Collection())
                logger.info("Initialized empty inventory at %s", self.db_path)

    def list(self) -> list[Item]:
        return self._load().items

    def get(self, item_id: int) -> Item:
        return self._require(self._load(), item_id)

    def create(
        self,
        name: Optional[str],
        description: Optional[str] = "",
        photo: Optional[PhotoUpload] = None,
    ) -> Item:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Inventory name is required")
        description = (description or "").strip()

        asset_name = self.photos.store(photo) if photo is not None else None
        try:
            with self._lock:
                collection = self._load()
                collection.next_id += 1
                item = Item(
                    id=collection.next_id,
                    name=name,
                    description=description,
                    photo=asset_name,
                )
                collection.items.append(item)
                self._save(collection)
        except InventoryError:
            if asset_name:
                self._discard_asset(asset_name)
            raise

        logger.info("Created item %s (%s)", item.id, item.name)
        return item

    def update(self, item_id: int, data: dict) -> Item:
        """Apply the fields present in `data`; absent or null fields are kept."""

        changes = {
            key: value.strip()
            for key, value in data.items()
            if key in _UPDATABLE_FIELDS and value is not None
        }
        if "name" in changes and not changes["name"]:
            raise ValidationError("Inventory name cannot be empty")

        with self._lock:
            collection = self._load()
            item = self._require(collection, item_id)
            for key, value in changes.items():
                setattr(item, key, value)
            self._save(collection)

        logger.info("Updated item %s fields=%s", item_id, sorted(changes))
        return item

    def delete(self, item_id: int) -> DeleteResult:
        with self._lock:
            collection = self._load()
            item = self._require(collection, item_id)
            collection.items = [other for other in collection.items if other.id != item_id]
            self._save(collection)
            if item.photo and not collection.references(item.photo):
                self._discard_asset(item.photo)

        logger.info("Deleted item %s", item_id)
        return DeleteResult(id=item_id)

    def replace_photo(self, item_id: int, upload: Optional[PhotoUpload]) -> Item:
        if upload is None:
            raise ValidationError("Photo file is required")
        self.get(item_id)

        asset_name = self.photos.store(upload)
        try:
            with self._lock:
                collection = self._load()
                item = self._require(collection, item_id)
                previous = item.photo
                item.photo = asset_name
                self._save(collection)
                # Old file goes only after the new reference is on disk.
                if previous and previous != asset_name and not collection.references(previous):
                    self._discard_asset(previous)
        except InventoryError:
            self._discard_asset(asset_name)
            raise

        logger.info("Replaced photo of item %s", item_id)
        return item

    def get_photo(self, item_id: int) -> tuple[BinaryIO, str]:
        item = self.get(item_id)
        if not item.photo:
            raise NotFoundError(f"Item {item_id} has no photo")
        try:
            return self.photos.open(item.photo)
        except AssetMissingError:
            logger.error("Item %s references missing photo %s", item_id, item.photo)
            raise

    def _require(self, collection: Collection, item_id: int) -> Item:
        item = collection.find(item_id)
        if item is None:
            raise NotFoundError(f"Item {item_id} not found")
        return item

    def _discard_asset(self, asset_name: str) -> None:
        try:
            self.photos.remove(asset_name)
        except OSError:
            logger.warning("Could not remove photo asset %s", asset_name, exc_info=True)

    def _load(self) -> Collection:
        try:
            raw = read_json(self.db_path, default=None)
        except (OSError, json.JSONDecodeError) as err:
            raise StorageIOError(f"Could not read inventory record: {err}") from err
        if raw is None:
            return Collection()
        try:
            return Collection.model_validate(raw)
        except SchemaError as err:
            raise StorageIOError(f"Inventory record is malformed: {err}") from err

    def _save(self, collection: Collection) -> None:
        try:
            write_json(self.db_path, collection.model_dump(by_alias=True, exclude_none=True))
        except OSError as err:
            raise StorageIOError(f"Could not write inventory record: {err}") from err
