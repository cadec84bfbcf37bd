from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO
from uuid import uuid4

from inventory.errors import AssetMissingError, UploadError

logger = logging.getLogger(__name__)

_CONTENT_TYPES = {
    ".png": "image/png",
    ".webp": "image/webp",
}
DEFAULT_CONTENT_TYPE = "image/jpeg"


@dataclass(frozen=True)
class PhotoUpload:
    """An uploaded file already written to a local path by the routing layer."""

    path: Path
    filename: str = ""

    @property
    def extension(self) -> str:
        return Path(self.filename or self.path.name).suffix.lower()


def content_type_for(asset_name: str) -> str:
    return _CONTENT_TYPES.get(Path(asset_name).suffix.lower(), DEFAULT_CONTENT_TYPE)


class PhotoAssetManager:
    """Owns the photo files; assets are named independently of item ids."""

    def __init__(self, photos_dir: Path):
        self.photos_dir = Path(photos_dir)
        self.photos_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, asset_name: str) -> Path:
        # Asset names are generated here, never taken from the client.
        return self.photos_dir / Path(asset_name).name

    def store(self, upload: PhotoUpload) -> str:
        asset_name = f"{uuid4().hex}{upload.extension}"
        target_path = self.path_for(asset_name)
        tmp_path = target_path.with_name(f".{asset_name}.tmp")
        try:
            shutil.copyfile(upload.path, tmp_path)
            tmp_path.replace(target_path)
        except OSError as err:
            tmp_path.unlink(missing_ok=True)
            raise UploadError(f"Could not store photo: {err}") from err
        logger.info("Stored photo asset %s", asset_name)
        return asset_name

    def remove(self, asset_name: str) -> None:
        self.path_for(asset_name).unlink(missing_ok=True)
        logger.info("Removed photo asset %s", asset_name)

    def open(self, asset_name: str) -> tuple[BinaryIO, str]:
        try:
            handle = self.path_for(asset_name).open("rb")
        except OSError as err:
            raise AssetMissingError(f"Photo file {asset_name} is missing") from err
        return handle, content_type_for(asset_name)
