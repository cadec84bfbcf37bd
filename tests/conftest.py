"""Shared fixtures: stores and API clients rooted in pytest's tmp_path."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from inventory.main import build_store, create_app
from inventory.services.photos import PhotoUpload
from inventory.storage import InventoryStore


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    return tmp_path / "cache"


@pytest.fixture
def store(cache_dir: Path) -> InventoryStore:
    return build_store(cache_dir)


@pytest.fixture
def make_upload(tmp_path: Path):
    """Factory writing a fake image to disk and wrapping it as an upload."""

    counter = {"n": 0}

    def _make(filename: str = "photo.jpg", content: bytes = b"\xff\xd8fake-jpeg") -> PhotoUpload:
        counter["n"] += 1
        source_dir = tmp_path / "incoming"
        source_dir.mkdir(exist_ok=True)
        path = source_dir / f"{counter['n']}-{filename}"
        path.write_bytes(content)
        return PhotoUpload(path=path, filename=filename)

    return _make


@pytest.fixture
def client(cache_dir: Path, store: InventoryStore) -> TestClient:
    return TestClient(create_app(cache_dir, store=store))
