import os
from pathlib import Path

APP_DIR = Path(__file__).resolve().parent

STATIC_DIR = APP_DIR / "static"

HOST = os.environ.get("INVENTORY_HOST", "127.0.0.1")
PORT = int(os.environ.get("INVENTORY_PORT", "3000"))
_cache_env = os.environ.get("INVENTORY_CACHE_DIR")
CACHE_DIR = Path(_cache_env) if _cache_env else None

DB_FILENAME = "inventory.json"
PHOTOS_DIRNAME = "photos"
UPLOADS_DIRNAME = "uploads"
