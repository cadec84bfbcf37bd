import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from inventory.config import DB_FILENAME, PHOTOS_DIRNAME, UPLOADS_DIRNAME
from inventory.errors import InventoryError
from inventory.routes.forms import router as forms_router
from inventory.routes.items import router as items_router
from inventory.routes.uploads import router as uploads_router
from inventory.services.photos import PhotoAssetManager
from inventory.storage import InventoryStore

APP_VERSION = "0.1.0"

logger = logging.getLogger(__name__)


def build_store(cache_dir: Path) -> InventoryStore:
    return InventoryStore(
        cache_dir / DB_FILENAME, PhotoAssetManager(cache_dir / PHOTOS_DIRNAME)
    )


def create_app(cache_dir: Path, store: Optional[InventoryStore] = None) -> FastAPI:
    cache_dir = Path(cache_dir)
    cache_dir.mkdir(parents=True, exist_ok=True)

    app = FastAPI(title="Inventory API", version=APP_VERSION)
    app.state.store = store if store is not None else build_store(cache_dir)
    app.state.upload_dir = cache_dir / UPLOADS_DIRNAME

    app.include_router(forms_router)
    app.include_router(items_router)
    app.include_router(uploads_router)

    @app.exception_handler(InventoryError)
    async def inventory_error_handler(request: Request, exc: InventoryError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})

    @app.get("/api/health")
    async def health():
        return {"status": "ok", "version": APP_VERSION}

    return app
