import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from google.api_core.exceptions import GoogleAPICallError, GoogleAPIError

from gallery.core.config import settings
from gallery.core.exceptions import UploadError
from gallery.routes import gallery_routes
from gallery.services.staging import ensure_temp_dir

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ensure_temp_dir(settings.TEMP_DIR)

    # Bad storage type or credentials fail here instead of on the first request
    provider = app.dependency_overrides.get(
        gallery_routes.get_gallery_service, gallery_routes.get_gallery_service
    )
    provider()
    logger.info("[API] Gallery service ready (storage: %s)", settings.STORAGE_TYPE)
    yield

app = FastAPI(title=settings.API_TITLE, lifespan=lifespan)

app.include_router(gallery_routes.router)

@app.exception_handler(GoogleAPIError)
async def storage_error_handler(request: Request, exc: GoogleAPIError):
    # Backend statuses (404 missing object, 409 conflict, 403 denied) pass through
    status_code = 502
    detail = str(exc)
    if isinstance(exc, GoogleAPICallError) and exc.code:
        status_code = exc.code
        detail = exc.message

    if status_code >= 500:
        logger.error("[API] Storage error on %s %s: %s", request.method, request.url.path, exc)
    else:
        logger.warning("[API] Storage rejected %s %s: %s", request.method, request.url.path, exc)

    return JSONResponse(status_code=status_code, content={"detail": detail})

@app.exception_handler(UploadError)
async def upload_error_handler(request: Request, exc: UploadError):
    logger.error("[API] %s", exc)
    return JSONResponse(status_code=502, content={"detail": str(exc)})

@app.get("/health")
def health():
    return {"status": "ok"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
