# backend/georef/main.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from typing import Optional
import logging

from georef.api.routers import client_log, coordinates, ollama, uploads
from georef.config import Settings
from georef.errors import ApiError, ClientInputError, InternalError
from georef.services.ollama.client import OllamaClient

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


async def api_error_handler(request: Request, exc: ApiError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
    )
    return await api_error_handler(request, ClientInputError("Dati non validi", details=details))


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Errore non gestito su %s", request.url.path, exc_info=exc)
    return await api_error_handler(request, InternalError("Errore interno del server"))


def create_app(settings: Optional[Settings] = None, ollama_client: Optional[OllamaClient] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(title="Photo Georef API", version="0.1.0")
    app.state.settings = settings
    # one HTTP client for the whole process
    app.state.ollama = ollama_client or OllamaClient(settings.ollama_url, timeout=settings.ollama_timeout)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.get("/health")
    def health():
        return {"ok": True}

    @app.on_event("startup")
    def on_startup():
        logger.info("Server in esecuzione su http://localhost:%s", settings.port)
        logger.info("Ollama: %s", settings.ollama_url)

    @app.on_event("shutdown")
    def on_shutdown():
        app.state.ollama.close()

    app.include_router(uploads.router,     prefix="/api",        tags=["uploads"])
    app.include_router(coordinates.router, prefix="/api",        tags=["coordinates"])
    app.include_router(ollama.router,      prefix="/api/ollama", tags=["ollama"])
    app.include_router(client_log.router,  prefix="/api",        tags=["log"])

    # uploaded images are served back under /uploads (imageUrl)
    settings.upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=str(settings.upload_dir)), name="uploads")

    # front-end, only when the directory is shipped
    if settings.public_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(settings.public_dir), html=True), name="public")

    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings: Settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
