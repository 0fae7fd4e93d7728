from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.api.endpoints import router
from app.config import settings
from app.utils.logger import logger


def create_app() -> FastAPI:
    api = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description="Highlights what changed between a raw phone value and its suggested fix",
    )

    # report pages only issue GET and POST, without cookies
    api.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )

    api.include_router(router, prefix="/api/v1")

    @api.get("/")
    async def root():
        return {"message": f"{settings.api_title} running", "version": settings.api_version}

    @api.get("/health")
    async def health():
        return {"status": "ok"}

    logger.info(f"{settings.api_title} {settings.api_version} | cors_origins={settings.cors_origins}")
    return api


app = create_app()
