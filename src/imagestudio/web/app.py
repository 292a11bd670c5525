"""
FastAPI surface for the gallery shell.

One shell instance backs the app, the same way a browser tab owns one page.
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.responses import FileResponse, Response
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, Field

from imagestudio.config import GeneratorSettings
from imagestudio.models.requests import IMAGE_COUNT_OPTIONS
from imagestudio.services.gallery_service import GalleryShell, GenerationInProgressError, ShellState
from imagestudio.services.metrics_service import MetricsService

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"

router = APIRouter()


class GenerateBody(BaseModel):
    prompt: str = ""
    num_images: int = Field(IMAGE_COUNT_OPTIONS[0], ge=IMAGE_COUNT_OPTIONS[0], le=IMAGE_COUNT_OPTIONS[-1])


def get_shell(request: Request) -> GalleryShell:
    return request.app.state.shell


@router.get("/")
async def index():
    return FileResponse(STATIC_DIR / "index.html")


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.get("/api/state", response_model=ShellState)
async def get_state(shell: GalleryShell = Depends(get_shell)):
    return shell.state()


@router.post("/api/generate", response_model=ShellState)
async def generate(body: GenerateBody, shell: GalleryShell = Depends(get_shell)):
    """Generate images; validation and upstream failures come back in `error`."""
    if shell.is_loading:
        raise HTTPException(status_code=409, detail="A generation is already in progress")

    shell.prompt = body.prompt
    shell.set_num_images(body.num_images)

    try:
        await shell.generate()
    except GenerationInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return shell.state()


@router.get("/api/images/{index}/download")
async def download_image(index: int, shell: GalleryShell = Depends(get_shell)):
    try:
        download = shell.download(index)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return Response(
        content=download.content,
        media_type=download.media_type,
        headers={"Content-Disposition": f'attachment; filename="{download.filename}"'},
    )


@router.post("/api/credential/select", response_model=ShellState)
async def select_credential(shell: GalleryShell = Depends(get_shell)):
    await shell.select_credential()
    return shell.state()


@router.get("/api/metrics")
async def get_metrics(request: Request):
    metrics_service: MetricsService | None = request.app.state.metrics_service
    if metrics_service is None:
        raise HTTPException(status_code=404, detail="Metrics are not being recorded")
    return metrics_service.summary()


def create_app(
    shell: GalleryShell | None = None,
    settings: GeneratorSettings | None = None,
    metrics_service: MetricsService | None = None,
) -> FastAPI:
    """
    Build the web app.

    Args:
        shell: Pre-built shell (tests pass one wired to a fake provider)
        settings: Settings used to build a shell when none is given (defaults to the environment)
        metrics_service: Collector for generation metrics (a new one backs a shell built here)
    """
    if shell is None:
        settings = settings or GeneratorSettings.from_env()
        metrics_service = metrics_service or MetricsService()
        shell = GalleryShell.from_settings(settings, metrics_service=metrics_service)
        if not settings.has_api_key:
            logger.warning("API_KEY is not set; generation requests will fail until it is")
    elif metrics_service is None:
        metrics_service = shell.image_service.metrics_service

    app = FastAPI(title="imagestudio", version="0.1.0")
    app.state.shell = shell
    app.state.metrics_service = metrics_service
    app.include_router(router)
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
    return app
