from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from swatch import __version__
from swatch.api.v1 import router as v1_router
from swatch.schemas import HealthResponse
from swatch.utils.logging import get_logger

log = get_logger()

app = FastAPI(
    title="Swatch",
    description="Median-cut palette extraction for images",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(v1_router)


@app.get("/swatch/healthz", response_model=HealthResponse)
async def healthz() -> HealthResponse:
    """Liveness probe."""
    return HealthResponse(ok=True, version=__version__)


log.info("Swatch service initialized", extra={"version": __version__})
