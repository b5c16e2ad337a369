"""
Swatch v1 API Routes
Implements /v1/swatch palette extraction and supporting routes.
"""
from typing import Any, Dict, Tuple

from fastapi import APIRouter, File, HTTPException, Query, UploadFile
from fastapi.responses import HTMLResponse

from swatch.config import config
from swatch.schemas import ColorEntry, ErrorResponse, SwatchResponse
from swatch.services.colors.pipeline import SwatchResult, build_swatch
from swatch.services.colors.swatches import render_html
from swatch.services.imaging import read_upload, resize_long_edge, validate_file_upload
from swatch.utils.ids import generate_request_id
from swatch.utils.logging import get_logger
from swatch.utils.metrics import get_metrics

router = APIRouter(prefix="/v1", tags=["Swatch"])
log = get_logger()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    415: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
}


async def _run(file: UploadFile, max_depth: int, max_edge: int,
               include_swatch: bool) -> Tuple[SwatchResult, int, int]:
    request_id = generate_request_id()
    metrics = get_metrics()
    metrics.increment_request_count()

    validate_file_upload(file)
    if not config.validate_max_edge(max_edge):
        raise HTTPException(status_code=422, detail="max_edge must be 0 or between 16 and 8192")
    rgb = resize_long_edge(await read_upload(file), max_edge)
    height, width = rgb.shape[:2]

    log.info("Processing upload", extra={
        "request_id": request_id, "filename": file.filename, "width": width, "height": height
    })

    try:
        result = build_swatch(rgb, max_depth=max_depth, include_swatch=include_swatch,
                              request_id=request_id)
    except ValueError as e:
        log.warning("Swatch rejected", extra={"request_id": request_id, "error": str(e)})
        raise HTTPException(status_code=422, detail=str(e))

    return result, width, height


@router.post("/swatch",
             response_model=SwatchResponse,
             responses=ERROR_RESPONSES,
             summary="Median-cut palette",
             description="Quantize an uploaded image to 2^max_depth colors ordered by luminance")
async def create_swatch(
    file: UploadFile = File(..., description="JPEG or PNG image"),
    max_depth: int = Query(config.DEFAULT_MAX_DEPTH, ge=0, le=config.MAX_DEPTH_LIMIT,
                           description="Median-cut depth"),
    max_edge: int = Query(config.MAX_EDGE, ge=0, le=8192,
                          description="Downscale longest edge before quantizing (0 keeps size)"),
    include_swatch: bool = Query(True, description="Include a base64 PNG chip strip"),
) -> SwatchResponse:
    result, width, height = await _run(file, max_depth, max_edge, include_swatch)
    get_metrics().increment_output_count("json")

    return SwatchResponse(
        request_id=result.request_id,
        width=width,
        height=height,
        max_depth=result.max_depth,
        pixel_count=result.pixel_count,
        palette=[ColorEntry.from_pixel(p) for p in result.palette],
        primary=ColorEntry.from_pixel(result.primary),
        primary_index=result.primary_index,
        swatch_png_b64=result.swatch_png_b64,
        timings_ms=result.timings_ms,
    )


@router.post("/swatch/html",
             response_class=HTMLResponse,
             responses=ERROR_RESPONSES,
             summary="Median-cut palette page")
async def create_swatch_html(
    file: UploadFile = File(..., description="JPEG or PNG image"),
    max_depth: int = Query(config.DEFAULT_MAX_DEPTH, ge=0, le=config.MAX_DEPTH_LIMIT),
    max_edge: int = Query(config.MAX_EDGE, ge=0, le=8192),
) -> HTMLResponse:
    result, _, _ = await _run(file, max_depth, max_edge, include_swatch=False)
    get_metrics().increment_output_count("html")
    return HTMLResponse(render_html(result.palette, title=file.filename or "swatch"))


@router.get("/metrics", summary="In-process metrics")
async def metrics_summary() -> Dict[str, Any]:
    return get_metrics().get_summary()
