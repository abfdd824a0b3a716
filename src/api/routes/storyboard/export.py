"""
Export Route

Storyboard -> printable HTML document or JSON summary.
"""

from fastapi import APIRouter
from loguru import logger as log

from src.api.errors import wrap_unexpected
from src.api.routes.storyboard.models import ExportRequest, ExportResponse, RouteContract
from src.services.storyboard.export import ExportFormat, export_storyboard
from src.utils.logging_config import setup_logging

setup_logging()

router = APIRouter(tags=["Storyboard"])


@router.post("/export", response_model=ExportResponse)
async def export_endpoint(payload: ExportRequest) -> ExportResponse:
    fmt = payload.format or ExportFormat.HTML.value
    log.info(f"Exporting storyboard as {fmt}")

    try:
        data = export_storyboard(
            payload.storyboard,
            brand_info=payload.brand_info,
            creator_info=payload.creator_info,
            fmt=fmt,
        )
    except Exception as e:
        raise wrap_unexpected(e, "Failed to export storyboard")

    return ExportResponse(data=data, format=fmt)


@router.get("/export", response_model=RouteContract, response_model_exclude_none=True)
async def export_contract() -> RouteContract:
    return RouteContract(
        endpoint="/api/export",
        description="Exports storyboards as HTML (for PDF conversion) or JSON",
        required_fields=["storyboard"],
        optional_fields=["brandInfo", "creatorInfo", "format"],
        supported_formats=[f.value for f in ExportFormat],
    )
