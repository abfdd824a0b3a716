"""
Analyze Creator Style Route

Instagram handle -> CreatorStyle profile that can be passed as `creatorStyle`
to generate-storyboard and regenerate-scene.
"""

import asyncio

from fastapi import APIRouter, Depends
from loguru import logger as log

from src.api.dependencies import get_generation_client
from src.api.errors import wrap_unexpected
from src.api.routes.storyboard.models import (
    AnalyzeCreatorStyleData,
    AnalyzeCreatorStyleRequest,
    AnalyzeCreatorStyleResponse,
    RouteContract,
)
from src.services.storyboard.errors import ValidationError
from src.services.storyboard.minimax_client import MiniMaxClient
from src.utils.logging_config import setup_logging

setup_logging()

router = APIRouter(tags=["Storyboard"])


@router.post("/analyze-creator-style", response_model=AnalyzeCreatorStyleResponse)
async def analyze_creator_style_endpoint(
    payload: AnalyzeCreatorStyleRequest,
    client: MiniMaxClient = Depends(get_generation_client),
) -> AnalyzeCreatorStyleResponse:
    if not isinstance(payload.instagram_handle, str):
        raise ValidationError("Missing or invalid instagramHandle field")
    handle = payload.instagram_handle.strip()
    if not handle.lstrip("@"):
        raise ValidationError("Instagram handle cannot be empty")

    handle = f"@{handle.lstrip('@')}"
    log.info(f"Analyzing creator style for: {handle}")

    try:
        style = await asyncio.to_thread(client.analyze_creator_style, handle)
    except Exception as e:
        raise wrap_unexpected(e, "Failed to analyze creator style")

    return AnalyzeCreatorStyleResponse(
        data=AnalyzeCreatorStyleData(instagram_handle=handle, creator_style=style),
    )


@router.get(
    "/analyze-creator-style",
    response_model=RouteContract,
    response_model_exclude_none=True,
)
async def analyze_creator_style_contract() -> RouteContract:
    return RouteContract(
        endpoint="/api/analyze-creator-style",
        description="Builds a creator style profile from an Instagram handle using the MiniMax LLM",
        required_fields=["instagramHandle"],
        example={"instagramHandle": "@creator"},
    )
