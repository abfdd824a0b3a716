"""
Generate Storyboard Route

Structured brief + creator style -> scene-by-scene storyboard from the LLM,
plus derived metadata (scene count, total duration).
"""

import asyncio

from fastapi import APIRouter, Depends
from loguru import logger as log

from src.api.dependencies import default_creator_style, get_generation_client
from src.api.errors import wrap_unexpected
from src.api.routes.storyboard.models import (
    GenerateStoryboardRequest,
    GenerateStoryboardResponse,
    RouteContract,
    StoryboardData,
    StoryboardMetadata,
)
from src.services.storyboard.brief_parser import normalize_structured_brief
from src.services.storyboard.errors import ValidationError
from src.services.storyboard.minimax_client import MiniMaxClient
from src.services.storyboard.models import total_duration_seconds
from src.utils.logging_config import setup_logging

setup_logging()

router = APIRouter(tags=["Storyboard"])


@router.post("/generate-storyboard", response_model=GenerateStoryboardResponse)
async def generate_storyboard_endpoint(
    payload: GenerateStoryboardRequest,
    client: MiniMaxClient = Depends(get_generation_client),
) -> GenerateStoryboardResponse:
    """
    Generate a storyboard for a structured brief.

    Args:
        payload: Structured brief and optional creator style
        client: MiniMax generation client

    Returns:
        GenerateStoryboardResponse with the scenes and their metadata

    Raises:
        ValidationError: Missing brief or brand/product name (400)
        ConfigurationError / AuthenticationError: Credentials missing or rejected (401)
        RateLimitError: Provider throttled (429)
        MalformedResponseError: Provider output is not a complete storyboard (422)
        ConnectivityError: Provider unreachable (503)
    """
    if payload.structured_brief is None:
        raise ValidationError("Missing structuredBrief field")

    brief = normalize_structured_brief(payload.structured_brief)
    style = payload.creator_style or default_creator_style()

    log.info(f"Generating storyboard for: {brief.brand_name}")
    log.debug(
        f"Brief details: product={brief.product_name}, "
        f"talking_points={len(brief.talking_points)}, duration={brief.duration}"
    )

    try:
        storyboard = await asyncio.to_thread(client.generate_storyboard, brief, style)
    except Exception as e:
        raise wrap_unexpected(e, "Failed to generate storyboard")

    total_duration = total_duration_seconds(storyboard)
    log.info(f"Storyboard generated: {len(storyboard)} scenes, {total_duration}s")

    return GenerateStoryboardResponse(
        data=StoryboardData(
            storyboard=storyboard,
            metadata=StoryboardMetadata(
                scene_count=len(storyboard),
                total_duration=f"{total_duration}s",
                brand_name=brief.brand_name,
                product_name=brief.product_name,
            ),
        ),
        message=f"Generated {len(storyboard)} scenes",
    )


@router.get(
    "/generate-storyboard",
    response_model=RouteContract,
    response_model_exclude_none=True,
)
async def generate_storyboard_contract() -> RouteContract:
    return RouteContract(
        endpoint="/api/generate-storyboard",
        description="Generates scene-by-scene storyboard using the MiniMax LLM",
        required_fields=["structuredBrief"],
        optional_fields=["creatorStyle"],
        example={
            "structuredBrief": {
                "brandName": "Nike",
                "productName": "Air Max 2024",
                "talkingPoints": ["New cushioning technology", "Sustainable materials"],
                "hashtags": ["#Nike", "#AirMax2024"],
                "duration": "15-30 seconds",
            },
            "creatorStyle": {
                "contentFormat": "talking head vlog",
                "tone": "energetic and enthusiastic",
                "aestheticTags": ["urban", "athletic"],
            },
        },
    )
