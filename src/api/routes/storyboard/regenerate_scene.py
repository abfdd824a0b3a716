"""
Regenerate Scene Route

Rewrites one scene of an existing storyboard from user feedback.
"""

import asyncio

from fastapi import APIRouter, Depends
from loguru import logger as log

from src.api.dependencies import default_creator_style, get_generation_client
from src.api.errors import wrap_unexpected
from src.api.routes.storyboard.models import (
    RegenerateSceneData,
    RegenerateSceneRequest,
    RegenerateSceneResponse,
    RouteContract,
)
from src.services.storyboard.brief_parser import normalize_structured_brief
from src.services.storyboard.minimax_client import MiniMaxClient
from src.utils.logging_config import setup_logging

setup_logging()

router = APIRouter(tags=["Storyboard"])


@router.post("/regenerate-scene", response_model=RegenerateSceneResponse)
async def regenerate_scene_endpoint(
    payload: RegenerateSceneRequest,
    client: MiniMaxClient = Depends(get_generation_client),
) -> RegenerateSceneResponse:
    brief = normalize_structured_brief(payload.structured_brief)
    style = payload.creator_style or default_creator_style()

    log.info(f"Regenerating scene {payload.scene_number} for: {brief.brand_name}")

    try:
        scene = await asyncio.to_thread(
            client.regenerate_scene,
            payload.scene_number,
            payload.current_scene,
            brief,
            style,
            payload.feedback,
        )
    except Exception as e:
        raise wrap_unexpected(e, "Failed to regenerate scene")

    return RegenerateSceneResponse(
        data=RegenerateSceneData(scene=scene),
        message=f"Scene {payload.scene_number} regenerated",
    )


@router.get("/regenerate-scene", response_model=RouteContract, response_model_exclude_none=True)
async def regenerate_scene_contract() -> RouteContract:
    return RouteContract(
        endpoint="/api/regenerate-scene",
        description="Regenerates a single storyboard scene from user feedback",
        required_fields=["sceneNumber", "currentScene", "structuredBrief", "feedback"],
        optional_fields=["creatorStyle"],
    )
