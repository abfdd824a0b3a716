"""
Generate Preview Route

Scene description -> preview image (or video with image fallback).
"""

import asyncio

from fastapi import APIRouter, Depends
from loguru import logger as log

from common import global_config
from src.api.dependencies import get_generation_client
from src.api.errors import wrap_unexpected
from src.api.routes.storyboard.models import (
    GeneratePreviewRequest,
    GeneratePreviewResponse,
    PreviewData,
    RouteContract,
)
from src.services.storyboard.errors import ValidationError
from src.services.storyboard.minimax_client import MiniMaxClient
from src.services.storyboard.models import (
    PreviewResult,
    PreviewType,
    scene_seconds,
)
from src.utils.logging_config import setup_logging

setup_logging()

router = APIRouter(tags=["Storyboard"])

DESCRIPTION_ECHO_LENGTH = 100


def _preview_type(value: str | None) -> PreviewType:
    if value is None:
        return PreviewType.IMAGE
    try:
        return PreviewType(value)
    except ValueError:
        raise ValidationError('Invalid preview type. Use "image" or "video"')


@router.post("/generate-preview", response_model=GeneratePreviewResponse)
async def generate_preview_endpoint(
    payload: GeneratePreviewRequest,
    client: MiniMaxClient = Depends(get_generation_client),
) -> GeneratePreviewResponse:
    """
    Generate a visual preview for one scene.

    Provider failures degrade to a placeholder image; only missing credentials
    (401) and invalid input (400) surface as errors.
    """
    if not payload.scene_description or not isinstance(payload.scene_description, str):
        raise ValidationError("Missing or invalid sceneDescription field")
    if not payload.scene_description.strip():
        raise ValidationError("Scene description cannot be empty")

    description = payload.scene_description
    preview_type = _preview_type(payload.type)
    default_seconds = global_config.preview.default_duration_seconds
    seconds = scene_seconds(payload.duration, default_seconds)
    if seconds <= 0:
        seconds = default_seconds

    log.info(f"Generating {preview_type.value} preview for: {description[:50]}...")

    try:
        if preview_type is PreviewType.VIDEO:
            result = await asyncio.to_thread(client.generate_scene_video, description, seconds)
        else:
            url = await asyncio.to_thread(client.generate_scene_image, description, payload.options)
            result = PreviewResult(url=url, type=PreviewType.IMAGE)
    except Exception as e:
        raise wrap_unexpected(e, "Failed to generate preview")

    log.info(f"Preview generated ({result.type.value}): {result.url}")

    return GeneratePreviewResponse(
        data=PreviewData(
            url=result.url,
            type=result.type,
            scene_description=description[:DESCRIPTION_ECHO_LENGTH],
            duration=f"{seconds}s",
        ),
        message=f"{result.type.value} preview generated successfully",
    )


@router.get("/generate-preview", response_model=RouteContract, response_model_exclude_none=True)
async def generate_preview_contract() -> RouteContract:
    return RouteContract(
        endpoint="/api/generate-preview",
        description="Generates scene preview images or videos using MiniMax",
        required_fields=["sceneDescription"],
        optional_fields=["duration", "type", "options"],
        example={
            "sceneDescription": "Close-up of Nike Air Max sneakers on urban street, golden hour lighting",
            "duration": "5s",
            "type": "image",
        },
    )
