"""
Parse Brief Route

Turns a free-text (or JSON-encoded) brand brief into a StructuredBrief using
pattern matching only; no provider calls.
"""

from fastapi import APIRouter
from loguru import logger as log

from src.api.errors import wrap_unexpected
from src.api.routes.storyboard.models import (
    ParseBriefRequest,
    ParseBriefResponse,
    RouteContract,
)
from src.services.storyboard.brief_parser import parse_brief
from src.services.storyboard.errors import ValidationError
from src.utils.logging_config import setup_logging

setup_logging()

router = APIRouter(tags=["Storyboard"])


@router.post("/parse-brief", response_model=ParseBriefResponse)
async def parse_brief_endpoint(payload: ParseBriefRequest) -> ParseBriefResponse:
    """
    Parse a brand brief into structured fields.

    Raises:
        ValidationError: Missing/blank briefText, or no brand/product found (400)
    """
    if not payload.brief_text or not isinstance(payload.brief_text, str):
        raise ValidationError("Missing or invalid briefText field")
    if not payload.brief_text.strip():
        raise ValidationError("Brief text cannot be empty")

    log.info("Parsing brand brief...")
    try:
        structured_brief = parse_brief(payload.brief_text)
    except Exception as e:
        raise wrap_unexpected(e, "Failed to parse brief")

    log.info(f"Brief parsed successfully: {structured_brief.brand_name}")
    return ParseBriefResponse(data=structured_brief)


@router.get("/parse-brief", response_model=RouteContract, response_model_exclude_none=True)
async def parse_brief_contract() -> RouteContract:
    return RouteContract(
        endpoint="/api/parse-brief",
        description="Parses brand briefs into structured JSON using pattern matching (no external API)",
        required_fields=["briefText"],
        example={
            "briefText": "Brand: Nike\nProduct: Air Max 2024\nTalking points: New cushioning, sustainable materials\nHashtags: #Nike #AirMax2024",
        },
    )
