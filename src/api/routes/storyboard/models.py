"""Request and response models for the storyboard routes (camelCase on the wire)."""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import Field

from src.services.storyboard.models import (
    BrandInfo,
    CamelModel,
    CreatorInfo,
    CreatorStyle,
    ImageOptions,
    PreviewType,
    Scene,
    StructuredBrief,
)


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class RouteContract(CamelModel):
    """Self-description returned by every route's GET endpoint."""

    endpoint: str
    status: str = "ready"
    method: str = "POST"
    description: str
    required_fields: list[str]
    optional_fields: list[str] = Field(default_factory=list)
    supported_formats: Optional[list[str]] = None
    example: Optional[dict[str, Any]] = None


# Presence and type checks on these request fields happen in the handlers so
# that failures carry field-specific messages.


class ParseBriefRequest(CamelModel):
    brief_text: Any = None


class ParseBriefResponse(CamelModel):
    success: bool = True
    data: StructuredBrief
    message: str = "Brief parsed successfully"


class GenerateStoryboardRequest(CamelModel):
    structured_brief: Optional[dict[str, Any]] = None
    creator_style: Optional[CreatorStyle] = None


class StoryboardMetadata(CamelModel):
    scene_count: int
    total_duration: str
    brand_name: str
    product_name: str
    generated_at: str = Field(default_factory=utc_timestamp)


class StoryboardData(CamelModel):
    storyboard: list[Scene]
    metadata: StoryboardMetadata


class GenerateStoryboardResponse(CamelModel):
    success: bool = True
    data: StoryboardData
    message: str


class GeneratePreviewRequest(CamelModel):
    scene_description: Any = None
    duration: Optional[str | int] = None
    type: Optional[str] = None
    options: Optional[ImageOptions] = None


class PreviewData(CamelModel):
    url: str
    type: PreviewType
    scene_description: str
    duration: str
    generated_at: str = Field(default_factory=utc_timestamp)


class GeneratePreviewResponse(CamelModel):
    success: bool = True
    data: PreviewData
    message: str


class ExportRequest(CamelModel):
    storyboard: Any = None
    brand_info: Optional[BrandInfo] = None
    creator_info: Optional[CreatorInfo] = None
    format: Optional[str] = None


class ExportResponse(CamelModel):
    success: bool = True
    data: dict[str, Any]
    format: str
    message: str = "Storyboard exported successfully"


class RegenerateSceneRequest(CamelModel):
    scene_number: int = Field(ge=1)
    current_scene: Scene
    structured_brief: dict[str, Any]
    creator_style: Optional[CreatorStyle] = None
    feedback: str = Field(min_length=1)


class RegenerateSceneData(CamelModel):
    scene: Scene


class RegenerateSceneResponse(CamelModel):
    success: bool = True
    data: RegenerateSceneData
    message: str


class AnalyzeCreatorStyleRequest(CamelModel):
    instagram_handle: Any = None


class AnalyzeCreatorStyleData(CamelModel):
    instagram_handle: str
    creator_style: CreatorStyle


class AnalyzeCreatorStyleResponse(CamelModel):
    success: bool = True
    data: AnalyzeCreatorStyleData
    message: str = "Creator style analyzed"
