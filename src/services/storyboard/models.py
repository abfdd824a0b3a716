import re
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_BRIEF_DURATION = "15-30 seconds"
DEFAULT_PLATFORM = "Instagram"
DEFAULT_FORMAT = "Reel"
DEFAULT_ASPECT_RATIO = "9:16"
DEFAULT_SCENE_SECONDS = 5

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class CamelModel(BaseModel):
    """Snake_case attributes in Python, camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _list_or_empty(value: Any) -> Any:
    return value if isinstance(value, list) else []


class PlatformSpecs(CamelModel):
    platform: str = DEFAULT_PLATFORM
    format: str = DEFAULT_FORMAT
    aspect_ratio: str = DEFAULT_ASPECT_RATIO


class StructuredBrief(CamelModel):
    brand_name: str = Field(min_length=1)
    product_name: str = Field(min_length=1)
    campaign_name: Optional[str] = None
    talking_points: List[str] = Field(default_factory=list)
    hashtags: List[str] = Field(default_factory=list)
    restrictions: List[str] = Field(default_factory=list)
    duration: str = DEFAULT_BRIEF_DURATION
    platform_specs: PlatformSpecs = Field(default_factory=PlatformSpecs)
    call_to_action: Optional[str] = None
    brand_guidelines: Optional[str] = None
    deadline: Optional[str] = None
    compensation: Optional[Any] = None

    @field_validator("talking_points", "hashtags", "restrictions", mode="before")
    @classmethod
    def _non_list_to_empty(cls, value: Any) -> Any:
        return _list_or_empty(value)


class CreatorStyle(CamelModel):
    model_config = ConfigDict(extra="allow")

    content_format: Optional[str] = None
    tone: Optional[str] = None
    aesthetic_tags: List[str] = Field(default_factory=list)
    typical_duration: Optional[str] = None

    @field_validator("aesthetic_tags", mode="before")
    @classmethod
    def _non_list_to_empty(cls, value: Any) -> Any:
        return _list_or_empty(value)


class Scene(BaseModel):
    """One shot of a storyboard. Unknown provider fields are kept as-is."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    scene: int
    duration: str
    visual: str
    script: str
    notes: Optional[str] = None


class PreviewType(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


class PreviewResult(BaseModel):
    url: str
    type: PreviewType


class ImageOptions(CamelModel):
    model_config = ConfigDict(extra="allow")

    aspect_ratio: Optional[str] = None
    style: Optional[str] = None


class BrandInfo(CamelModel):
    """Brand side of an export; usually the structured brief sent back by the UI."""

    model_config = ConfigDict(extra="allow")

    brand_name: str = "Brand"
    product_name: str = "Product"
    talking_points: List[str] = Field(default_factory=list)
    hashtags: List[str] = Field(default_factory=list)
    restrictions: List[str] = Field(default_factory=list)
    duration: Optional[str] = None
    platform_specs: Optional[PlatformSpecs] = None

    @field_validator("talking_points", "hashtags", "restrictions", mode="before")
    @classmethod
    def _non_list_to_empty(cls, value: Any) -> Any:
        return _list_or_empty(value)

    @property
    def platform(self) -> str:
        return self.platform_specs.platform if self.platform_specs else DEFAULT_PLATFORM

    @property
    def format(self) -> str:
        return self.platform_specs.format if self.platform_specs else DEFAULT_FORMAT


class CreatorInfo(CamelModel):
    name: Optional[str] = None
    handle: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name or self.handle or "Creator"

    @property
    def display_handle(self) -> str:
        return self.handle or self.name or "@creator"


def scene_seconds(duration: Any, default: int = DEFAULT_SCENE_SECONDS) -> int:
    """Leading integer of a scene duration ("5s" -> 5); `default` when none parses."""
    if isinstance(duration, bool):
        return default
    if isinstance(duration, int):
        return duration
    if isinstance(duration, float):
        return int(duration)
    if isinstance(duration, str):
        match = _LEADING_INT.match(duration)
        if match:
            return int(match.group(1))
    return default


def total_duration_seconds(storyboard: Iterable[Scene | Mapping[str, Any]]) -> int:
    total = 0
    for scene in storyboard:
        duration = scene.duration if isinstance(scene, Scene) else scene.get("duration")
        total += scene_seconds(duration)
    return total
