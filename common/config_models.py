"""
Pydantic models for global configuration structure.
This module defines all the nested configuration models used by the Config class.
Each model corresponds to a section in the global_config.yaml file and provides
type validation and structure for the configuration data.
"""

from pydantic import BaseModel


class MiniMaxModelsConfig(BaseModel):
    """Model identifiers used for each MiniMax endpoint."""

    chat_model: str
    image_model: str
    video_model: str


class GenerationParamsConfig(BaseModel):
    """Sampling parameters for a chat completion request."""

    temperature: float
    top_p: float | None = None
    max_tokens: int


class MiniMaxConfig(BaseModel):
    """MiniMax provider configuration."""

    base_url: str
    models: MiniMaxModelsConfig
    storyboard: GenerationParamsConfig
    enhancement: GenerationParamsConfig


class TimeoutConfig(BaseModel):
    """Timeouts (seconds) for provider API requests."""

    text_generation_seconds: int
    image_generation_seconds: int
    video_generation_seconds: int
    enhancement_seconds: int
    poll_request_seconds: int


class VideoPollingConfig(BaseModel):
    """Polling policy for asynchronous video generation tasks."""

    interval_seconds: float
    max_attempts: int


class PreviewConfig(BaseModel):
    """Scene preview defaults and placeholder fallback."""

    default_aspect_ratio: str
    default_style: str
    default_duration_seconds: int
    placeholder_url: str
    placeholder_text_length: int


class CreatorStyleDefaultsConfig(BaseModel):
    """Creator style used when a request does not supply one."""

    content_format: str
    tone: str
    aesthetic_tags: list[str]
    typical_duration: str


class StoryboardDefaultsConfig(BaseModel):
    """Storyboard generation defaults."""

    creator_style: CreatorStyleDefaultsConfig


class LoggingLocationConfig(BaseModel):
    """Location information display configuration for logging."""

    enabled: bool
    show_file: bool
    show_function: bool
    show_line: bool
    show_for_info: bool
    show_for_debug: bool
    show_for_warning: bool
    show_for_error: bool


class LoggingFormatConfig(BaseModel):
    """Logging format configuration."""

    show_time: bool
    show_request_id: bool
    location: LoggingLocationConfig


class LoggingLevelsConfig(BaseModel):
    """Logging level configuration."""

    debug: bool
    info: bool
    warning: bool
    error: bool
    critical: bool


class LoggingConfig(BaseModel):
    """Complete logging configuration."""

    verbose: bool
    format: LoggingFormatConfig
    levels: LoggingLevelsConfig


class ServerConfig(BaseModel):
    """Server configuration."""

    allowed_origins: list[str]
    api_prefix: str
