"""
MiniMax generation client.

Storyboard text comes from the chat completion endpoint; scene previews come
from the image and video endpoints. Failures are translated into the error
taxonomy in `errors.py`:

- storyboard / scene regeneration / style analysis: errors propagate
- scene image: any provider failure yields a placeholder image URL
- scene video: any failure (including polling timeout) falls back to an image

Missing credentials are always reported as ConfigurationError before any
network call is attempted.
"""

import json
import re
import time
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional
from urllib.parse import quote

import requests
from loguru import logger as log
from pydantic import ValidationError as PydanticValidationError

from common.global_config import Config
from src.services.storyboard.errors import (
    AuthenticationError,
    ConfigurationError,
    ConnectivityError,
    MalformedResponseError,
    PollingTimeoutError,
    ProviderError,
    RateLimitError,
    StoryboardError,
    VideoGenerationFailed,
)
from src.services.storyboard.mock import build_mock_storyboard
from src.services.storyboard.models import (
    CreatorStyle,
    ImageOptions,
    PreviewResult,
    PreviewType,
    Scene,
    StructuredBrief,
)
from src.services.storyboard.prompts import (
    STORYBOARD_SYSTEM_PROMPT,
    analyze_creator_style_prompt,
    enhance_visual_description_prompt,
    regenerate_scene_prompt,
    storyboard_prompt,
)
from src.services.storyboard.video_job import VideoGenerationJob, VideoJobState
from src.utils.logging_config import setup_logging

setup_logging()

REQUIRED_SCENE_FIELDS = ("scene", "duration", "visual", "script")

_CODE_FENCE = re.compile(r"```(?:json)?\s*", re.IGNORECASE)

# MiniMax reports some failures in `base_resp` with an HTTP 200
_BASE_RESP_AUTH_FAILED = {1004}
_BASE_RESP_RATE_LIMITED = {1002}


@dataclass(frozen=True)
class ChatParams:
    temperature: float
    max_tokens: int
    top_p: Optional[float] = None


@dataclass(frozen=True)
class ProviderSettings:
    """Immutable provider configuration injected into MiniMaxClient."""

    api_key: Optional[str]
    group_id: Optional[str]
    base_url: str
    chat_model: str
    image_model: str
    video_model: str
    storyboard_params: ChatParams
    enhancement_params: ChatParams
    text_timeout: float
    image_timeout: float
    video_timeout: float
    enhancement_timeout: float
    poll_request_timeout: float
    poll_interval: float
    poll_max_attempts: int
    default_aspect_ratio: str
    default_style: str
    placeholder_url: str
    placeholder_text_length: int
    use_mock_mode: bool = False

    @classmethod
    def from_config(cls, config: Config) -> "ProviderSettings":
        minimax = config.minimax
        return cls(
            api_key=config.MINIMAX_API_KEY,
            group_id=config.MINIMAX_GROUP_ID,
            base_url=minimax.base_url.rstrip("/"),
            chat_model=minimax.models.chat_model,
            image_model=minimax.models.image_model,
            video_model=minimax.models.video_model,
            storyboard_params=ChatParams(
                temperature=minimax.storyboard.temperature,
                max_tokens=minimax.storyboard.max_tokens,
                top_p=minimax.storyboard.top_p,
            ),
            enhancement_params=ChatParams(
                temperature=minimax.enhancement.temperature,
                max_tokens=minimax.enhancement.max_tokens,
                top_p=minimax.enhancement.top_p,
            ),
            text_timeout=config.timeouts.text_generation_seconds,
            image_timeout=config.timeouts.image_generation_seconds,
            video_timeout=config.timeouts.video_generation_seconds,
            enhancement_timeout=config.timeouts.enhancement_seconds,
            poll_request_timeout=config.timeouts.poll_request_seconds,
            poll_interval=config.video_polling.interval_seconds,
            poll_max_attempts=config.video_polling.max_attempts,
            default_aspect_ratio=config.preview.default_aspect_ratio,
            default_style=config.preview.default_style,
            placeholder_url=config.preview.placeholder_url,
            placeholder_text_length=config.preview.placeholder_text_length,
            use_mock_mode=config.use_mock_mode,
        )


def strip_code_fences(text: str) -> str:
    """Remove Markdown code fences (``` or ```json) wrapped around a payload."""
    return _CODE_FENCE.sub("", text).strip()


def _decode_json(content: str) -> Any:
    cleaned = strip_code_fences(content)
    try:
        return json.loads(cleaned)
    except ValueError:
        log.error(f"Failed to parse LLM response as JSON: {content[:500]}")
        raise MalformedResponseError(
            "LLM returned invalid JSON. Response: " + content[:200]
        )


def _check_scene_fields(record: Any, position: int) -> None:
    if not isinstance(record, Mapping):
        raise MalformedResponseError(f"Scene {position} must be a JSON object")
    for field_name in REQUIRED_SCENE_FIELDS:
        if not record.get(field_name):
            raise MalformedResponseError(
                f"Scene {position} is missing required field: {field_name}"
            )


def _to_scene(record: Mapping[str, Any], position: int) -> Scene:
    try:
        return Scene.model_validate(record)
    except PydanticValidationError as e:
        raise MalformedResponseError(f"Scene {position} has invalid fields: {e}")


def parse_storyboard_payload(content: str) -> list[Scene]:
    """Validate an LLM reply as a non-empty JSON array of complete scenes."""
    payload = _decode_json(content)

    if not isinstance(payload, list):
        raise MalformedResponseError("Storyboard must be an array of scenes")
    if not payload:
        raise MalformedResponseError("Storyboard is empty")

    for position, record in enumerate(payload, start=1):
        _check_scene_fields(record, position)

    return [_to_scene(record, position) for position, record in enumerate(payload, start=1)]


def parse_scene_payload(content: str, scene_number: int) -> Scene:
    """Validate an LLM reply as one complete scene; the scene number is kept fixed."""
    payload = _decode_json(content)
    if isinstance(payload, list) and len(payload) == 1:
        payload = payload[0]
    if isinstance(payload, Mapping):
        payload = {**payload, "scene": scene_number}
    _check_scene_fields(payload, scene_number)
    return _to_scene(payload, scene_number)


def placeholder_image_url(base_url: str, description: str, text_length: int = 50) -> str:
    """Deterministic placeholder encoding the start of the scene description."""
    text = quote(description[:text_length], safe="-_.!~*'()")
    return f"{base_url}?text={text}"


def _first_url(entries: Any) -> Optional[str]:
    if isinstance(entries, list) and entries:
        first = entries[0]
        if isinstance(first, Mapping):
            return first.get("url")
        if isinstance(first, str):
            return first
    return None


def _image_url(payload: Mapping[str, Any]) -> Optional[str]:
    url = _first_url(payload.get("images"))
    data = payload.get("data")
    if not url and isinstance(data, list):
        url = _first_url(data)
    if not url and isinstance(data, Mapping):
        url = _first_url(data.get("image_urls"))
    return url


def _video_url(payload: Mapping[str, Any]) -> Optional[str]:
    data = payload.get("data")
    return payload.get("video_url") or (
        data.get("url") if isinstance(data, Mapping) else None
    )


def _chat_content(payload: Mapping[str, Any]) -> Optional[str]:
    choices = payload.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], Mapping):
        message = choices[0].get("message") or {}
        content = message.get("content") if isinstance(message, Mapping) else None
        if content:
            return content
    return payload.get("reply")


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or "Unknown API error"
    if isinstance(body, Mapping):
        return str(body.get("message") or body.get("error") or "Unknown API error")
    return "Unknown API error"


class MiniMaxClient:
    """HTTP client for MiniMax text, image and video generation."""

    def __init__(
        self,
        settings: ProviderSettings,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings
        self.session = session or requests.Session()
        self._sleep = sleep

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _require_credentials(self) -> None:
        if not self.settings.api_key or not self.settings.group_id:
            raise ConfigurationError(
                "MiniMax credentials not configured. Please add MINIMAX_API_KEY and MINIMAX_GROUP_ID to .env"
            )

    def _headers(self, include_group: bool = False) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.settings.api_key}",
            "Content-Type": "application/json",
        }
        if include_group and self.settings.group_id:
            headers["GroupId"] = self.settings.group_id
        return headers

    def _url(self, path: str) -> str:
        return f"{self.settings.base_url}/{path.lstrip('/')}"

    def _post(self, path: str, body: dict[str, Any], timeout: float, include_group: bool = False) -> dict[str, Any]:
        """POST JSON and return the decoded body, translating transport failures."""
        try:
            response = self.session.post(
                self._url(path),
                json=body,
                headers=self._headers(include_group),
                timeout=timeout,
            )
        except requests.exceptions.RequestException as e:
            log.warning(f"MiniMax request to {path} failed: {e}")
            raise ConnectivityError(
                "Failed to connect to MiniMax API. Please check your internet connection."
            )

        if response.status_code == 401:
            raise AuthenticationError(
                "Invalid MiniMax API key. Please check MINIMAX_API_KEY in .env"
            )
        if response.status_code == 429:
            raise RateLimitError("MiniMax rate limit exceeded. Please try again later.")
        if response.status_code >= 400:
            raise ProviderError(
                f"MiniMax API error ({response.status_code}): {_error_message(response)}",
                provider_status=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError:
            raise MalformedResponseError(f"MiniMax returned a non-JSON body for {path}")
        if not isinstance(payload, dict):
            raise MalformedResponseError(f"MiniMax returned an unexpected body for {path}")

        base_resp = payload.get("base_resp")
        if isinstance(base_resp, Mapping) and base_resp.get("status_code"):
            code = base_resp.get("status_code")
            message = base_resp.get("status_msg") or "Unknown API error"
            if code in _BASE_RESP_AUTH_FAILED:
                raise AuthenticationError(f"MiniMax rejected the credentials: {message}")
            if code in _BASE_RESP_RATE_LIMITED:
                raise RateLimitError("MiniMax rate limit exceeded. Please try again later.")
            raise ProviderError(f"MiniMax API error ({code}): {message}")

        return payload

    def _chat(self, messages: list[dict[str, str]], params: ChatParams, timeout: float) -> str:
        body: dict[str, Any] = {
            "model": self.settings.chat_model,
            "messages": messages,
            "temperature": params.temperature,
            "max_tokens": params.max_tokens,
        }
        if params.top_p is not None:
            body["top_p"] = params.top_p

        payload = self._post("text/chatcompletion_v2", body, timeout, include_group=True)
        content = _chat_content(payload)
        if not content:
            log.error(f"MiniMax chat response had no content: {payload}")
            raise MalformedResponseError("No response from MiniMax LLM")
        return content

    def _creative_director_chat(self, prompt: str) -> str:
        return self._chat(
            [
                {"role": "system", "content": STORYBOARD_SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            self.settings.storyboard_params,
            self.settings.text_timeout,
        )

    # ------------------------------------------------------------------
    # Storyboard text
    # ------------------------------------------------------------------

    def generate_storyboard(self, brief: StructuredBrief, style: CreatorStyle) -> list[Scene]:
        """
        Generate a scene-by-scene storyboard for a brief.

        Raises:
            ConfigurationError: Credentials are missing.
            AuthenticationError / RateLimitError / ConnectivityError / ProviderError:
                The provider call failed.
            MalformedResponseError: The reply is not a complete JSON array of scenes.
        """
        if self.settings.use_mock_mode:
            log.info(f"Mock mode enabled, building offline storyboard for {brief.brand_name}")
            return build_mock_storyboard(brief, style)

        self._require_credentials()
        content = self._creative_director_chat(storyboard_prompt(brief, style))
        log.debug(f"Storyboard reply received ({len(content)} chars)")
        return parse_storyboard_payload(content)

    def regenerate_scene(
        self,
        scene_number: int,
        current_scene: Scene,
        brief: StructuredBrief,
        style: CreatorStyle,
        feedback: str,
    ) -> Scene:
        self._require_credentials()
        prompt = regenerate_scene_prompt(scene_number, current_scene, brief, style, feedback)
        return parse_scene_payload(self._creative_director_chat(prompt), scene_number)

    def analyze_creator_style(self, instagram_handle: str) -> CreatorStyle:
        self._require_credentials()
        content = self._creative_director_chat(analyze_creator_style_prompt(instagram_handle))
        payload = _decode_json(content)
        if not isinstance(payload, Mapping):
            raise MalformedResponseError("Creator style must be a JSON object")
        try:
            return CreatorStyle.model_validate(payload)
        except PydanticValidationError as e:
            raise MalformedResponseError(f"Creator style has invalid fields: {e}")

    # ------------------------------------------------------------------
    # Scene previews
    # ------------------------------------------------------------------

    def placeholder_image(self, description: str) -> str:
        return placeholder_image_url(
            self.settings.placeholder_url,
            description,
            self.settings.placeholder_text_length,
        )

    def enhance_description(self, description: str) -> str:
        """Best effort: on any failure the original description is returned."""
        try:
            enhanced = self._chat(
                [{"role": "user", "content": enhance_visual_description_prompt(description)}],
                self.settings.enhancement_params,
                self.settings.enhancement_timeout,
            )
        except StoryboardError as e:
            log.debug(f"Description enhancement skipped: {e}")
            return description
        return enhanced.strip() or description

    def generate_scene_image(self, description: str, options: Optional[ImageOptions] = None) -> str:
        """
        Generate a preview image URL for a scene.

        Only a ConfigurationError escapes; every provider failure is absorbed
        into a placeholder image URL.
        """
        self._require_credentials()
        options = options or ImageOptions()

        try:
            prompt = self.enhance_description(description)
            payload = self._post(
                "image/generation",
                {
                    "model": self.settings.image_model,
                    "prompt": prompt,
                    "aspect_ratio": options.aspect_ratio or self.settings.default_aspect_ratio,
                    "num_images": 1,
                    "style": options.style or self.settings.default_style,
                },
                self.settings.image_timeout,
            )
            image_url = _image_url(payload)
            if not image_url:
                raise MalformedResponseError("No image URL returned from MiniMax")
            return image_url
        except Exception as e:
            log.error(f"Image generation failed: {e}")
            return self.placeholder_image(description)

    def generate_scene_video(self, description: str, duration_seconds: int = 5) -> PreviewResult:
        """
        Generate a preview video for a scene, falling back to an image.

        The result's type reports what was actually produced.
        """
        self._require_credentials()

        try:
            video_url = self._generate_video(description, duration_seconds)
            return PreviewResult(url=video_url, type=PreviewType.VIDEO)
        except Exception as e:
            log.warning(f"Video generation failed, falling back to image: {e}")

        image_url = self.generate_scene_image(description)
        return PreviewResult(url=image_url, type=PreviewType.IMAGE)

    def _generate_video(self, description: str, duration_seconds: int) -> str:
        job = VideoGenerationJob(max_attempts=max(self.settings.poll_max_attempts, 1))
        payload = self._post(
            "video/generation",
            {
                "model": self.settings.video_model,
                "prompt": description,
                "duration": duration_seconds,
                "aspect_ratio": self.settings.default_aspect_ratio,
            },
            self.settings.video_timeout,
        )

        task_id = payload.get("task_id")
        if task_id:
            job.start_polling(str(task_id))
            return self._poll_video(job)

        video_url = _video_url(payload)
        if not video_url:
            raise MalformedResponseError("No video URL or task id returned from MiniMax")
        job.complete(video_url)
        return video_url

    def _poll_video(self, job: VideoGenerationJob) -> str:
        url = self._url(f"video/generation/{job.task_id}")
        headers = {"Authorization": f"Bearer {self.settings.api_key}"}

        while job.state is VideoJobState.POLLING:
            self._sleep(self.settings.poll_interval)
            try:
                response = self.session.get(
                    url, headers=headers, timeout=self.settings.poll_request_timeout
                )
                response.raise_for_status()
                payload = response.json()
            except (requests.exceptions.RequestException, ValueError) as e:
                log.warning(f"Polling error for video task {job.task_id}: {e}")
                job.record_poll_error()
                continue

            if not isinstance(payload, Mapping):
                job.record_poll_error()
                continue
            job.record_poll(payload.get("status"), _video_url(payload))
            log.debug(
                f"Video task {job.task_id} attempt {job.attempts}/{job.max_attempts}: {payload.get('status')}"
            )

        if job.state is VideoJobState.FAILED:
            raise VideoGenerationFailed(f"Video generation failed for task {job.task_id}")
        if job.state is VideoJobState.TIMED_OUT:
            raise PollingTimeoutError(
                f"Video generation timeout after {job.attempts} attempts"
            )
        return job.video_url or ""


__all__ = [
    "ChatParams",
    "ProviderSettings",
    "MiniMaxClient",
    "strip_code_fences",
    "parse_storyboard_payload",
    "parse_scene_payload",
    "placeholder_image_url",
    "REQUIRED_SCENE_FIELDS",
]
