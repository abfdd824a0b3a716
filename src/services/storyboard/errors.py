"""
Error taxonomy for the brief -> storyboard -> preview -> export pipeline.

Every error carries the HTTP status the API layer answers with, so route
handlers never inspect message text to pick a status code.
"""

from fastapi import status


class StoryboardError(Exception):
    """Base class for all pipeline errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StoryboardError):
    """Missing or malformed caller input."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConfigurationError(StoryboardError):
    """Provider credentials are not configured."""

    status_code = status.HTTP_401_UNAUTHORIZED


class AuthenticationError(StoryboardError):
    """The provider rejected the configured credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED


class RateLimitError(StoryboardError):
    """The provider throttled the request."""

    status_code = status.HTTP_429_TOO_MANY_REQUESTS


class ConnectivityError(StoryboardError):
    """The provider could not be reached or did not answer in time."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class MalformedResponseError(StoryboardError):
    """The provider answered with non-JSON or schema-incomplete output."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class ProviderError(StoryboardError):
    """The provider answered with an HTTP error not covered above."""

    def __init__(self, message: str, provider_status: int | None = None):
        super().__init__(message)
        self.provider_status = provider_status


class VideoGenerationFailed(StoryboardError):
    """The provider reported a failed video generation task."""


class PollingTimeoutError(StoryboardError):
    """A video generation task did not finish within the allowed poll attempts."""


__all__ = [
    "StoryboardError",
    "ValidationError",
    "ConfigurationError",
    "AuthenticationError",
    "RateLimitError",
    "ConnectivityError",
    "MalformedResponseError",
    "ProviderError",
    "VideoGenerationFailed",
    "PollingTimeoutError",
]
