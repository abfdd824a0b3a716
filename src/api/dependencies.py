"""
FastAPI dependencies shared by the storyboard routes.
"""

from functools import lru_cache

from common import global_config
from src.services.storyboard.minimax_client import MiniMaxClient, ProviderSettings
from src.services.storyboard.models import CreatorStyle


@lru_cache(maxsize=1)
def get_generation_client() -> MiniMaxClient:
    """
    FastAPI dependency returning the process-wide MiniMax client.

    Settings are snapshotted from global_config on first use; tests replace
    this dependency through `app.dependency_overrides`.
    """
    return MiniMaxClient(ProviderSettings.from_config(global_config))


def default_creator_style() -> CreatorStyle:
    defaults = global_config.storyboard_defaults.creator_style
    return CreatorStyle(
        content_format=defaults.content_format,
        tone=defaults.tone,
        aesthetic_tags=list(defaults.aesthetic_tags),
        typical_duration=defaults.typical_duration,
    )
