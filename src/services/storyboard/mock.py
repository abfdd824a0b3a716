"""Offline storyboard used when mock mode is enabled (no provider calls)."""

import math

from src.services.storyboard.models import (
    CreatorStyle,
    Scene,
    StructuredBrief,
    scene_seconds,
)

MIN_SCENES = 3
MAX_SCENES = 6


def build_mock_storyboard(brief: StructuredBrief, style: CreatorStyle) -> list[Scene]:
    """Hook, one scene per talking point, then a call-to-action with hashtags."""
    product, brand = brief.product_name, brief.brand_name
    aesthetic = style.aesthetic_tags[0] if style.aesthetic_tags else "modern"

    total_seconds = scene_seconds(brief.duration, default=20)
    max_scenes = min(max(math.ceil(total_seconds / 5), MIN_SCENES + 1), MAX_SCENES)

    scenes: list[dict] = [
        {
            "duration": "3s",
            "visual": f"Close-up of creator holding {product}, bright natural lighting, {aesthetic} background",
            "script": f"Hey everyone! I'm so excited to show you the new {product} from {brand}!",
            "notes": "Product introduction and hook",
        }
    ]

    points = brief.talking_points or ["how amazing this is"]
    for index, point in enumerate(points[: max_scenes - 2]):
        if index == 0:
            scenes.append(
                {
                    "duration": "5s",
                    "visual": f"Creator demonstrating {product} in action, dynamic camera movement",
                    "script": f"What I love most is {point}. It's seriously a game-changer!",
                    "notes": f"Highlights talking point: {point}",
                }
            )
        else:
            scenes.append(
                {
                    "duration": "5s",
                    "visual": f"Detail shot of {product} features, clean product-focused framing",
                    "script": f"Plus, {point}. {brand} really nailed it with this one!",
                    "notes": f"Highlights talking point: {point}",
                }
            )

    hashtags = " ".join(brief.hashtags)
    call_to_action = brief.call_to_action or "link in bio!"
    scenes.append(
        {
            "duration": "4s",
            "visual": f"Creator smiling at camera, holding {product}, {brand} logo visible",
            "script": f"Check out {product} - {call_to_action} {hashtags}".strip(),
            "notes": "Call-to-action with required hashtags",
        }
    )

    return [Scene(scene=number, **fields) for number, fields in enumerate(scenes, start=1)]
