"""
Prompt templates for storyboard generation.

Pure string builders: same inputs, same prompt. Brief, style and scene
payloads are embedded as indented JSON using their wire (camelCase) keys.
"""

import json
from typing import Any, Mapping

from pydantic import BaseModel

from src.services.storyboard.models import CreatorStyle, Scene, StructuredBrief

STORYBOARD_SYSTEM_PROMPT = (
    "You are an expert AI creative director specializing in social media "
    "sponsored content. You generate authentic, engaging storyboards that "
    "balance brand requirements with creator authenticity. Always return "
    "valid JSON only."
)


def _to_json(payload: BaseModel | Mapping[str, Any]) -> str:
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json", by_alias=True)
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _joined(items: list[str], fallback: str) -> str:
    return ", ".join(items) if items else fallback


def storyboard_prompt(brief: StructuredBrief, style: CreatorStyle) -> str:
    """Main prompt: structured brief + creator style -> JSON array of scenes."""
    cta = f" ({brief.call_to_action})" if brief.call_to_action else ""
    return f"""You are an AI creative director for social media sponsored content.
Your task is to generate a compelling, authentic storyboard for a sponsored {brief.platform_specs.platform} video.

CREATOR STYLE PROFILE:
{_to_json(style)}

BRAND BRIEF (Structured):
{_to_json(brief)}

REQUIREMENTS:
1. Generate 4-6 scenes for a {brief.duration} {brief.platform_specs.platform} {brief.platform_specs.format}
2. Each scene must feel authentic to the creator's style while meeting brand requirements
3. Include all mandatory talking points: {_joined(brief.talking_points, "N/A")}
4. Incorporate required hashtags: {_joined(brief.hashtags, "N/A")}
5. Follow all restrictions: {_joined(brief.restrictions, "None specified")}
6. Ensure product placement feels natural, not forced

OUTPUT FORMAT:
Return ONLY a valid JSON array. Do not include any explanatory text before or after the JSON.

[
  {{
    "scene": 1,
    "duration": "5s",
    "visual": "detailed description of what viewers see on screen",
    "script": "exact words the creator says in this scene",
    "notes": "which brand requirement this scene fulfills (e.g., 'mentions product benefit X', 'shows product in use')"
  }},
  ...
]

CREATIVE DIRECTION:
- Hook viewers in the first 3 seconds (scene 1 must be attention-grabbing)
- Match the creator's typical content format ({style.content_format or "vlog-style"})
- Use the creator's tone of voice ({style.tone or "casual and authentic"})
- Make brand integration feel like a natural recommendation, not an ad
- End with a clear call-to-action that aligns with {brief.brand_name}'s goals{cta}

Generate the storyboard now:"""


def regenerate_scene_prompt(
    scene_number: int,
    current_scene: Scene,
    brief: StructuredBrief,
    style: CreatorStyle,
    feedback: str,
) -> str:
    """Rewrite a single scene according to free-text feedback."""
    return f"""You are regenerating scene {scene_number} of a sponsored content storyboard.

CURRENT SCENE:
{_to_json(current_scene)}

USER FEEDBACK: "{feedback}"

CREATOR STYLE:
{_to_json(style)}

BRAND REQUIREMENTS:
{_to_json(brief)}

Generate an improved version of this scene that addresses the feedback while maintaining:
- Authenticity to creator's style
- Compliance with brand requirements
- Natural flow with surrounding scenes

Return ONLY valid JSON for the single scene:
{{
  "scene": {scene_number},
  "duration": "5s",
  "visual": "...",
  "script": "...",
  "notes": "..."
}}"""


def enhance_visual_description_prompt(scene_description: str) -> str:
    return f"""Convert this scene description into a detailed visual prompt for AI image/video generation:

Original: "{scene_description}"

Create a detailed prompt that includes:
- Specific visual composition (camera angle, framing, lighting)
- Color palette and aesthetic style
- Key visual elements and their placement
- Mood and atmosphere
- Any text overlays or graphics

Return a single detailed paragraph (2-3 sentences max) optimized for AI image generation."""


def analyze_creator_style_prompt(instagram_handle: str) -> str:
    handle = instagram_handle.lstrip("@")
    return f"""Analyze the Instagram profile @{handle} and create a style profile for sponsored content creation.

Return ONLY a JSON object with:
{{
  "contentFormat": "typical video format (e.g., 'talking head vlog', 'product demo', 'lifestyle montage')",
  "tone": "communication style (e.g., 'energetic and enthusiastic', 'calm and informative', 'humorous')",
  "aestheticTags": ["tag1", "tag2", "tag3"],
  "typicalDuration": "average video length",
  "commonThemes": ["theme1", "theme2"],
  "uniqueHook": "what makes this creator's content distinctive"
}}"""


__all__ = [
    "STORYBOARD_SYSTEM_PROMPT",
    "storyboard_prompt",
    "regenerate_scene_prompt",
    "enhance_visual_description_prompt",
    "analyze_creator_style_prompt",
]
