"""
Storyboard pipeline routes: brief parsing, storyboard generation, scene
previews, scene regeneration, creator style analysis and export.
"""

from .parse_brief import router as parse_brief_router
from .generate_storyboard import router as generate_storyboard_router
from .generate_preview import router as generate_preview_router
from .regenerate_scene import router as regenerate_scene_router
from .export import router as export_router
from .analyze_creator_style import router as analyze_creator_style_router

__all__ = [
    "parse_brief_router",
    "generate_storyboard_router",
    "generate_preview_router",
    "regenerate_scene_router",
    "export_router",
    "analyze_creator_style_router",
]
