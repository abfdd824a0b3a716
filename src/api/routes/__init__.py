"""
API Routes Package

This package contains all API route modules. When adding a new route:
1. Create your route module in this directory (or subdirectory)
2. Import the router here with a descriptive name (e.g., `router as <feature>_router`)
3. Add it to `all_routers` (unprefixed) or `api_routers` (mounted under the API prefix)
4. The router will be automatically included in the FastAPI app
"""

from .ping import router as ping_router
from .storyboard import (
    export_router,
    generate_preview_router,
    generate_storyboard_router,
    parse_brief_router,
    regenerate_scene_router,
    analyze_creator_style_router,
)

# Routers mounted under `server.api_prefix` (e.g. /api/parse-brief)
api_routers = [
    parse_brief_router,
    generate_storyboard_router,
    generate_preview_router,
    regenerate_scene_router,
    export_router,
    analyze_creator_style_router,
]

# Routers mounted at the application root
all_routers = [
    ping_router,
]

__all__ = [
    "all_routers",
    "api_routers",
    "ping_router",
    "parse_brief_router",
    "generate_storyboard_router",
    "generate_preview_router",
    "regenerate_scene_router",
    "export_router",
    "analyze_creator_style_router",
]
