"""
Export Formatter

Renders a finished storyboard plus brand/creator info into a shareable HTML
document or a JSON summary for brand approval. Every value interpolated into
HTML is escaped.
"""

from datetime import datetime, timezone
from enum import Enum
from html import escape
from typing import Any, Mapping, Optional, Sequence

from src.services.storyboard.errors import ValidationError
from src.services.storyboard.models import (
    BrandInfo,
    CreatorInfo,
    Scene,
    total_duration_seconds,
)

DEFAULT_TARGET_DURATION = "15-30s"


class ExportFormat(str, Enum):
    HTML = "html"
    JSON = "json"


_STYLESHEET = """
    body {
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif;
      max-width: 900px;
      margin: 40px auto;
      padding: 20px;
      background: #f9fafb;
      color: #1f2937;
    }
    .header {
      background: linear-gradient(135deg, #0ea5e9 0%, #0369a1 100%);
      color: white;
      padding: 30px;
      border-radius: 12px;
      margin-bottom: 30px;
    }
    .header h1 { margin: 0 0 10px 0; font-size: 28px; }
    .header p { margin: 5px 0; opacity: 0.95; }
    .metadata {
      display: grid;
      grid-template-columns: repeat(auto-fit, minmax(200px, 1fr));
      gap: 15px;
      margin-bottom: 30px;
    }
    .metadata-card, .scene, .checklist {
      background: white;
      border-radius: 8px;
      box-shadow: 0 1px 3px rgba(0,0,0,0.1);
    }
    .metadata-card { padding: 20px; }
    .metadata-card h3 { margin: 0 0 5px 0; font-size: 14px; color: #6b7280; }
    .metadata-card p { margin: 0; font-size: 20px; font-weight: 600; }
    .scene { padding: 25px; margin-bottom: 20px; border-left: 4px solid #0ea5e9; }
    .scene-header {
      display: flex;
      justify-content: space-between;
      align-items: center;
      margin-bottom: 15px;
    }
    .scene-number { font-size: 18px; font-weight: 700; color: #0ea5e9; }
    .scene-duration {
      background: #e0f2fe;
      color: #0369a1;
      padding: 4px 12px;
      border-radius: 20px;
      font-size: 14px;
      font-weight: 600;
    }
    .scene-section { margin-bottom: 15px; }
    .scene-section h4 {
      margin: 0 0 8px 0;
      font-size: 13px;
      color: #6b7280;
      text-transform: uppercase;
      letter-spacing: 0.5px;
    }
    .scene-section p { margin: 0; line-height: 1.6; }
    .script { background: #f3f4f6; padding: 15px; border-radius: 6px; font-style: italic; }
    .notes { color: #059669; font-size: 14px; }
    .checklist { padding: 25px; margin-top: 30px; }
    .checklist h2 { margin-top: 0; color: #0ea5e9; }
    .checklist ul { list-style: none; padding: 0; }
    .checklist li { padding: 8px 0; border-bottom: 1px solid #e5e7eb; }
    .checklist li:last-child { border-bottom: none; }
    .check { color: #059669; margin-right: 8px; }
    .footer {
      text-align: center;
      margin-top: 40px;
      padding-top: 20px;
      border-top: 1px solid #e5e7eb;
      color: #6b7280;
      font-size: 14px;
    }
"""


def _text(value: Any) -> str:
    return escape("" if value is None else str(value))


def _as_records(storyboard: Any) -> list[Mapping[str, Any]]:
    if isinstance(storyboard, (str, bytes)) or not isinstance(storyboard, Sequence):
        raise ValidationError("Missing or invalid storyboard array")
    if len(storyboard) == 0:
        raise ValidationError("Storyboard cannot be empty")

    records: list[Mapping[str, Any]] = []
    for position, scene in enumerate(storyboard, start=1):
        if isinstance(scene, Scene):
            scene = scene.model_dump(exclude_none=True)
        if not isinstance(scene, Mapping):
            raise ValidationError(f"Scene {position} must be an object")
        records.append(scene)
    return records


def _format_date(moment: datetime) -> str:
    return f"{moment:%B} {moment.day}, {moment.year}"


def _render_scene(scene: Mapping[str, Any]) -> str:
    notes = ""
    if scene.get("notes"):
        notes = f"""
      <div class="scene-section">
        <h4>Brand Requirement</h4>
        <p class="notes">&#10003; {_text(scene.get("notes"))}</p>
      </div>"""

    return f"""
    <div class="scene">
      <div class="scene-header">
        <div class="scene-number">Scene {_text(scene.get("scene"))}</div>
        <div class="scene-duration">{_text(scene.get("duration"))}</div>
      </div>

      <div class="scene-section">
        <h4>Visual</h4>
        <p>{_text(scene.get("visual"))}</p>
      </div>

      <div class="scene-section">
        <h4>Script</h4>
        <div class="script">{_text(scene.get("script"))}</div>
      </div>{notes}
    </div>"""


def _render_checklist(brand: BrandInfo, total_duration: int, scene_count: int) -> str:
    items = []
    if brand.talking_points:
        items.append(
            f"<li><span class=\"check\">&#10003;</span> <strong>Talking Points:</strong> {_text(', '.join(brand.talking_points))}</li>"
        )
    if brand.hashtags:
        items.append(
            f"<li><span class=\"check\">&#10003;</span> <strong>Hashtags:</strong> {_text(' '.join(brand.hashtags))}</li>"
        )
    target = brand.duration or DEFAULT_TARGET_DURATION
    items.append(
        f"<li><span class=\"check\">&#10003;</span> <strong>Duration:</strong> {total_duration}s (Target: {_text(target)})</li>"
    )
    items.append(
        f"<li><span class=\"check\">&#10003;</span> <strong>Total Scenes:</strong> {scene_count}</li>"
    )
    return "\n      ".join(items)


def render_html(
    storyboard: Sequence[Mapping[str, Any]],
    brand: BrandInfo,
    creator: CreatorInfo,
    generated_at: Optional[datetime] = None,
) -> dict[str, str]:
    generated_at = generated_at or datetime.now(timezone.utc)
    total_duration = total_duration_seconds(storyboard)
    title = f"{brand.brand_name} x {creator.display_name}"
    scenes = "".join(_render_scene(scene) for scene in storyboard)

    html = f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Storyboard - {_text(title)}</title>
  <style>{_STYLESHEET}  </style>
</head>
<body>
  <div class="header">
    <h1>{_text(title)}</h1>
    <p><strong>Product:</strong> {_text(brand.product_name)}</p>
    <p><strong>Creator:</strong> {_text(creator.display_handle)}</p>
    <p><strong>Generated:</strong> {_format_date(generated_at)}</p>
  </div>

  <div class="metadata">
    <div class="metadata-card">
      <h3>Total Scenes</h3>
      <p>{len(storyboard)}</p>
    </div>
    <div class="metadata-card">
      <h3>Total Duration</h3>
      <p>{total_duration}s</p>
    </div>
    <div class="metadata-card">
      <h3>Platform</h3>
      <p>{_text(brand.platform)}</p>
    </div>
    <div class="metadata-card">
      <h3>Format</h3>
      <p>{_text(brand.format)}</p>
    </div>
  </div>

  <h2 style="margin: 30px 0 20px 0;">Storyboard Scenes</h2>
{scenes}

  <div class="checklist">
    <h2>Brand Requirements Checklist</h2>
    <ul>
      {_render_checklist(brand, total_duration, len(storyboard))}
    </ul>
  </div>

  <div class="footer">
    <p>Generated by <strong>Storyboard Studio</strong></p>
  </div>
</body>
</html>"""

    return {"html": html, "title": f"{title} - Storyboard"}


def render_json(
    storyboard: Sequence[Mapping[str, Any]],
    brand: BrandInfo,
    creator: CreatorInfo,
    exported_at: Optional[datetime] = None,
) -> dict[str, Any]:
    exported_at = exported_at or datetime.now(timezone.utc)
    return {
        "metadata": {
            "brandName": brand.brand_name,
            "productName": brand.product_name,
            "creatorHandle": creator.display_handle,
            "sceneCount": len(storyboard),
            "totalDuration": f"{total_duration_seconds(storyboard)}s",
            "platform": brand.platform,
            "format": brand.format,
            "exportedAt": exported_at.isoformat(),
        },
        "storyboard": list(storyboard),
        "requirements": {
            "talkingPoints": brand.talking_points,
            "hashtags": brand.hashtags,
            "restrictions": brand.restrictions,
        },
    }


def export_storyboard(
    storyboard: Any,
    brand_info: Optional[BrandInfo] = None,
    creator_info: Optional[CreatorInfo] = None,
    fmt: str | ExportFormat = ExportFormat.HTML,
) -> dict[str, Any]:
    """
    Render a storyboard as an HTML document or a JSON summary.

    Raises:
        ValidationError: Empty or non-sequence storyboard, or unknown format.
    """
    records = _as_records(storyboard)

    try:
        export_format = ExportFormat(fmt)
    except ValueError:
        raise ValidationError('Invalid format. Use "html" or "json"')

    brand = brand_info or BrandInfo()
    creator = creator_info or CreatorInfo()

    if export_format is ExportFormat.JSON:
        return render_json(records, brand, creator)
    return render_html(records, brand, creator)


__all__ = ["ExportFormat", "export_storyboard", "render_html", "render_json"]
