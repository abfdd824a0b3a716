"""
Brief Parser

Turns a sponsor brief (free text, a JSON string, or an already structured
mapping) into a StructuredBrief using pattern matching only. No network I/O.

Keyword matching order is data, not control flow: every table below is
scanned front to back and the first hit wins.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from loguru import logger as log
from pydantic import ValidationError as PydanticValidationError

from src.services.storyboard.errors import ValidationError
from src.services.storyboard.models import (
    DEFAULT_ASPECT_RATIO,
    DEFAULT_BRIEF_DURATION,
    DEFAULT_FORMAT,
    DEFAULT_PLATFORM,
    PlatformSpecs,
    StructuredBrief,
)
from src.utils.logging_config import setup_logging

setup_logging()

HASHTAG_PATTERN = re.compile(r"#\w+")


@dataclass(frozen=True)
class KeywordRule:
    """Maps an ordered list of synonyms onto a single output value."""

    target: str
    keywords: tuple[str, ...]


FIELD_RULES: tuple[KeywordRule, ...] = (
    KeywordRule("brand_name", ("brand", "company", "sponsor")),
    KeywordRule("product_name", ("product", "item", "service")),
    KeywordRule("campaign_name", ("campaign", "campaign name")),
    KeywordRule("duration", ("duration", "length", "time")),
    KeywordRule("call_to_action", ("call to action", "cta", "link", "visit")),
    KeywordRule("brand_guidelines", ("guidelines", "tone", "voice", "style")),
    KeywordRule("deadline", ("deadline", "due date", "submit by")),
)

LIST_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(
        "talking_points",
        (
            "talking points",
            "mention",
            "highlight",
            "features",
            "benefits",
            "key messages",
        ),
    ),
    KeywordRule(
        "restrictions",
        ("avoid", "don't mention", "do not", "restrictions", "limitations"),
    ),
)

# Priority order matters: the first platform/format with any keyword present wins
PLATFORM_RULES: tuple[KeywordRule, ...] = (
    KeywordRule("Instagram", ("instagram", "ig", "reels?")),
    KeywordRule("TikTok", ("tiktok", "tik tok")),
    KeywordRule("YouTube", ("youtube", "yt")),
    KeywordRule("Twitter", ("twitter", "tweets?")),
    KeywordRule("Facebook", ("facebook", "fb")),
)

FORMAT_RULES: tuple[KeywordRule, ...] = (
    KeywordRule("Reel", ("reels?",)),
    KeywordRule("Story", ("story", "stories")),
    KeywordRule("Post", ("posts?",)),
    KeywordRule("Short", ("shorts?",)),
    KeywordRule("Video", ("videos?",)),
)

_BULLET_ITEM = re.compile(r"^\s*[-•*]\s*(.+?)\s*$", re.MULTILINE)
_NUMBERED_ITEM = re.compile(r"^\s*\d+[.)]\s*(.+?)\s*$", re.MULTILINE)


def _field_pattern(keyword: str) -> re.Pattern[str]:
    return re.compile(rf"{re.escape(keyword)}[^\S\n]*[:\-][^\S\n]*([^\n]+)", re.IGNORECASE)


def _section_pattern(keyword: str) -> re.Pattern[str]:
    # Section ends at a blank line, the next "Label:" line, or end of text
    return re.compile(
        rf"{re.escape(keyword)}\s*[:\-]?\s*(.*?)(?=\n\s*\n|(?-i:\n\s*[A-Z][a-z]+:)|\Z)",
        re.IGNORECASE | re.DOTALL,
    )


def _spotting_pattern(keyword: str) -> re.Pattern[str]:
    return re.compile(rf"\b{keyword}\b", re.IGNORECASE)


def extract_field(text: str, keywords: tuple[str, ...]) -> Optional[str]:
    """Value of the first `<keyword>: <value>` (or `-`) line, trying keywords in order."""
    for keyword in keywords:
        match = _field_pattern(keyword).search(text)
        if match:
            value = match.group(1).strip()
            if value:
                return value
    return None


def _split_section(section: str) -> list[str]:
    """Bullets, then numbered items, then commas, then the whole section."""
    bullets = [item for item in _BULLET_ITEM.findall(section) if item]
    if bullets:
        return bullets

    numbered = [item for item in _NUMBERED_ITEM.findall(section) if item]
    if numbered:
        return numbered

    if "," in section:
        parts = [part.strip() for part in section.split(",")]
        parts = [part for part in parts if part]
        if parts:
            return parts

    stripped = section.strip()
    return [stripped] if stripped else []


def extract_list(text: str, keywords: tuple[str, ...]) -> list[str]:
    """Items from every keyword-introduced section, in keyword order, de-duplicated."""
    items: list[str] = []
    for keyword in keywords:
        match = _section_pattern(keyword).search(text)
        if not match:
            continue
        for item in _split_section(match.group(1)):
            if item not in items:
                items.append(item)
    return items


def extract_hashtags(text: str) -> list[str]:
    """All `#word` tokens, de-duplicated, in order of first occurrence."""
    return list(dict.fromkeys(HASHTAG_PATTERN.findall(text)))


def _detect(text: str, rules: tuple[KeywordRule, ...], default: str) -> str:
    for rule in rules:
        if any(_spotting_pattern(keyword).search(text) for keyword in rule.keywords):
            return rule.target
    return default


def detect_platform(text: str) -> str:
    return _detect(text, PLATFORM_RULES, DEFAULT_PLATFORM)


def detect_format(text: str) -> str:
    return _detect(text, FORMAT_RULES, DEFAULT_FORMAT)


def _lookup(data: Mapping[str, Any], camel_key: str, snake_key: str) -> Any:
    value = data.get(camel_key)
    if value is None:
        value = data.get(snake_key)
    return value


def _optional_text(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return value if isinstance(value, str) else str(value)


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item if isinstance(item, str) else str(item) for item in value]


def normalize_structured_brief(data: Mapping[str, Any]) -> StructuredBrief:
    """Fill defaults for a pre-structured brief and type-check its list fields."""
    brand_name = _lookup(data, "brandName", "brand_name")
    product_name = _lookup(data, "productName", "product_name")

    if not brand_name or not product_name:
        raise ValidationError(
            "Structured data must include brandName and productName"
        )
    if not isinstance(brand_name, str) or not isinstance(product_name, str):
        raise ValidationError("brandName and productName must be strings")

    raw_specs = _lookup(data, "platformSpecs", "platform_specs")
    try:
        platform_specs = (
            PlatformSpecs.model_validate(raw_specs)
            if isinstance(raw_specs, Mapping) and raw_specs
            else PlatformSpecs()
        )
        return StructuredBrief(
            brand_name=brand_name,
            product_name=product_name,
            campaign_name=_optional_text(_lookup(data, "campaignName", "campaign_name")),
            talking_points=_string_list(_lookup(data, "talkingPoints", "talking_points")),
            hashtags=_string_list(data.get("hashtags")),
            restrictions=_string_list(data.get("restrictions")),
            duration=_optional_text(data.get("duration")) or DEFAULT_BRIEF_DURATION,
            platform_specs=platform_specs,
            call_to_action=_optional_text(_lookup(data, "callToAction", "call_to_action")),
            brand_guidelines=_optional_text(
                _lookup(data, "brandGuidelines", "brand_guidelines")
            ),
            deadline=_optional_text(data.get("deadline")),
            compensation=data.get("compensation") or None,
        )
    except PydanticValidationError as e:
        fields = ", ".join(".".join(str(part) for part in error["loc"]) for error in e.errors())
        raise ValidationError(f"Invalid structured brief fields: {fields}") from e


def _parse_text(brief_text: str) -> StructuredBrief:
    fields = {rule.target: extract_field(brief_text, rule.keywords) for rule in FIELD_RULES}
    lists = {rule.target: extract_list(brief_text, rule.keywords) for rule in LIST_RULES}

    if not fields["brand_name"]:
        raise ValidationError(
            'Could not find brand name in brief. Please include "Brand: [name]" or provide structured data.'
        )
    if not fields["product_name"]:
        raise ValidationError(
            'Could not find product name in brief. Please include "Product: [name]" or provide structured data.'
        )

    return StructuredBrief(
        brand_name=fields["brand_name"],
        product_name=fields["product_name"],
        campaign_name=fields["campaign_name"],
        talking_points=lists["talking_points"],
        hashtags=extract_hashtags(brief_text),
        restrictions=lists["restrictions"],
        duration=fields["duration"] or DEFAULT_BRIEF_DURATION,
        platform_specs=PlatformSpecs(
            platform=detect_platform(brief_text),
            format=detect_format(brief_text),
            aspect_ratio=DEFAULT_ASPECT_RATIO,
        ),
        call_to_action=fields["call_to_action"],
        brand_guidelines=fields["brand_guidelines"],
        deadline=fields["deadline"],
    )


def parse_brief(brief: str | Mapping[str, Any]) -> StructuredBrief:
    """
    Parse a brand brief into a StructuredBrief.

    Args:
        brief: Raw brief text, a JSON object encoded as a string, or a mapping
            that is already structured.

    Returns:
        StructuredBrief with brand and product always populated.

    Raises:
        ValidationError: If the input is empty or of the wrong type, or if the
            brand or product name cannot be determined.
    """
    if isinstance(brief, Mapping):
        return normalize_structured_brief(brief)

    if not isinstance(brief, str):
        raise ValidationError("Brief must be a string or object")

    brief_text = brief.strip()
    if not brief_text:
        raise ValidationError("Brief text cannot be empty")

    try:
        decoded = json.loads(brief_text)
    except ValueError:
        decoded = None

    if isinstance(decoded, Mapping):
        log.debug("Brief is a JSON object, using structured path")
        return normalize_structured_brief(decoded)

    return _parse_text(brief_text)


__all__ = [
    "KeywordRule",
    "FIELD_RULES",
    "LIST_RULES",
    "PLATFORM_RULES",
    "FORMAT_RULES",
    "parse_brief",
    "normalize_structured_brief",
    "extract_field",
    "extract_list",
    "extract_hashtags",
    "detect_platform",
    "detect_format",
]
