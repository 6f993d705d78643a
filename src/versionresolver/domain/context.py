"""Helpers that turn request parameters into a targeting context."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .tags import TargetingTags, normalize_attributes, normalize_tags, normalize_value

# Parameter names accepted for the campaign, in precedence order
CAMPAIGN_PARAM_ALIASES = ("campaign", "tag", "homeTag", "templateTag")
ATTRIBUTE_PARAM_KEYS = ("region", "language", "device")

_MOBILE_MARKERS = ("mobile", "iphone", "android")


def _first_present(params: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    """First value that is not None; an empty string still shadows later keys."""
    for key in keys:
        if params.get(key) is not None:
            return params[key]
    return None


def build_context_from_params(
    params: Mapping[str, Any],
    attributes: Mapping[str, Any] | None = None,
) -> TargetingTags | None:
    """Build a context from query/body parameters.

    ``region``, ``language`` and ``device`` become attributes and win over the
    same keys in ``attributes``.
    """
    from_params = normalize_tags(
        {
            "campaign": normalize_value(_first_present(params, CAMPAIGN_PARAM_ALIASES)),
            "segment": params.get("segment"),
            "address_state": params.get("addressState") or params.get("address_state"),
            "attributes": normalize_attributes({key: params.get(key) for key in ATTRIBUTE_PARAM_KEYS}),
        }
    )
    from_attributes = normalize_tags({"attributes": normalize_attributes(attributes)})
    return merge_contexts(from_attributes, from_params)


def context_has_data(context: TargetingTags | None) -> bool:
    return normalize_tags(context) is not None


def merge_contexts(*contexts: TargetingTags | None) -> TargetingTags | None:
    """Merge contexts left to right; later values win and attribute maps are combined."""
    campaign = segment = address_state = None
    attributes: dict[str, str] = {}
    for ctx in contexts:
        if ctx is None:
            continue
        campaign = ctx.campaign or campaign
        segment = ctx.segment or segment
        address_state = ctx.address_state or address_state
        if ctx.attributes:
            attributes.update(ctx.attributes)
    return normalize_tags(
        TargetingTags(
            campaign=campaign,
            segment=segment,
            address_state=address_state,
            attributes=attributes or None,
        )
    )


def device_from_user_agent(user_agent: str | None) -> str | None:
    if not user_agent:
        return None
    lowered = user_agent.lower()
    return "mobile" if any(m in lowered for m in _MOBILE_MARKERS) else "desktop"


def tags_cache_key(tags: TargetingTags | None) -> str:
    """Stable key for caching resolutions per context."""
    if tags is None:
        return "default"
    parts: list[str] = []
    if tags.campaign:
        parts.append(f"c:{tags.campaign}")
    if tags.segment:
        parts.append(f"s:{tags.segment}")
    if tags.address_state:
        parts.append(f"r:{tags.address_state}")
    if tags.attributes:
        attr_parts = [f"{k}:{v}" for k, v in sorted(tags.attributes.items()) if v]
        if attr_parts:
            parts.append("a:" + "|".join(attr_parts))
    return "|".join(parts) or "default"
