"""Targeting tags and the normalizer that canonicalizes them."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

ADDRESS_STATES_KEY = "addressStates"


class TargetingTags(BaseModel):
    """Targeting declared by a version, or resolved for a request."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    campaign: str | None = Field(default=None, description="Campaign identifier")
    segment: str | None = Field(default=None, description="Audience segment identifier")
    address_state: str | None = Field(
        default=None,
        alias="addressState",
        description="Visitor region code (context only)",
    )
    attributes: dict[str, str] | None = Field(
        default=None,
        description="Free-form string attributes (region, language, device, ...)",
    )
    address_states: list[str] | None = Field(
        default=None,
        alias="addressStates",
        description="Region codes a version is eligible for (version only)",
    )

    @model_validator(mode="before")
    @classmethod
    def _split_attributes(cls, data: Any) -> Any:
        """Lift ``attributes.addressStates`` into its own field; drop non-string values."""
        if not isinstance(data, Mapping):
            return data
        data = dict(data)
        raw_attrs = data.get("attributes")
        if isinstance(raw_attrs, Mapping):
            attrs: dict[str, str] = {}
            for key, value in raw_attrs.items():
                if key == ADDRESS_STATES_KEY:
                    if data.get("address_states") is None and data.get(ADDRESS_STATES_KEY) is None:
                        data["address_states"] = value
                elif isinstance(value, str):
                    attrs[key] = value
            data["attributes"] = attrs
        elif raw_attrs is not None:
            data["attributes"] = None
        for key in ("address_states", ADDRESS_STATES_KEY):
            states = data.get(key)
            if states is None:
                continue
            if isinstance(states, (list, tuple)):
                data[key] = [s for s in states if isinstance(s, str)]
            else:
                data[key] = None
        for key in ("campaign", "segment", "address_state", "addressState"):
            if key in data and not isinstance(data[key], str):
                data[key] = None
        return data

    def to_payload(self) -> dict[str, Any]:
        """Return the camelCase shape used by the storefront, with addressStates folded into attributes."""
        payload: dict[str, Any] = {}
        if self.campaign:
            payload["campaign"] = self.campaign
        if self.segment:
            payload["segment"] = self.segment
        if self.address_state:
            payload["addressState"] = self.address_state
        attributes: dict[str, Any] = dict(self.attributes or {})
        if self.address_states:
            attributes[ADDRESS_STATES_KEY] = list(self.address_states)
        if attributes:
            payload["attributes"] = attributes
        return payload


def normalize_value(value: Any) -> str | None:
    """Trim a string; blank strings and non-strings are absent."""
    if not isinstance(value, str):
        return None
    trimmed = value.strip()
    return trimmed or None


def normalize_attributes(attributes: Mapping[str, Any] | None) -> dict[str, str] | None:
    """Keep attributes with a non-empty key and a non-blank string value."""
    if not attributes:
        return None
    normalized: dict[str, str] = {}
    for key, raw in attributes.items():
        if not key or key == ADDRESS_STATES_KEY:
            continue
        value = normalize_value(raw)
        if value:
            normalized[key] = value
    return normalized or None


def normalize_tags(
    tags: TargetingTags | Mapping[str, Any] | None,
    legacy_tag: str | None = None,
) -> TargetingTags | None:
    """Canonicalize targeting tags, or return None when nothing meaningful remains.

    ``legacy_tag`` is the bare single-string tag some stored versions carry;
    it is used as the campaign when no structured campaign is present.
    ``address_states`` is kept verbatim when it has at least one entry.
    """
    if tags is None:
        source = TargetingTags()
    elif isinstance(tags, TargetingTags):
        source = tags
    else:
        source = TargetingTags.model_validate(tags)

    campaign = normalize_value(source.campaign) or normalize_value(legacy_tag)
    segment = normalize_value(source.segment)
    address_state = normalize_value(source.address_state)
    attributes = normalize_attributes(source.attributes)
    address_states = list(source.address_states) if source.address_states else None

    if not (campaign or segment or address_state or attributes or address_states):
        return None
    return TargetingTags(
        campaign=campaign,
        segment=segment,
        address_state=address_state,
        attributes=attributes,
        address_states=address_states,
    )
