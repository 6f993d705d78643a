"""MatchScorer: weighted multi-criteria scoring of a version against a context."""

from __future__ import annotations

from dataclasses import dataclass

from .match_semantics import (
    LABEL_ADDRESS_STATE,
    LABEL_ATTRIBUTES,
    LABEL_CAMPAIGN,
    LABEL_CONTEXT,
    LABEL_SEGMENT,
    WEIGHT_ADDRESS_STATE,
    WEIGHT_ATTRIBUTE,
    WEIGHT_BASE_MATCH,
    WEIGHT_CAMPAIGN,
    WEIGHT_CAMPAIGN_SEGMENT_BONUS,
    WEIGHT_SEGMENT,
)
from .tags import TargetingTags, normalize_tags, normalize_value
from .versions import ContentVersion


@dataclass(frozen=True)
class MatchResult:
    """Outcome of scoring one version against a context."""

    matched: bool
    score: int
    matched_by: str | None


def version_tags(version: ContentVersion) -> TargetingTags | None:
    """Canonical tags for a stored version, folding in the legacy ``tag`` field."""
    return normalize_tags(version.tags, legacy_tag=version.tag)


def _same(left: str | None, right: str | None) -> bool:
    return bool(left and right and left.lower() == right.lower())


class MatchScorer:
    """Score versions against a targeting context."""

    def score(self, version: ContentVersion, context: TargetingTags | None) -> MatchResult:
        if context is None:
            return MatchResult(matched=False, score=version.priority, matched_by=None)

        tags = version_tags(version) or TargetingTags()
        labels: list[str] = []
        score = version.priority

        if _same(normalize_value(context.campaign), tags.campaign):
            score += WEIGHT_CAMPAIGN
            labels.append(LABEL_CAMPAIGN)

        if _same(normalize_value(context.segment), tags.segment):
            score += WEIGHT_SEGMENT
            labels.append(LABEL_SEGMENT)

        if self._address_state_matches(context, tags):
            score += WEIGHT_ADDRESS_STATE
            labels.append(LABEL_ADDRESS_STATE)

        attribute_hits = self._matching_attribute_keys(context, tags)
        if attribute_hits:
            score += WEIGHT_ATTRIBUTE * len(attribute_hits)
            labels.append(LABEL_ATTRIBUTES)

        if LABEL_CAMPAIGN in labels and LABEL_SEGMENT in labels:
            score += WEIGHT_CAMPAIGN_SEGMENT_BONUS

        matched = bool(labels)
        if matched:
            score += WEIGHT_BASE_MATCH

        return MatchResult(
            matched=matched,
            score=score,
            matched_by=("+".join(labels) or LABEL_CONTEXT) if matched else None,
        )

    @staticmethod
    def _address_state_matches(context: TargetingTags, tags: TargetingTags) -> bool:
        state = normalize_value(context.address_state)
        if not state or not tags.address_states:
            return False
        wanted = state.upper()
        return any(s.upper() == wanted for s in tags.address_states)

    @staticmethod
    def _matching_attribute_keys(context: TargetingTags, tags: TargetingTags) -> list[str]:
        if not context.attributes or not tags.attributes:
            return []
        keys: list[str] = []
        for key, value in context.attributes.items():
            if _same(normalize_value(value), tags.attributes.get(key)):
                keys.append(key)
        return keys
