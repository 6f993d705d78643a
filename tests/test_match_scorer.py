"""MatchScorer tests: prevent semantic drift in weights and labels."""

import pytest

from versionresolver.domain.scoring import MatchScorer, version_tags
from versionresolver.domain.tags import TargetingTags, normalize_tags
from versionresolver.domain.versions import ContentVersion


def _v(version: int = 1, **kwargs) -> ContentVersion:
    kwargs.setdefault("status", "published")
    return ContentVersion(version=version, **kwargs)


def _ctx(**kwargs) -> TargetingTags:
    return normalize_tags(kwargs)


@pytest.fixture
def scorer() -> MatchScorer:
    return MatchScorer()


class TestScorerWithoutContext:
    """No context: never matched, score is the priority."""

    def test_no_context_returns_priority(self, scorer):
        result = scorer.score(_v(priority=7, tags={"campaign": "summer"}), None)
        assert result.matched is False
        assert result.score == 7
        assert result.matched_by is None

    def test_untagged_version_never_matches(self, scorer):
        result = scorer.score(_v(priority=3), _ctx(campaign="summer", segment="vip"))
        assert result.matched is False
        assert result.score == 3
        assert result.matched_by is None


class TestScorerSingleCriteria:
    """Each criterion adds its weight plus the base-match bonus."""

    def test_campaign_match_is_case_insensitive(self, scorer):
        result = scorer.score(_v(tags={"campaign": "Summer"}), _ctx(campaign="  summer "))
        assert result.matched is True
        assert result.score == 400 + 1000
        assert result.matched_by == "campaign"

    def test_segment_match(self, scorer):
        result = scorer.score(_v(priority=2, tags={"segment": "VIP"}), _ctx(segment="vip"))
        assert result.score == 2 + 200 + 1000
        assert result.matched_by == "segment"

    def test_address_state_membership(self, scorer):
        version = _v(tags={"attributes": {"addressStates": ["CA", "NY"]}})
        result = scorer.score(version, _ctx(addressState="ca"))
        assert result.score == 300 + 1000
        assert result.matched_by == "addressState"

    def test_address_state_not_in_list(self, scorer):
        version = _v(tags={"attributes": {"addressStates": ["CA", "NY"]}})
        result = scorer.score(version, _ctx(addressState="TX"))
        assert result.matched is False
        assert result.matched_by is None

    def test_address_states_on_context_are_ignored(self, scorer):
        version = _v(tags={"attributes": {"addressStates": ["CA"]}})
        context = _ctx(attributes={"addressStates": ["CA"]})
        assert scorer.score(version, context).matched is False

    def test_attributes_add_weight_per_matching_key(self, scorer):
        version = _v(tags={"attributes": {"region": "EU", "device": "mobile", "language": "fr"}})
        context = _ctx(attributes={"region": "eu", "device": "Mobile", "language": "en"})
        result = scorer.score(version, context)
        assert result.score == 2 * 50 + 1000
        assert result.matched_by == "attributes"

    def test_attribute_missing_on_version_does_not_match(self, scorer):
        version = _v(tags={"attributes": {"region": "EU"}})
        result = scorer.score(version, _ctx(attributes={"device": "mobile"}))
        assert result.matched is False

    def test_legacy_tag_acts_as_campaign(self, scorer):
        result = scorer.score(_v(tag="black-friday"), _ctx(campaign="BLACK-FRIDAY"))
        assert result.matched_by == "campaign"
        assert result.score == 1400


class TestScorerCombinations:
    """Labels keep evaluation order; campaign+segment earns a combo bonus."""

    def test_campaign_and_segment_bonus(self, scorer):
        version = _v(tags={"campaign": "summer", "segment": "vip"})
        result = scorer.score(version, _ctx(campaign="summer", segment="vip"))
        assert result.score == 400 + 200 + 100 + 1000
        assert result.matched_by == "campaign+segment"

    def test_all_criteria(self, scorer):
        version = _v(
            priority=1,
            tags={
                "campaign": "summer",
                "segment": "vip",
                "attributes": {"region": "us", "addressStates": ["CA"]},
            },
        )
        context = _ctx(campaign="summer", segment="vip", addressState="CA", attributes={"region": "US"})
        result = scorer.score(version, context)
        assert result.score == 1 + 400 + 200 + 300 + 50 + 100 + 1000
        assert result.matched_by == "campaign+segment+addressState+attributes"

    def test_partial_match_still_counts(self, scorer):
        version = _v(tags={"campaign": "summer", "segment": "vip"})
        result = scorer.score(version, _ctx(campaign="winter", segment="vip"))
        assert result.matched_by == "segment"
        assert result.score == 1200

    def test_campaign_outranks_address_state_segment_and_attributes(self, scorer):
        context = _ctx(campaign="c", segment="s", addressState="CA", attributes={"region": "eu"})
        campaign = scorer.score(_v(1, tags={"campaign": "c"}), context).score
        address = scorer.score(_v(2, tags={"attributes": {"addressStates": ["CA"]}}), context).score
        segment = scorer.score(_v(3, tags={"segment": "s"}), context).score
        attrs = scorer.score(_v(4, tags={"attributes": {"region": "EU"}}), context).score
        assert campaign > address > segment > attrs


class TestVersionTags:
    """Stored tags are normalized before scoring."""

    def test_blank_structured_campaign_falls_back_to_legacy_tag(self):
        tags = version_tags(_v(tag="legacy", tags={"campaign": "   "}))
        assert tags.campaign == "legacy"

    def test_structured_campaign_wins_over_legacy_tag(self):
        tags = version_tags(_v(tag="legacy", tags={"campaign": "structured"}))
        assert tags.campaign == "structured"

    def test_no_tags_is_none(self):
        assert version_tags(_v()) is None
