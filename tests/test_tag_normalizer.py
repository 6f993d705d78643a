"""Tag normalizer tests."""

from versionresolver.domain.tags import (
    TargetingTags,
    normalize_attributes,
    normalize_tags,
    normalize_value,
)


class TestNormalizeValue:
    def test_trims(self):
        assert normalize_value("  summer ") == "summer"

    def test_blank_is_absent(self):
        assert normalize_value("   ") is None
        assert normalize_value("") is None

    def test_non_string_is_absent(self):
        assert normalize_value(5) is None
        assert normalize_value(None) is None


class TestNormalizeAttributes:
    def test_drops_blank_values_and_keys(self):
        assert normalize_attributes({"region": " eu ", "device": " ", "": "x"}) == {"region": "eu"}

    def test_empty_result_is_absent(self):
        assert normalize_attributes({"region": "", "device": None}) is None
        assert normalize_attributes({}) is None
        assert normalize_attributes(None) is None


class TestNormalizeTags:
    """Canonical structure, or None when nothing meaningful remains."""

    def test_none_stays_none(self):
        assert normalize_tags(None) is None

    def test_all_blank_is_none(self):
        assert normalize_tags({"campaign": "  ", "segment": "", "attributes": {"region": " "}}) is None

    def test_trims_fields(self):
        tags = normalize_tags({"campaign": " summer ", "segment": " vip", "addressState": "CA "})
        assert tags == TargetingTags(campaign="summer", segment="vip", address_state="CA")

    def test_address_states_preserved_verbatim(self):
        tags = normalize_tags({"attributes": {"addressStates": [" ca", "CA", "CA"]}})
        assert tags is not None
        assert tags.address_states == [" ca", "CA", "CA"]
        assert tags.attributes is None

    def test_empty_address_states_is_absent(self):
        assert normalize_tags({"attributes": {"addressStates": []}}) is None

    def test_non_string_entries_are_dropped(self):
        tags = normalize_tags({"campaign": 42, "attributes": {"n": 5, "region": "eu", "addressStates": ["CA", 7]}})
        assert tags.campaign is None
        assert tags.attributes == {"region": "eu"}
        assert tags.address_states == ["CA"]

    def test_legacy_tag_fills_missing_campaign(self):
        assert normalize_tags(None, legacy_tag=" promo ").campaign == "promo"
        assert normalize_tags({"campaign": "real"}, legacy_tag="promo").campaign == "real"

    def test_idempotent(self):
        raw = {
            "campaign": " Summer ",
            "segment": "",
            "attributes": {"region": " eu ", "device": "", "addressStates": ["CA", "ny"]},
        }
        once = normalize_tags(raw)
        assert normalize_tags(once) == once

    def test_does_not_mutate_input(self):
        raw = {"campaign": " summer ", "attributes": {"addressStates": ["CA"], "region": " eu "}}
        normalize_tags(raw)
        assert raw == {"campaign": " summer ", "attributes": {"addressStates": ["CA"], "region": " eu "}}


class TestTagsPayload:
    def test_address_states_folded_into_attributes(self):
        tags = normalize_tags({"campaign": "c", "attributes": {"region": "eu", "addressStates": ["CA"]}})
        assert tags.to_payload() == {
            "campaign": "c",
            "attributes": {"region": "eu", "addressStates": ["CA"]},
        }

    def test_empty_payload(self):
        assert TargetingTags().to_payload() == {}
