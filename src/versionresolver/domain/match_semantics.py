"""Match semantics for version targeting and fallback."""

# Score weights. Campaign > addressState > segment > attributes; priority is
# added on top as a base offset.
WEIGHT_BASE_MATCH = 1000
WEIGHT_CAMPAIGN = 400
WEIGHT_ADDRESS_STATE = 300
WEIGHT_SEGMENT = 200
WEIGHT_ATTRIBUTE = 50
WEIGHT_CAMPAIGN_SEGMENT_BONUS = 100

# matched_by labels for context matches
LABEL_CAMPAIGN = "campaign"
LABEL_SEGMENT = "segment"
LABEL_ADDRESS_STATE = "addressState"
LABEL_ATTRIBUTES = "attributes"
LABEL_CONTEXT = "context"

# matched_by labels for fallback steps
MATCHED_BY_FALLBACK_VERSION = "fallback-version"
MATCHED_BY_DEFAULT = "default"
MATCHED_BY_PRIORITY = "priority"
MATCHED_BY_LATEST = "latest"

# Rule names for reference in tests and audit
RULE_CAMPAIGN_EXACT = "campaign: case-insensitive equality"
RULE_SEGMENT_EXACT = "segment: case-insensitive equality"
RULE_ADDRESS_STATE_MEMBER = "addressState: context state is a member of version addressStates"
RULE_ATTRIBUTES_PER_KEY = "attributes: each shared key with equal value adds weight"
RULE_STATUS_ALLOWED = "status: version status is in the allowed set"
RULE_WINDOW_ACTIVE = "window: now is inside [active_from, active_to], relaxed if nothing is active"
RULE_FALLBACK_CHAIN = "fallback: fallback-version, then default, then priority/version"
