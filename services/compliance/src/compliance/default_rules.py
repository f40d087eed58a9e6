"""
Built-in TCPA / Telemarketing Sales Rule library for Whisperwire.

The rule identifiers below are stable keys; detectors and the session
state refer to them by name for the order-dependent and positive-disclosure
rules.
"""

from __future__ import annotations

from ww_common.models import Rule, RuleCategory, RuleSet, Severity

CALLING_TIME = "TIME-001"
DNC_REQUEST = "DNC-001"
DNC_CONTINUED = "DNC-002"
DNC_LISTED = "DNC-003"
SELLER_IDENTITY = "DISC-001"
SALES_PURPOSE = "DISC-002"
PRODUCT_DESCRIPTION = "DISC-003"
CONSENT_REVOCATION = "CONS-001"
CALLBACK_NUMBER = "IDENT-001"
PRERECORDED_VOICE = "PREC-001"
RECORDING_DISCLOSURE = "REC-001"

RULE_SET_VERSION = "1.0.0"
RULE_SET_LAST_UPDATED = "2026-01-16"
DISCLAIMER = (
    "This tool provides compliance risk signals only. It is NOT legal advice. "
    "Compliance requirements depend on jurisdiction and require legal counsel review. "
    "Always consult with qualified legal professionals for compliance decisions."
)

DEFAULT_RULES: tuple[Rule, ...] = (
    # ── Calling time ──
    Rule(
        id=CALLING_TIME,
        title="Calling Time Violation",
        category=RuleCategory.CALLING_TIME,
        description="Telemarketing calls made outside 8am-9pm in the consumer's local time",
        severity=Severity.HIGH,
        requires_metadata=True,
        metadata_field="call_time_local",
        why_it_matters=(
            "The TCPA prohibits telemarketing calls before 8am or after 9pm in the consumer's "
            "local time zone. Violations can result in $500-$1,500 per call."
        ),
        recommended_fix=(
            "Verify time zone before calling. If outside hours, apologize and offer to call "
            "back during appropriate hours."
        ),
        legal_reference="47 U.S.C. § 227(c)(5); 47 C.F.R. § 64.1200(c)(1)",
    ),
    # ── Do not call ──
    Rule(
        id=DNC_REQUEST,
        title="Customer Requested No Further Calls",
        category=RuleCategory.DO_NOT_CALL,
        description="Customer explicitly requests to stop receiving calls",
        severity=Severity.HIGH,
        triggers=(
            "don't call me",
            "do not call me",
            "stop calling me",
            "remove me from your list",
            "take me off your list",
            "put me on do not call",
            "add me to do not call",
            "no more calls",
            "never call again",
            "stop contacting me",
        ),
        regex_patterns=(
            r"(?:don'?t|do\s*not|stop|quit|cease)\s+(?:call|contact|ring|phone)",
            r"(?:remove|take)\s+(?:me|my\s+number)\s+(?:from|off)",
            r"(?:put|add)\s+(?:me|my\s+number)\s+(?:on|to)\s+(?:the\s+)?(?:do\s*not\s*call|dnc)",
        ),
        why_it_matters=(
            "Under TCPA, consumers can revoke consent by any reasonable means at any time. "
            "Continuing to call after a DNC request is a violation."
        ),
        recommended_fix=(
            "Understood. I'll add you to our Do Not Call list effective immediately. You won't "
            "receive any more marketing calls from us. Is there anything else I can help you "
            "with today?"
        ),
        legal_reference="47 U.S.C. § 227(c); 47 C.F.R. § 64.1200(d)",
    ),
    Rule(
        id=DNC_CONTINUED,
        title="Agent Continued After DNC Request",
        category=RuleCategory.DO_NOT_CALL,
        description="Agent attempted to continue sales pitch after customer requested DNC",
        severity=Severity.HIGH,
        triggers=(
            "before you go",
            "just one more thing",
            "let me just tell you",
            "you might want to hear",
            "are you sure",
            "but wait",
        ),
        regex_patterns=(
            r"(?:before\s+you\s+go|just\s+one\s+more|let\s+me\s+just)",
            r"(?:are\s+you\s+sure|but\s+wait|hear\s+me\s+out)",
        ),
        why_it_matters=(
            "After a DNC request, any attempt to continue selling significantly increases "
            "violation risk and demonstrates willful non-compliance."
        ),
        recommended_fix=(
            "Do not continue selling. Acknowledge the request, confirm DNC placement, and end "
            "the call professionally."
        ),
        legal_reference="47 C.F.R. § 64.1200(d)(3)",
    ),
    Rule(
        id=DNC_LISTED,
        title="National DNC List - No Consent Evidence",
        category=RuleCategory.DO_NOT_CALL,
        description="Number is on National DNC list and call is marketing without consent evidence",
        severity=Severity.HIGH,
        requires_metadata=True,
        metadata_field="is_dnc_listed",
        why_it_matters=(
            "Calling numbers on the National DNC Registry without prior express consent or an "
            "established business relationship is a TCPA violation."
        ),
        recommended_fix=(
            "If calling a DNC-listed number, ensure you have documented consent or an existing "
            "business relationship. If unsure, end the marketing call."
        ),
        legal_reference="47 C.F.R. § 64.1200(c)(2)",
    ),
    # ── Disclosures (presence checks) ──
    Rule(
        id=SELLER_IDENTITY,
        title="Missing Seller Identity Disclosure",
        category=RuleCategory.DISCLOSURE,
        description="Agent did not promptly identify the seller/company name",
        severity=Severity.MEDIUM,
        regex_patterns=(
            r"(?:calling\s+(?:from|on\s+behalf\s+of)|this\s+is|my\s+name\s+is.*?(?:with|from))",
        ),
        why_it_matters=(
            "FTC Telemarketing Sales Rule requires prompt disclosure of the seller's identity "
            "at the beginning of outbound sales calls."
        ),
        recommended_fix="Hi, my name is [Name] calling from [Company Name].",
        legal_reference="16 C.F.R. § 310.4(d)(1)",
    ),
    Rule(
        id=SALES_PURPOSE,
        title="Missing Sales Call Nature Disclosure",
        category=RuleCategory.DISCLOSURE,
        description="Agent did not disclose that the call is a sales call",
        severity=Severity.MEDIUM,
        regex_patterns=(r"(?:sales|marketing|promotion|offer|special\s+deal|opportunity)",),
        why_it_matters=(
            "The TSR requires disclosure that the call is for sales purposes before making "
            "the sales pitch."
        ),
        recommended_fix="I'm calling today with a special offer for you...",
        legal_reference="16 C.F.R. § 310.4(d)(2)",
    ),
    Rule(
        id=PRODUCT_DESCRIPTION,
        title="Missing Product/Service Description",
        category=RuleCategory.DISCLOSURE,
        description="Agent proceeded with pitch without describing what is being sold",
        severity=Severity.LOW,
        why_it_matters=(
            "Consumers should understand what product or service is being offered early in "
            "the call."
        ),
        recommended_fix="The reason for my call is to tell you about our [product/service]...",
        legal_reference="16 C.F.R. § 310.4(d)(3)",
    ),
    # ── Consent ──
    Rule(
        id=CONSENT_REVOCATION,
        title="Consent Revocation Detected",
        category=RuleCategory.CONSENT,
        description="Consumer appears to be revoking consent by reasonable means",
        severity=Severity.HIGH,
        triggers=(
            "i withdraw my consent",
            "i revoke my consent",
            "i take back my consent",
            "i no longer consent",
            "i didn't agree to this",
            "i never agreed",
            "i want to opt out",
            "opt me out",
            "unsubscribe me",
        ),
        regex_patterns=(
            r"(?:withdraw|revoke|take\s+back|cancel)\s+(?:my\s+)?(?:consent|permission|authorization)",
            r"(?:opt|unsubscribe)\s+(?:me\s+)?out",
            r"(?:never|didn'?t)\s+(?:agree|consent|authorize)",
        ),
        why_it_matters=(
            "Under TCPA, consumers can revoke consent by any reasonable means. Non-standard "
            "wording still constitutes valid revocation."
        ),
        recommended_fix=(
            "I understand you'd like to revoke your consent. I'll process that right away and "
            "you'll be removed from our calling list."
        ),
        legal_reference="47 C.F.R. § 64.1200(a)(7)(ii)",
    ),
    # ── Identification ──
    Rule(
        id=CALLBACK_NUMBER,
        title="Missing Callback Number",
        category=RuleCategory.IDENTIFICATION,
        description="Agent did not provide callback number/address for consumer contact",
        severity=Severity.LOW,
        regex_patterns=(
            r"(?:call\s+(?:us\s+)?back\s+at|reach\s+us\s+at|our\s+number\s+is|contact\s+us\s+at)",
        ),
        why_it_matters=(
            "Telemarketers must provide a means for consumers to reach the business, "
            "typically a callback number."
        ),
        recommended_fix="If you have any questions, you can reach us at [phone number].",
        legal_reference="16 C.F.R. § 310.4(d)(7)",
    ),
    # ── Prerecorded voice ──
    Rule(
        id=PRERECORDED_VOICE,
        title="Prerecorded Voice Without Consent",
        category=RuleCategory.PRERECORDED,
        description=(
            "Call using prerecorded/artificial voice without required prior express written consent"
        ),
        severity=Severity.HIGH,
        requires_metadata=True,
        metadata_field="is_prerecorded",
        why_it_matters=(
            "TCPA requires prior express written consent for prerecorded telemarketing calls "
            "to cell phones."
        ),
        recommended_fix=(
            "Ensure written consent is obtained and documented before using prerecorded "
            "messages for marketing."
        ),
        legal_reference="47 U.S.C. § 227(b)(1)(A)",
    ),
    # ── Recording disclosure (jurisdiction-dependent) ──
    Rule(
        id=RECORDING_DISCLOSURE,
        title="Missing Recording Disclosure",
        category=RuleCategory.RECORDING_DISCLOSURE,
        description="Call is being recorded without disclosure (jurisdiction-dependent)",
        severity=Severity.MEDIUM,
        regex_patterns=(
            r"(?:this\s+call\s+(?:is|may\s+be)\s+(?:being\s+)?recorded|call\s+recording"
            r"|for\s+quality\s+(?:and\s+training\s+)?purposes)",
        ),
        why_it_matters=(
            "Some states require two-party consent for call recording. This rule is "
            "jurisdiction-dependent and should be reviewed with counsel."
        ),
        recommended_fix=(
            "This call may be recorded for quality and training purposes. By continuing, you "
            "consent to this recording."
        ),
        legal_reference="State-specific wiretapping/recording consent laws",
        optional=True,
    ),
)


def default_rule_set() -> RuleSet:
    """Return the built-in rule set."""
    return RuleSet(
        version=RULE_SET_VERSION,
        last_updated=RULE_SET_LAST_UPDATED,
        disclaimer=DISCLAIMER,
        rules=DEFAULT_RULES,
    )
