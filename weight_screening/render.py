"""
Weight Screening Outcome Rendering
Deterministic description strings for screening outcomes.

RULES (LOCKED):
1. UNDER / OVER / COMPLIANT -> sentence built from delta, actual, min and max
2. DOES_NOT_MEET_MINIMUM_AGE / HEIGHT_NOT_WITHIN_BOUNDS / NO_STANDARD_AVAILABLE
   -> fixed sentence, no fields

NOTE: wording is presentation only. Callers that need the numbers should read
them from the Compliance value, not parse these strings.
"""

from weight_screening.engine import Compliance, ComplianceStatus

UNDER_TEMPLATE = (
    "Under the minimum weight by {delta} lbs: weighs {actual} lbs, "
    "standard is {min_weight}-{max_weight} lbs."
)

OVER_TEMPLATE = (
    "Over the maximum weight by {delta} lbs: weighs {actual} lbs, "
    "standard is {min_weight}-{max_weight} lbs."
)

COMPLIANT_TEMPLATE = (
    "Within standard (delta {delta} lbs): weighs {actual} lbs, "
    "standard is {min_weight}-{max_weight} lbs."
)

DOES_NOT_MEET_MINIMUM_AGE_TEXT = (
    "Does not meet the minimum age of 17 for the screening table."
)

HEIGHT_NOT_WITHIN_BOUNDS_TEXT = (
    "Height is outside the screening table range of 58 to 80 inches."
)

NO_STANDARD_AVAILABLE_TEXT = (
    "No weight standard is published for this height, gender and age group."
)

RESULT_TEMPLATES = {
    ComplianceStatus.UNDER: UNDER_TEMPLATE,
    ComplianceStatus.OVER: OVER_TEMPLATE,
    ComplianceStatus.COMPLIANT: COMPLIANT_TEMPLATE,
}

FIXED_TEXT = {
    ComplianceStatus.DOES_NOT_MEET_MINIMUM_AGE: DOES_NOT_MEET_MINIMUM_AGE_TEXT,
    ComplianceStatus.HEIGHT_NOT_WITHIN_BOUNDS: HEIGHT_NOT_WITHIN_BOUNDS_TEXT,
    ComplianceStatus.NO_STANDARD_AVAILABLE: NO_STANDARD_AVAILABLE_TEXT,
}


def describe(compliance: Compliance) -> str:
    """
    Render a screening outcome as a single sentence.

    Args:
        compliance: Outcome returned by evaluate().

    Returns:
        Description string. Same outcome always renders the same text.

    Example:
        >>> describe(evaluate("female", 30, 60, 132))
        "Over the maximum weight by 1 lbs: weighs 132 lbs, standard is 97-131 lbs."
    """
    if compliance.status in FIXED_TEXT:
        return FIXED_TEXT[compliance.status]

    result = compliance.result
    return RESULT_TEMPLATES[compliance.status].format(
        delta=result.delta,
        actual=result.actual,
        min_weight=result.standard.min_weight,
        max_weight=result.standard.max_weight,
    )
