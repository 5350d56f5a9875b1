# Overview: Pure risk scoring; likelihood x result x exposure.

"""
Risk score = likelihood x result x exposure, each an ordinal factor.

If any factor is missing or unrecognized the score is 0, never a partial
product. The maximum is 5 x 6 x 6 = 180.
"""

from __future__ import annotations


LIKELIHOOD_SCORES = {
    "unlikely": 1,
    "possible": 2,
    "likely": 3,
    "very-likely": 4,
    "almost-certain": 5,
}

RESULT_SCORES = {
    "first-aid": 1,
    "medical-treatment": 2,
    "serious-lti": 3,
    "disability": 4,
    "fatality": 5,
    "multiple-fatalities": 6,
}

EXPOSURE_SCORES = {
    "hasnt-happened": 1,
    "rarely": 2,
    "sometimes": 3,
    "often": 4,
    "very-often": 5,
    "constant": 6,
}

MAX_RISK_SCORE = (
    max(LIKELIHOOD_SCORES.values())
    * max(RESULT_SCORES.values())
    * max(EXPOSURE_SCORES.values())
)

# (inclusive upper bound, recommendation)
RISK_BANDS = (
    (24, "Low: monitor and document"),
    (60, "Moderate: mitigate and track actions"),
    (120, "High: escalate and implement CAPA"),
)
CRITICAL_RECOMMENDATION = "Critical: stop work, immediate action and escalation"
INCOMPLETE_RECOMMENDATION = "Select all factors to calculate"


def _factor(table: dict, key) -> int:
    # Anything other than a known key counts as unselected
    if not isinstance(key, str):
        return 0
    return table.get(key, 0)


def risk_score(likelihood: str | None, result: str | None, exposure: str | None) -> int:
    l = _factor(LIKELIHOOD_SCORES, likelihood)
    r = _factor(RESULT_SCORES, result)
    e = _factor(EXPOSURE_SCORES, exposure)
    if not (l and r and e):
        return 0
    return l * r * e


def recommendation(score: int) -> str:
    if not score or score <= 0:
        return INCOMPLETE_RECOMMENDATION
    for upper, text in RISK_BANDS:
        if score <= upper:
            return text
    return CRITICAL_RECOMMENDATION


def assess(likelihood: str | None, result: str | None, exposure: str | None) -> dict:
    score = risk_score(likelihood, result, exposure)
    return {"score": score, "recommendation": recommendation(score)}
