"""Lead scoring from the self-reported investment budget."""

from typing import Optional

DEFAULT_SCORE = 50

# Budget bracket (as sent by the landing-page form) -> score
BUDGET_SCORES = {
    "500k+": 90,
    "100k-500k": 75,
    "50k-100k": 60,
}


def score_lead(investment_budget: Optional[str]) -> int:
    """Return the 0-100 lead score for an exact budget bracket; anything else gets 50."""
    if not investment_budget:
        return DEFAULT_SCORE
    return BUDGET_SCORES.get(investment_budget, DEFAULT_SCORE)
