from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple

import pandas as pd

ONBOARDING_MESSAGE = "Start tracking expenses to get AI insights!"
BUDGET_SHARE_THRESHOLD = 40.0
MIN_CATEGORIES_FOR_BALANCE = 3


@dataclass(frozen=True)
class InsightResult:
    top_category: Optional[str]
    top_category_share: float
    message: str


def compute_category_totals(df: pd.DataFrame) -> Tuple[Dict[str, float], float]:
    """Sum expense amounts per category plus the grand total.

    Categories keep the order in which they first appear in ``df`` so the
    insight tie-break is reproducible for a given snapshot.
    """

    if df.empty:
        return {}, 0.0

    by_cat = df.groupby("Category", sort=False)["Amount"].sum()
    totals = {str(category): float(amount) for category, amount in by_cat.items()}
    return totals, float(df["Amount"].sum())


def _top_category(category_totals: Mapping[str, float]) -> Tuple[str, float]:
    # max() keeps the first maximal item, i.e. the earliest inserted on ties.
    return max(category_totals.items(), key=lambda item: item[1])


def build_insight(category_totals: Mapping[str, float], total_spent: float) -> InsightResult:
    """Pick the dominant category and phrase a recommendation around it."""

    # No data and an all-zero total both get the onboarding text.
    if not category_totals or total_spent <= 0:
        return InsightResult(top_category=None, top_category_share=0.0, message=ONBOARDING_MESSAGE)

    top_category, top_amount = _top_category(category_totals)
    percentage = (top_amount / total_spent) * 100

    message = f"💡 AI Insight: Your highest spending is on {top_category} ({percentage:.1f}% of total). "
    if percentage > BUDGET_SHARE_THRESHOLD:
        message += f"Consider setting a budget for {top_category} to control spending."
    elif len(category_totals) < MIN_CATEGORIES_FOR_BALANCE:
        message += "Try categorizing expenses more specifically for better insights."
    else:
        message += "Your spending is well-distributed across categories. Good job! 👍"

    return InsightResult(top_category=top_category, top_category_share=percentage, message=message)


def generate_spending_insight(category_totals: Mapping[str, float], total_spent: float) -> str:
    return build_insight(category_totals, total_spent).message
