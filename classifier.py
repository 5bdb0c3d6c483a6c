"""
classifier.py
-------------

Keyword-based category prediction for expense descriptions.

The "AI" helpers behind the ``/ai`` endpoints are a deterministic rule engine:
a description is lowercased and checked for keyword substrings from the ordered
table in ``categories.py``.  The first category with a hit wins.  None of the
functions here raise; empty input and unknown categories fall back to the
defaults defined next to the tables.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from categories import (
    CATEGORY_AVERAGE_AMOUNTS,
    CATEGORY_KEYWORDS,
    DEFAULT_CATEGORY,
    DEFAULT_SUGGESTED_AMOUNT,
    KEYWORDS_BY_CATEGORY,
)

KeywordTable = Sequence[Tuple[str, Sequence[str]]]


@dataclass(frozen=True)
class ClassificationResult:
    predicted_category: str
    confidence: int
    suggested_amount: float


def _is_blank(text: Optional[str]) -> bool:
    return text is None or not text.strip()


def predict_category(description: Optional[str], table: KeywordTable = CATEGORY_KEYWORDS) -> str:
    """Return the first category whose keyword occurs in ``description``.

    Categories are checked in table order and keywords in list order, so a
    description mentioning both "uber" and "lunch" is Food because Food comes
    first, no matter where each word sits in the text.
    """
    if _is_blank(description):
        return DEFAULT_CATEGORY

    lowered = description.lower()
    for category, keywords in table:
        for keyword in keywords:
            if keyword.lower() in lowered:
                return category

    return DEFAULT_CATEGORY


def prediction_confidence(description: Optional[str], predicted_category: str) -> int:
    """Heuristic 0-100 score for how well the description supports a category.

    Every keyword of the category found in the text counts, not just the first:
    one hit scores 70, two or more hit the 100 cap, and a known category with
    no hits gets the floor of 40.  Categories without a keyword list (``Other``
    or anything unknown) score 0.  This is not a probability.
    """
    if _is_blank(description):
        return 0

    keywords = KEYWORDS_BY_CATEGORY.get(predicted_category)
    if keywords is None:
        return 0

    lowered = description.lower()
    matches = sum(1 for keyword in keywords if keyword.lower() in lowered)
    return min(100, matches * 30 + 40)


def suggest_amount(category: Optional[str]) -> float:
    """Static per-category average; there is no lookup of past expenses."""
    return CATEGORY_AVERAGE_AMOUNTS.get(category, DEFAULT_SUGGESTED_AMOUNT)


def classify(description: Optional[str]) -> ClassificationResult:
    category = predict_category(description)
    return ClassificationResult(
        predicted_category=category,
        confidence=prediction_confidence(description, category),
        suggested_amount=suggest_amount(category),
    )
