"""
categories.py
-------------

Static category tables shared by the keyword classifier and the insight
generator.  Both tables are built once at import time and are read-only.

``CATEGORY_KEYWORDS`` is an ordered tuple of ``(category, keywords)`` pairs.
The tuple order is the tie-break priority when a description matches keywords
from more than one category: the earlier entry wins.  Edit the order here and
you change classification results, so bump ``TABLE_VERSION`` when you do.
"""

from types import MappingProxyType
from typing import Mapping, Tuple

TABLE_VERSION = "2025.08"

DEFAULT_CATEGORY = "Other"
DEFAULT_SUGGESTED_AMOUNT = 100.0

CATEGORY_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("Food", (
        "restaurant", "food", "lunch", "dinner", "breakfast", "cafe", "coffee",
        "starbucks", "mcdonald", "pizza", "burger", "grocery", "supermarket",
        "swiggy", "zomato", "dominos", "kfc", "subway",
    )),
    ("Transportation", (
        "uber", "ola", "taxi", "bus", "metro", "train", "flight", "petrol",
        "diesel", "fuel", "parking", "toll", "auto", "rickshaw", "cab",
    )),
    ("Entertainment", (
        "movie", "cinema", "netflix", "spotify", "game", "concert", "theatre",
        "bowling", "party", "club", "bar", "entertainment", "fun", "hobby",
    )),
    ("Bills", (
        "electricity", "water", "gas", "internet", "mobile", "phone", "wifi",
        "maintenance", "rent", "emi", "loan", "insurance", "bill", "utility",
    )),
    ("Shopping", (
        "amazon", "flipkart", "shopping", "clothes", "shirt", "shoes", "bag",
        "electronics", "mobile", "laptop", "gift", "myntra", "ajio",
    )),
    ("Healthcare", (
        "doctor", "hospital", "medicine", "pharmacy", "medical", "health",
        "clinic", "dentist", "checkup", "apollo", "max", "fortis",
    )),
    ("Education", (
        "course", "education", "training", "certification", "udemy",
        "coursera", "school", "college", "tuition", "workshop", "seminar",
    )),
    ("Hotel", (
        "hotel", "accommodation", "stay", "resort", "lodge", "inn",
        "guesthouse", "airbnb", "oyo", "treebo", "fab hotels", "marriott",
        "taj", "hyatt", "hilton", "radisson", "room booking", "check-in",
        "booking.com", "makemytrip", "goibibo",
    )),
)

# Read-only lookup view over the ordered table (dicts keep insertion order).
KEYWORDS_BY_CATEGORY: Mapping[str, Tuple[str, ...]] = MappingProxyType(dict(CATEGORY_KEYWORDS))

CATEGORY_AVERAGE_AMOUNTS: Mapping[str, float] = MappingProxyType({
    "Food": 250.0,
    "Transportation": 150.0,
    "Entertainment": 400.0,
    "Bills": 1200.0,
    "Shopping": 800.0,
    "Healthcare": 600.0,
    "Education": 1500.0,
    "Hotel": 2500.0,
})

# Every label a stored expense is expected to carry, in display order.
CATEGORIES: Tuple[str, ...] = tuple(name for name, _ in CATEGORY_KEYWORDS) + (DEFAULT_CATEGORY,)
