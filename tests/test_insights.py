import pandas as pd

from insights import (
    ONBOARDING_MESSAGE,
    build_insight,
    compute_category_totals,
    generate_spending_insight,
)


def test_empty_totals_returns_onboarding():
    assert generate_spending_insight({}, 0) == ONBOARDING_MESSAGE


def test_zero_total_with_data_returns_onboarding():
    assert generate_spending_insight({"Food": 0.0, "Bills": 0.0}, 0) == ONBOARDING_MESSAGE
    assert generate_spending_insight({"Food": 10.0}, 0) == ONBOARDING_MESSAGE


def test_dominant_category_gets_budget_advice():
    message = generate_spending_insight({"Food": 450, "Bills": 50}, 500)
    assert "Food (90.0% of total)" in message
    assert "Consider setting a budget for Food" in message


def test_balanced_spending():
    result = build_insight({"Food": 34, "Transportation": 33, "Bills": 33}, 100)
    assert result.top_category == "Food"
    assert result.top_category_share == 34.0
    assert "(34.0% of total)" in result.message
    assert "well-distributed" in result.message


def test_few_categories_suggests_finer_categorization():
    message = generate_spending_insight({"Food": 30, "Bills": 20}, 100)
    assert "(30.0% of total)" in message
    assert "categorizing expenses more specifically" in message


def test_tie_goes_to_first_inserted():
    assert build_insight({"Food": 50, "Bills": 50}, 100).top_category == "Food"
    assert build_insight({"Bills": 50, "Food": 50}, 100).top_category == "Bills"


def test_empty_state_result_fields():
    result = build_insight({}, 0)
    assert result.top_category is None
    assert result.top_category_share == 0.0
    assert result.message == ONBOARDING_MESSAGE


def test_compute_category_totals_keeps_first_seen_order():
    df = pd.DataFrame(
        {
            "Category": ["Bills", "Food", "Bills"],
            "Amount": [100.0, 40.0, 60.0],
        }
    )
    totals, total = compute_category_totals(df)
    assert list(totals) == ["Bills", "Food"]
    assert totals == {"Bills": 160.0, "Food": 40.0}
    assert total == 200.0


def test_compute_category_totals_empty():
    df = pd.DataFrame(columns=["Category", "Amount"])
    assert compute_category_totals(df) == ({}, 0.0)


def test_exactly_forty_percent_is_not_over_budget():
    message = generate_spending_insight({"Food": 40, "Bills": 30, "Hotel": 30}, 100)
    assert "(40.0% of total)" in message
    assert "Consider setting a budget" not in message
    assert "well-distributed" in message
