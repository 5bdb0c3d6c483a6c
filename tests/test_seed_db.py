import expense_service as service
from seed_db import SAMPLE_EXPENSES, seed_expenses


def test_seed_populates_empty_store(db_session):
    assert seed_expenses(db_session) == len(SAMPLE_EXPENSES)
    categories = {e.description: e.category for e in service.get_all_expenses(db_session)}
    assert categories["Lunch at Starbucks with friends"] == "Food"
    assert categories["Hotel stay in Goa"] == "Hotel"


def test_seed_skips_when_data_exists(db_session):
    seed_expenses(db_session)
    assert seed_expenses(db_session) == 0
    assert service.get_expense_count(db_session) == len(SAMPLE_EXPENSES)
