import argparse
from datetime import date, timedelta

from classifier import predict_category
from database import init_db, SessionLocal
import expense_service as service

SAMPLE_EXPENSES = [
    ("Lunch at Starbucks with friends", 450.0, 0),
    ("Uber ride to office", 180.0, 1),
    ("Electricity bill", 1350.0, 3),
    ("Netflix subscription", 649.0, 5),
    ("Amazon shopping - shoes", 2199.0, 8),
    ("Pharmacy medicine", 320.0, 12),
    ("Udemy course", 499.0, 15),
    ("Hotel stay in Goa", 5400.0, 20),
]


def seed_expenses(db=None, force: bool = False) -> int:
    """Insert the sample expenses, categorised by the keyword classifier."""
    owns_session = db is None
    if owns_session:
        init_db()
        db = SessionLocal()

    try:
        # Check if expenses exist
        if service.get_expense_count(db) and not force:
            print("Expenses already exist. Skipping seed.")
            return 0

        today = date.today()
        for description, amount, days_ago in SAMPLE_EXPENSES:
            service.create_expense(
                db,
                predict_category(description),
                amount,
                today - timedelta(days=days_ago),
                description,
            )

        print(f"Database seeded with {len(SAMPLE_EXPENSES)} sample expenses.")
        return len(SAMPLE_EXPENSES)
    finally:
        if owns_session:
            db.close()


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Insert sample expenses into the database")
    parser.add_argument("--force", action="store_true", help="Seed even if expenses already exist.")
    return parser.parse_args()


if __name__ == "__main__":
    seed_expenses(force=parse_args().force)
