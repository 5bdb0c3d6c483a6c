"""
expense_service.py
------------------

Storage operations for expense records.  Every function takes the SQLAlchemy
session it should use so the API, the Streamlit page and the seed script can
share them.  Missing rows are reported with ``None``/``False`` rather than
exceptions; the HTTP layer decides what that means for the client.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

import pandas as pd
from sqlalchemy import func
from sqlalchemy.orm import Session

from database import Expense

logger = logging.getLogger(__name__)

EXPENSE_COLUMNS = ["Id", "Date", "Category", "Amount", "Description"]
UPDATABLE_FIELDS = ("category", "amount", "description", "date")


def save_expense(db: Session, expense: Expense) -> Expense:
    db.add(expense)
    db.commit()
    db.refresh(expense)
    logger.info("Saved expense %s (%s %.2f)", expense.id, expense.category, expense.amount)
    return expense


def create_expense(db: Session, category: str, amount: float, expense_date: date, description: Optional[str] = None) -> Expense:
    return save_expense(
        db,
        Expense(category=category, amount=amount, description=description, date=expense_date),
    )


def get_all_expenses(db: Session) -> List[Expense]:
    return db.query(Expense).order_by(Expense.id).all()


def get_expense_by_id(db: Session, expense_id: int) -> Optional[Expense]:
    return db.get(Expense, expense_id)


def exists_by_id(db: Session, expense_id: int) -> bool:
    return get_expense_by_id(db, expense_id) is not None


def update_expense(db: Session, expense_id: int, **changes) -> Optional[Expense]:
    """Overwrite the editable fields of an existing expense.

    Returns None when no expense has ``expense_id``.
    """
    expense = get_expense_by_id(db, expense_id)
    if expense is None:
        return None

    for field in UPDATABLE_FIELDS:
        if field in changes:
            setattr(expense, field, changes[field])
    db.commit()
    db.refresh(expense)
    logger.info("Updated expense %s", expense_id)
    return expense


def delete_expense(db: Session, expense_id: int) -> bool:
    expense = get_expense_by_id(db, expense_id)
    if expense is None:
        return False
    db.delete(expense)
    db.commit()
    logger.info("Deleted expense %s", expense_id)
    return True


def delete_all_expenses(db: Session) -> int:
    """Remove every expense and return how many rows were deleted."""
    deleted = db.query(Expense).delete(synchronize_session=False)
    db.commit()
    db.expire_all()
    logger.info("Deleted all %d expenses", deleted)
    return deleted


def get_expenses_by_category(db: Session, category: str) -> List[Expense]:
    return db.query(Expense).filter(Expense.category == category).order_by(Expense.id).all()


def get_expenses_by_date_range(db: Session, start: date, end: date) -> List[Expense]:
    return db.query(Expense).filter(Expense.date.between(start, end)).order_by(Expense.date).all()


def get_expenses_by_category_and_date_range(db: Session, category: str, start: date, end: date) -> List[Expense]:
    return (
        db.query(Expense)
        .filter(Expense.category == category, Expense.date.between(start, end))
        .order_by(Expense.date)
        .all()
    )


def get_expenses_by_date(db: Session, expense_date: date) -> List[Expense]:
    return db.query(Expense).filter(Expense.date == expense_date).order_by(Expense.id).all()


def get_expenses_greater_than(db: Session, amount: float) -> List[Expense]:
    return db.query(Expense).filter(Expense.amount > amount).order_by(Expense.id).all()


def get_expenses_less_than(db: Session, amount: float) -> List[Expense]:
    return db.query(Expense).filter(Expense.amount < amount).order_by(Expense.id).all()


def get_expenses_in_amount_range(db: Session, min_amount: float, max_amount: float) -> List[Expense]:
    return (
        db.query(Expense)
        .filter(Expense.amount >= min_amount, Expense.amount <= max_amount)
        .order_by(Expense.id)
        .all()
    )


def search_expenses_by_description(db: Session, keyword: str) -> List[Expense]:
    """Case-insensitive substring search over descriptions."""
    pattern = f"%{keyword.lower()}%"
    return (
        db.query(Expense)
        .filter(func.lower(Expense.description).like(pattern))
        .order_by(Expense.id)
        .all()
    )


def get_expenses_ordered_by_date(db: Session) -> List[Expense]:
    return db.query(Expense).order_by(Expense.date.desc(), Expense.id.desc()).all()


def get_expenses_ordered_by_amount(db: Session) -> List[Expense]:
    return db.query(Expense).order_by(Expense.amount.desc(), Expense.id).all()


def _month_bounds(today: date):
    start = today.replace(day=1)
    if start.month == 12:
        return start, start.replace(year=start.year + 1, month=1)
    return start, start.replace(month=start.month + 1)


def get_current_month_expenses(db: Session, today: Optional[date] = None) -> List[Expense]:
    start, next_month = _month_bounds(today or date.today())
    return (
        db.query(Expense)
        .filter(Expense.date >= start, Expense.date < next_month)
        .order_by(Expense.date)
        .all()
    )


def get_current_month_total(db: Session, today: Optional[date] = None) -> float:
    return float(sum(e.amount for e in get_current_month_expenses(db, today)))


def get_total_amount_by_category(db: Session, category: str) -> float:
    total = db.query(func.sum(Expense.amount)).filter(Expense.category == category).scalar()
    return float(total) if total is not None else 0.0


def get_total_expenses(db: Session) -> float:
    total = db.query(func.sum(Expense.amount)).scalar()
    return float(total) if total is not None else 0.0


def get_expense_count(db: Session) -> int:
    return db.query(Expense).count()


def expenses_to_df(expenses: List[Expense]) -> pd.DataFrame:
    if not expenses:
        return pd.DataFrame(columns=EXPENSE_COLUMNS)

    return pd.DataFrame(
        [
            {
                "Id": e.id,
                "Date": e.date,
                "Category": e.category,
                "Amount": e.amount,
                "Description": e.description or "",
            }
            for e in expenses
        ],
        columns=EXPENSE_COLUMNS,
    )
