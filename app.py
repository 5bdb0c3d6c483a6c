import streamlit as st
import pandas as pd
from pathlib import Path
import sys
from datetime import date

# Add current directory to path
sys.path.append(str(Path(__file__).parent))

from database import SessionLocal, init_db
from categories import CATEGORIES
from classifier import classify, suggest_amount
from config import Config
from logging_setup import setup_logging
import expense_service as service
from dashboard import (
    SORT_FIELDS,
    _prep,
    calculate_statistics,
    cat_spend,
    filter_by_category,
    search_expenses,
    sort_expenses,
    spending_trend,
)
from insights import build_insight, compute_category_totals

# --- Configuration ---
st.set_page_config(page_title="Smart Expense Tracker", layout="wide", page_icon="💰")
CURRENCY_SYMBOL = "₹"
ADD_FORM_KEYS = ("new_description", "new_category_input", "new_amount_input", "new_date_input")
QUICK_CATEGORIES = [c for c in CATEGORIES if c != "Other"]

# --- Database Session ---
setup_logging(Config.LOG_LEVEL)
init_db()

if "db" not in st.session_state:
    st.session_state.db = SessionLocal()

def get_db():
    return st.session_state.db


def _money(value: float) -> str:
    return f"{CURRENCY_SYMBOL}{value:,.2f}"


def _done(message: str, *reset_keys: str):
    """Queue a message and widget resets for the next run, then rerun."""
    st.session_state["flash"] = message
    st.session_state["reset_keys"] = list(reset_keys)
    st.rerun()


def _apply_pending_resets():
    # Widget keys can only be cleared before the widgets are drawn in a run.
    for key in st.session_state.pop("reset_keys", []):
        st.session_state.pop(key, None)
    message = st.session_state.pop("flash", None)
    if message:
        st.success(message)


# --- Add expense ---
def render_add_form():
    st.subheader("➕ Add Expense")

    st.session_state.setdefault("new_category_input", CATEGORIES[0])
    st.session_state.setdefault("new_amount_input", suggest_amount(CATEGORIES[0]))
    st.session_state.setdefault("new_date_input", date.today())

    description = st.text_input("Description", key="new_description", placeholder="e.g. Lunch at Starbucks")
    if st.button("🤖 Predict category", key="predict_category", disabled=not description.strip()):
        result = classify(description)
        st.session_state["new_category_input"] = result.predicted_category
        st.session_state["new_amount_input"] = result.suggested_amount
        st.info(
            f"Predicted **{result.predicted_category}** ({result.confidence}% confidence), "
            f"typical amount {_money(result.suggested_amount)}"
        )

    with st.form("add_expense"):
        col1, col2, col3 = st.columns(3)
        category = col1.selectbox("Category", CATEGORIES, key="new_category_input")
        amount = col2.number_input("Amount", min_value=0.0, step=10.0, key="new_amount_input")
        expense_date = col3.date_input("Date", key="new_date_input")
        submitted = st.form_submit_button("Add expense")

    if submitted:
        if amount <= 0:
            st.error("Amount must be greater than 0")
            return
        service.create_expense(get_db(), category, amount, expense_date, description.strip() or None)
        _done("Expense added", *ADD_FORM_KEYS)


def render_quick_add():
    st.caption("Quick add (typical amount, dated today)")
    columns = st.columns(len(QUICK_CATEGORIES))
    for column, category in zip(columns, QUICK_CATEGORIES):
        amount = suggest_amount(category)
        if column.button(f"+ {category}", key=f"quick_{category}", help=_money(amount)):
            service.create_expense(get_db(), category, amount, date.today(), f"Quick {category} expense")
            _done(f"Quick {category} expense of {_money(amount)} added!")


# --- Edit / delete ---
def render_edit_panel(df: pd.DataFrame):
    if df.empty:
        return

    st.subheader("✏️ Edit or delete")
    labels = {
        int(row.Id): f"#{int(row.Id)} · {row.Category} · {_money(row.Amount)} · {row.Description}"
        for row in df.itertuples()
    }
    expense_id = st.selectbox("Expense", list(labels), format_func=labels.get, key="edit_expense_id")
    expense = service.get_expense_by_id(get_db(), expense_id)
    if expense is None:
        st.warning("That expense no longer exists.")
        return

    with st.form(f"edit_{expense_id}"):
        col1, col2, col3 = st.columns(3)
        category = col1.selectbox(
            "Category",
            CATEGORIES,
            index=CATEGORIES.index(expense.category) if expense.category in CATEGORIES else len(CATEGORIES) - 1,
            key=f"edit_category_{expense_id}",
        )
        amount = col2.number_input(
            "Amount", min_value=0.0, value=float(expense.amount), key=f"edit_amount_{expense_id}"
        )
        expense_date = col3.date_input("Date", value=expense.date, key=f"edit_date_{expense_id}")
        description = st.text_input(
            "Description", value=expense.description or "", key=f"edit_description_{expense_id}"
        )
        save, delete = st.columns(2)
        do_save = save.form_submit_button("Save changes")
        do_delete = delete.form_submit_button("🗑️ Delete")

    if do_save:
        if amount <= 0:
            st.error("Amount must be greater than 0")
            return
        service.update_expense(
            get_db(),
            expense_id,
            category=category,
            amount=amount,
            date=expense_date,
            description=description.strip() or None,
        )
        _done("Expense updated")
    if do_delete:
        service.delete_expense(get_db(), expense_id)
        _done("Expense deleted", "edit_expense_id")


def render_clear_all():
    st.subheader("⚠️ Danger zone")
    confirmed = st.checkbox(
        "I understand this deletes ALL expenses and cannot be undone", key="confirm_clear_all"
    )
    if st.button("Delete all expenses", key="clear_all"):
        if not confirmed:
            st.warning("Tick the confirmation box first.")
            return
        deleted = service.delete_all_expenses(get_db())
        _done(f"All {deleted} expenses have been deleted!", "confirm_clear_all", "edit_expense_id")


def main():
    st.title("💰 Smart Expense Tracker")
    _apply_pending_resets()

    expenses = service.get_all_expenses(get_db())
    raw_df = service.expenses_to_df(expenses)
    df = _prep(raw_df)

    # AI insight banner
    category_totals, total_spent = compute_category_totals(raw_df)
    st.info(build_insight(category_totals, total_spent).message)

    render_add_form()
    render_quick_add()

    st.subheader("📋 Expenses")
    col1, col2, col3, col4 = st.columns([3, 2, 2, 1])
    term = col1.text_input("Search description", key="search_term")
    category = col2.selectbox("Category filter", ["All", *CATEGORIES], key="category_filter")
    sort_field = col3.selectbox("Sort by", SORT_FIELDS, key="sort_field")
    order = col4.radio("Order", ["desc", "asc"], horizontal=True, key="sort_order")

    view = filter_by_category(search_expenses(df, term), None if category == "All" else category)
    view = sort_expenses(view, sort_field, order)

    stats = calculate_statistics(view)
    k1, k2, k3 = st.columns(3)
    k1.metric("Total", _money(stats["total"]))
    k2.metric("Expenses", stats["count"])
    k3.metric("Average", _money(stats["average"]))

    if view.empty:
        st.caption("No expenses match.")
    else:
        st.dataframe(
            view[["Id", "Date", "Category", "Amount", "Description"]],
            hide_index=True,
            width="stretch",
        )
        chart_left, chart_right = st.columns(2)
        chart_left.plotly_chart(cat_spend(view), width="stretch")
        chart_right.plotly_chart(spending_trend(view), width="stretch")

    render_edit_panel(view)

    if expenses:
        render_clear_all()


main()
