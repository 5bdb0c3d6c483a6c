# dashboard.py: table helpers (sort, search, running totals) and charts for the Streamlit page

import plotly.express as px
import pandas as pd
from typing import Optional

SORT_FIELDS = ("date", "amount", "category", "description")


def _prep(df):
    """
    Prepares the expense dataframe for display.
    """
    if df.empty:
        return df

    df = df.copy()
    df['Date'] = pd.to_datetime(df['Date'], errors='coerce')
    df['Month'] = df['Date'].dt.to_period('M').astype(str)

    # Ensure Amount is numeric
    df['Amount'] = pd.to_numeric(df['Amount'], errors='coerce')

    if "Category" not in df.columns:
        df["Category"] = "Other"
    else:
        df["Category"] = df["Category"].fillna("Other").replace("", "Other")

    return df


def _sort_key(field: str):
    if field == "amount":
        return lambda s: pd.to_numeric(s, errors="coerce")
    if field == "date":
        return lambda s: pd.to_datetime(s, errors="coerce")
    return lambda s: s.where(s.isna(), s.astype(str).str.lower())


def sort_expenses(df: pd.DataFrame, field: str = "date", order: str = "desc") -> pd.DataFrame:
    """
    Stable sort on one column.

    Amounts compare numerically, dates chronologically and text
    case-insensitively.  Missing or unparseable values go last when
    ascending and first when descending.
    """
    if field not in SORT_FIELDS:
        raise ValueError(f"Cannot sort by {field!r}; choose one of {', '.join(SORT_FIELDS)}")
    if df.empty:
        return df

    ascending = order == "asc"
    return df.sort_values(
        field.capitalize(),
        ascending=ascending,
        kind="stable",
        na_position="last" if ascending else "first",
        key=_sort_key(field),
    )


def search_expenses(df: pd.DataFrame, term: Optional[str]) -> pd.DataFrame:
    """Rows whose description contains ``term`` (case-insensitive)."""
    term = (term or "").strip().lower()
    if df.empty or not term:
        return df
    mask = df["Description"].fillna("").astype(str).str.lower().str.contains(term, regex=False)
    return df[mask]


def filter_by_category(df: pd.DataFrame, category: Optional[str]) -> pd.DataFrame:
    if df.empty or not category:
        return df
    return df[df["Category"] == category]


def calculate_statistics(df: pd.DataFrame) -> dict:
    """Total, count and average amount for the rows currently shown."""
    count = len(df)
    total = float(pd.to_numeric(df["Amount"], errors="coerce").fillna(0).sum()) if count else 0.0
    return {
        "total": total,
        "count": count,
        "average": total / count if count else 0.0,
    }


def running_totals(df: pd.DataFrame) -> pd.DataFrame:
    """
    Cumulative spend by day, oldest first.
    """
    if df.empty:
        return pd.DataFrame(columns=["Date", "Amount", "RunningTotal"])

    daily = df.groupby(pd.to_datetime(df["Date"]).dt.normalize())["Amount"].sum().sort_index().reset_index()
    daily["RunningTotal"] = daily["Amount"].cumsum()
    return daily


def cat_spend(df):
    """
    Donut chart of spending by category.
    """
    by_cat = df.groupby('Category')['Amount'].sum().reset_index()

    fig = px.pie(by_cat, values='Amount', names='Category', hole=0.4, title="Spending by Category")
    fig.update_traces(textposition='inside', textinfo='percent+label')
    return fig


def spending_trend(df):
    """
    Area chart of cumulative spending over time.
    """
    daily = running_totals(df)

    fig = px.area(daily, x='Date', y='RunningTotal', title="Running Total")
    fig.update_layout(height=350)
    return fig
