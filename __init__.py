"""Smart Expense Tracker.

A FastAPI backend (``server.py``) storing expenses with SQLAlchemy, a
Streamlit page (``app.py``) for day-to-day use, and a keyword-based category
predictor (``classifier.py``) with a spending-insight helper (``insights.py``).
Run ``seed_db.py`` to load sample data.
"""
