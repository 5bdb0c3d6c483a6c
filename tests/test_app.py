from datetime import date

import expense_service as service


def _button(at, label):
    return next(b for b in at.button if b.label == label)


def _stored(db_session):
    db_session.expire_all()
    return [(e.category, e.amount, e.description) for e in service.get_all_expenses(db_session)]


def test_add_keeps_typed_amount_after_category_change(page, db_session):
    page.selectbox(key="new_category_input").select("Bills")
    page.number_input(key="new_amount_input").set_value(500.0)
    _button(page, "Add expense").click().run()

    assert not page.exception
    assert _stored(db_session) == [("Bills", 500.0, None)]


def test_add_resets_form_after_save(page, db_session):
    page.text_input(key="new_description").input("Water bill")
    page.selectbox(key="new_category_input").select("Bills")
    page.number_input(key="new_amount_input").set_value(60.0)
    _button(page, "Add expense").click().run()

    assert _stored(db_session) == [("Bills", 60.0, "Water bill")]
    assert page.text_input(key="new_description").value == ""
    assert page.selectbox(key="new_category_input").value == "Food"


def test_predict_fills_category_and_amount(page, db_session):
    page.text_input(key="new_description").input("Hotel stay in Goa").run()
    page.button(key="predict_category").click().run()

    assert page.selectbox(key="new_category_input").value == "Hotel"
    assert page.number_input(key="new_amount_input").value == 2500.0

    _button(page, "Add expense").click().run()
    assert _stored(db_session) == [("Hotel", 2500.0, "Hotel stay in Goa")]


def test_zero_amount_is_rejected(page, db_session):
    page.number_input(key="new_amount_input").set_value(0.0)
    _button(page, "Add expense").click().run()

    assert _stored(db_session) == []
    assert any("greater than 0" in e.value for e in page.error)


def test_quick_add(page, db_session):
    page.button(key="quick_Transportation").click().run()

    assert not page.exception
    db_session.expire_all()
    expenses = service.get_all_expenses(db_session)
    assert [(e.category, e.amount, e.description, e.date) for e in expenses] == [
        ("Transportation", 150.0, "Quick Transportation expense", date.today())
    ]


def test_edit_expense(page, db_session, sample_expenses):
    page.run()
    expense_id = page.selectbox(key="edit_expense_id").value
    page.number_input(key=f"edit_amount_{expense_id}").set_value(75.0)
    _button(page, "Save changes").click().run()

    assert not page.exception
    db_session.expire_all()
    assert service.get_expense_by_id(db_session, expense_id).amount == 75.0


def test_delete_expense(page, db_session, sample_expenses):
    page.run()
    expense_id = page.selectbox(key="edit_expense_id").value
    _button(page, "🗑️ Delete").click().run()

    assert not page.exception
    db_session.expire_all()
    assert not service.exists_by_id(db_session, expense_id)
    assert service.get_expense_count(db_session) == 2


def test_delete_all_requires_confirmation(page, db_session, sample_expenses):
    page.run()
    page.button(key="clear_all").click().run()
    assert service.get_expense_count(db_session) == 3

    page.checkbox(key="confirm_clear_all").check()
    page.button(key="clear_all").click().run()
    assert not page.exception
    assert service.get_expense_count(db_session) == 0
