"""
Finance tracker tests: categories, transactions and dashboard aggregates.
"""

from datetime import date

import pytest

from repositories import UserRepository
from services.finance_service import DashboardService
from test_fixtures import auth_headers, client, db_session, register_user
from test_helpers import today

CATEGORIES = "/api/categories"
TRANSACTIONS = "/api/transactions"
DASHBOARD = "/api/dashboard"


def make_category(headers, name, type="expense"):
    r = client.post(CATEGORIES, json={"name": name, "type": type}, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()


def record(headers, category, amount, on=None, description=None):
    payload = {
        "amount": amount,
        "type": category["type"],
        "category_id": category["category_id"],
        "date": (on or today()).isoformat(),
    }
    if description:
        payload["description"] = description
    r = client.post(TRANSACTIONS, json=payload, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()


# =============================================================================
# CATEGORIES
# =============================================================================


def test_categories_are_per_user_and_unique_by_name():
    sarah = auth_headers(register_user("sarah"))
    michael = auth_headers(register_user("michael"))

    make_category(sarah, "Groceries")
    r = client.post(CATEGORIES, json={"name": "groceries", "type": "expense"}, headers=sarah)
    assert r.status_code == 409

    # Another user may reuse the name
    make_category(michael, "Groceries")
    assert len(client.get(CATEGORIES, headers=sarah).json()) == 1


def test_list_categories_filters_by_type_and_sorts_by_name():
    headers = auth_headers(register_user("sarah"))
    make_category(headers, "Salary", "income")
    make_category(headers, "Rent")
    make_category(headers, "Dining")

    names = [c["name"] for c in client.get(CATEGORIES, headers=headers).json()]
    assert names == ["Dining", "Rent", "Salary"]

    income = client.get(CATEGORIES, params={"type": "income"}, headers=headers).json()
    assert [c["name"] for c in income] == ["Salary"]


def test_rename_category_conflict():
    headers = auth_headers(register_user("sarah"))
    make_category(headers, "Rent")
    dining = make_category(headers, "Dining")

    r = client.put(f"{CATEGORIES}/{dining['category_id']}", json={"name": "Rent"}, headers=headers)
    assert r.status_code == 409

    r = client.put(
        f"{CATEGORIES}/{dining['category_id']}", json={"name": "Restaurants"}, headers=headers
    )
    assert r.status_code == 200
    assert r.json()["name"] == "Restaurants"


def test_category_in_use_cannot_be_deleted():
    headers = auth_headers(register_user("sarah"))
    rent = make_category(headers, "Rent")
    txn = record(headers, rent, "1200.00")

    r = client.delete(f"{CATEGORIES}/{rent['category_id']}", headers=headers)
    assert r.status_code == 400
    assert "1 transaction" in r.json()["error"]["message"]

    client.delete(f"{TRANSACTIONS}/{txn['transaction_id']}", headers=headers)
    assert client.delete(f"{CATEGORIES}/{rent['category_id']}", headers=headers).status_code == 204


def test_category_counts():
    headers = auth_headers(register_user("sarah"))
    groceries = make_category(headers, "Groceries")
    make_category(headers, "Travel")
    record(headers, groceries, "54.20")
    record(headers, groceries, "12.35")

    counts = {c["name"]: c for c in client.get(f"{CATEGORIES}/counts", headers=headers).json()}
    assert counts["Groceries"]["transaction_count"] == 2
    assert counts["Groceries"]["total_amount"] == pytest.approx(66.55)
    assert counts["Travel"]["transaction_count"] == 0
    assert counts["Travel"]["total_amount"] == 0


# =============================================================================
# TRANSACTIONS
# =============================================================================


def test_create_transaction_includes_category_name():
    headers = auth_headers(register_user("sarah"))
    groceries = make_category(headers, "Groceries")
    txn = record(headers, groceries, "54.20", description="Weekly shop")

    assert txn["category_name"] == "Groceries"
    assert txn["amount"] == pytest.approx(54.2)
    assert txn["description"] == "Weekly shop"


def test_transaction_requires_own_category():
    sarah = auth_headers(register_user("sarah"))
    michael = auth_headers(register_user("michael"))
    foreign = make_category(michael, "Hobbies")

    r = client.post(
        TRANSACTIONS,
        json={
            "amount": "10",
            "type": "expense",
            "category_id": foreign["category_id"],
            "date": today().isoformat(),
        },
        headers=sarah,
    )
    assert r.status_code == 404


def test_amount_must_be_positive():
    headers = auth_headers(register_user("sarah"))
    rent = make_category(headers, "Rent")
    r = client.post(
        TRANSACTIONS,
        json={"amount": "-5", "type": "expense", "category_id": rent["category_id"], "date": "2026-01-01"},
        headers=headers,
    )
    assert r.status_code == 400


def test_list_transactions_filters_newest_first():
    headers = auth_headers(register_user("sarah"))
    groceries = make_category(headers, "Groceries")
    salary = make_category(headers, "Salary", "income")
    old = record(headers, groceries, "30", on=date(2026, 1, 5))
    new = record(headers, groceries, "40", on=date(2026, 2, 5))
    pay = record(headers, salary, "3000", on=date(2026, 2, 1))

    body = client.get(TRANSACTIONS, headers=headers).json()
    assert body["total"] == 3
    assert [t["transaction_id"] for t in body["items"]] == [
        new["transaction_id"],
        pay["transaction_id"],
        old["transaction_id"],
    ]

    february = client.get(
        TRANSACTIONS,
        params={"start_date": "2026-02-01", "end_date": "2026-02-28", "type": "expense"},
        headers=headers,
    ).json()
    assert [t["transaction_id"] for t in february["items"]] == [new["transaction_id"]]

    r = client.get(
        TRANSACTIONS, params={"start_date": "2026-03-01", "end_date": "2026-02-01"}, headers=headers
    )
    assert r.status_code == 400


def test_transactions_are_private():
    sarah = auth_headers(register_user("sarah"))
    michael = auth_headers(register_user("michael"))
    txn = record(sarah, make_category(sarah, "Rent"), "900")

    assert client.get(f"{TRANSACTIONS}/{txn['transaction_id']}", headers=michael).status_code == 404
    assert client.get(TRANSACTIONS, headers=michael).json()["total"] == 0


def test_update_transaction_moves_category():
    headers = auth_headers(register_user("sarah"))
    groceries = make_category(headers, "Groceries")
    dining = make_category(headers, "Dining")
    txn = record(headers, groceries, "25")

    r = client.put(
        f"{TRANSACTIONS}/{txn['transaction_id']}",
        json={"category_id": dining["category_id"], "amount": "27.50"},
        headers=headers,
    )
    assert r.status_code == 200
    assert r.json()["category_name"] == "Dining"
    assert r.json()["amount"] == pytest.approx(27.5)


# =============================================================================
# DASHBOARD
# =============================================================================


def test_summary_totals_and_balance():
    headers = auth_headers(register_user("sarah"))
    salary = make_category(headers, "Salary", "income")
    rent = make_category(headers, "Rent")
    record(headers, salary, "3200.00", on=date(2026, 3, 1))
    record(headers, rent, "1450.50", on=date(2026, 3, 2))
    record(headers, rent, "99.99", on=date(2026, 4, 2))

    summary = client.get(f"{DASHBOARD}/summary", headers=headers).json()
    assert summary == {
        "total_income": pytest.approx(3200.0),
        "total_expense": pytest.approx(1550.49),
        "balance": pytest.approx(1649.51),
        "transaction_count": 3,
    }

    march = client.get(
        f"{DASHBOARD}/summary",
        params={"start_date": "2026-03-01", "end_date": "2026-03-31"},
        headers=headers,
    ).json()
    assert march["transaction_count"] == 2
    assert march["balance"] == pytest.approx(1749.5)


def test_empty_summary_is_zero():
    headers = auth_headers(register_user("sarah"))
    summary = client.get(f"{DASHBOARD}/summary", headers=headers).json()
    assert summary == {
        "total_income": 0,
        "total_expense": 0,
        "balance": 0,
        "transaction_count": 0,
    }


def test_monthly_buckets_cross_year_boundary(db_session):
    account = register_user("sarah")
    headers = auth_headers(account)
    salary = make_category(headers, "Salary", "income")
    rent = make_category(headers, "Rent")
    record(headers, salary, "3000", on=date(2025, 12, 28))
    record(headers, rent, "1200", on=date(2026, 1, 3))
    record(headers, rent, "50", on=date(2025, 9, 30))

    user = UserRepository(db_session).get_by_email(account["email"])
    months = DashboardService.monthly(db_session, user, months=3, today=date(2026, 1, 15))

    assert [m.month for m in months] == ["2025-11", "2025-12", "2026-01"]
    assert months[0].income == 0
    assert months[1].income == pytest.approx(3000.0)
    assert months[2].expense == pytest.approx(1200.0)
    assert months[2].balance == pytest.approx(-1200.0)


def test_monthly_endpoint_ends_with_current_month():
    headers = auth_headers(register_user("sarah"))
    rent = make_category(headers, "Rent")
    record(headers, rent, "800")

    months = client.get(f"{DASHBOARD}/monthly", params={"months": 4}, headers=headers).json()
    assert len(months) == 4
    assert months[-1]["month"] == today().strftime("%Y-%m")
    assert months[-1]["expense"] == pytest.approx(800.0)


def test_spending_by_category_in_range():
    headers = auth_headers(register_user("sarah"))
    michael = auth_headers(register_user("michael"))
    salary = make_category(headers, "Salary", "income")
    rent = make_category(headers, "Rent")
    groceries = make_category(headers, "Groceries")
    make_category(headers, "Travel")

    record(headers, salary, "3000", on=date(2026, 2, 1))
    record(headers, groceries, "45.50", on=date(2026, 2, 3))
    record(headers, groceries, "60.25", on=date(2026, 2, 28))
    record(headers, rent, "1200", on=date(2026, 2, 1))
    record(headers, rent, "1200", on=date(2026, 3, 1))
    record(michael, make_category(michael, "Rent"), "999", on=date(2026, 2, 10))

    r = client.get(
        f"{DASHBOARD}/spending-by-category",
        params={"start_date": "2026-02-01", "end_date": "2026-02-28"},
        headers=headers,
    )
    assert r.status_code == 200
    spending = r.json()
    assert [(s["category_name"], s["total_amount"]) for s in spending] == [
        ("Rent", 1200.0),
        ("Groceries", 105.75),
    ]
    assert spending[0]["category_id"] == rent["category_id"]
    assert {s["category_type"] for s in spending} == {"expense"}


def test_spending_by_category_requires_valid_range():
    headers = auth_headers(register_user("sarah"))
    url = f"{DASHBOARD}/spending-by-category"
    assert client.get(url, params={"start_date": "2026-02-01"}, headers=headers).status_code == 400
    r = client.get(
        url, params={"start_date": "2026-03-01", "end_date": "2026-02-01"}, headers=headers
    )
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "SERVICE_VALIDATION_ERROR"
