"""
Invoice API tests: numbering, totals, editing rules, listing and reports.
"""

import csv
import io
from datetime import timedelta

import pytest

from test_constants import CLIENT, WEB_DESIGN_ITEMS
from test_fixtures import client
from test_helpers import today

BASE = "/api/invoices"


def create_invoice(**overrides):
    payload = {"client": CLIENT, "items": WEB_DESIGN_ITEMS, "tax_rate": "8.25"}
    payload.update(overrides)
    r = client.post(BASE, json=payload)
    assert r.status_code == 201, r.text
    return r.json()


# =============================================================================
# CREATE
# =============================================================================


def test_create_invoice_numbers_and_totals():
    body = create_invoice()
    year = today().year

    assert body["invoice_number"] == f"INV-{year}-0001"
    assert body["status"] == "draft"
    assert body["subtotal"] == pytest.approx(1259.97)
    assert body["tax_amount"] == pytest.approx(103.95)
    assert body["total"] == pytest.approx(1363.92)
    assert [item["line_total"] for item in body["items"]] == pytest.approx([1200.0, 59.97])
    assert body["issue_date"] == today().isoformat()
    assert body["due_date"] == (today() + timedelta(days=30)).isoformat()


def test_invoice_numbers_increment():
    first = create_invoice()
    second = create_invoice()
    assert first["invoice_number"].endswith("-0001")
    assert second["invoice_number"].endswith("-0002")


def test_create_invoice_requires_items():
    r = client.post(BASE, json={"client": CLIENT, "items": []})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"


def test_create_invoice_rejects_negative_price_and_bad_tax():
    bad_price = [{"description": "Refund", "quantity": "1", "unit_price": "-5"}]
    assert client.post(BASE, json={"client": CLIENT, "items": bad_price}).status_code == 400
    r = client.post(BASE, json={"client": CLIENT, "items": WEB_DESIGN_ITEMS, "tax_rate": 120})
    assert r.status_code == 400


def test_due_date_before_issue_date_rejected():
    r = client.post(
        BASE,
        json={
            "client": CLIENT,
            "items": WEB_DESIGN_ITEMS,
            "issue_date": "2026-05-10",
            "due_date": "2026-05-01",
        },
    )
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "SERVICE_VALIDATION_ERROR"


# =============================================================================
# UPDATE AND STATUS
# =============================================================================


def test_update_items_recalculates_totals():
    invoice = create_invoice()
    r = client.put(
        f"{BASE}/{invoice['invoice_id']}",
        json={"items": [{"description": "Logo design", "quantity": "2", "unit_price": "150"}]},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["subtotal"] == pytest.approx(300.0)
    assert body["tax_amount"] == pytest.approx(24.75)
    assert body["total"] == pytest.approx(324.75)
    assert len(body["items"]) == 1


def test_update_tax_rate_only_keeps_items():
    invoice = create_invoice()
    r = client.put(f"{BASE}/{invoice['invoice_id']}", json={"tax_rate": 0})
    body = r.json()
    assert len(body["items"]) == 2
    assert body["total"] == pytest.approx(1259.97)


def test_paid_invoice_cannot_be_edited():
    invoice = create_invoice()
    url = f"{BASE}/{invoice['invoice_id']}"
    assert client.patch(f"{url}/status", json={"status": "paid"}).json()["status"] == "paid"

    r = client.put(url, json={"notes": "late change"})
    assert r.status_code == 400
    assert "Paid" in r.json()["error"]["message"]


def test_sent_invoice_past_due_reported_overdue():
    issue = today() - timedelta(days=40)
    invoice = create_invoice(
        status="sent",
        issue_date=issue.isoformat(),
        due_date=(issue + timedelta(days=30)).isoformat(),
    )
    assert invoice["status"] == "overdue"

    fetched = client.get(f"{BASE}/{invoice['invoice_id']}").json()
    assert fetched["status"] == "overdue"


def test_unknown_invoice_returns_404():
    r = client.get(f"{BASE}/00000000-0000-0000-0000-000000000000")
    assert r.status_code == 404


# =============================================================================
# LIST, DELETE
# =============================================================================


def test_list_invoices_search_filter_and_pagination():
    create_invoice()
    create_invoice(client={**CLIENT, "name": "Globex Ltd", "email": "ap@globex.example.com"})
    create_invoice(status="sent")

    r = client.get(BASE, params={"limit": 2})
    body = r.json()
    assert body["pagination"] == {
        "page": 1,
        "limit": 2,
        "total": 3,
        "total_pages": 2,
        "has_next": True,
        "has_prev": False,
    }
    assert len(body["items"]) == 2

    globex = client.get(BASE, params={"search": "GLOBEX"}).json()
    assert globex["pagination"]["total"] == 1
    assert globex["items"][0]["client_name"] == "Globex Ltd"

    sent = client.get(BASE, params={"status": "sent"}).json()
    assert sent["pagination"]["total"] == 1

    by_number = client.get(
        BASE, params={"sort_by": "invoice_number", "sort_order": "asc"}
    ).json()
    numbers = [i["invoice_number"] for i in by_number["items"]]
    assert numbers == sorted(numbers)


def test_search_treats_wildcards_literally():
    create_invoice()
    create_invoice(client={**CLIENT, "name": "100% Pure_Juice Co"})

    for term in ("%", "_", "0% p"):
        found = client.get(BASE, params={"search": term}).json()
        assert [i["client_name"] for i in found["items"]] == ["100% Pure_Juice Co"]


def test_list_rejects_unknown_sort_column():
    assert client.get(BASE, params={"sort_by": "secret"}).status_code == 400


def test_delete_invoice():
    invoice = create_invoice()
    r = client.delete(f"{BASE}/{invoice['invoice_id']}")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "deleted": invoice["invoice_id"]}
    assert client.delete(f"{BASE}/{invoice['invoice_id']}").status_code == 404


def test_bulk_delete_reports_unknown_ids():
    a = create_invoice()
    b = create_invoice()
    missing = "00000000-0000-0000-0000-000000000001"

    r = client.post(
        f"{BASE}/bulk-delete", json={"invoice_ids": [a["invoice_id"], b["invoice_id"], missing]}
    )
    assert r.status_code == 200
    body = r.json()
    assert sorted(body["deleted"]) == sorted([a["invoice_id"], b["invoice_id"]])
    assert body["failed"] == [missing]


# =============================================================================
# STATS, ALERTS, EXPORT
# =============================================================================


def test_stats_counts_effective_statuses_and_revenue():
    paid = create_invoice()
    client.patch(f"{BASE}/{paid['invoice_id']}/status", json={"status": "paid"})
    create_invoice()
    issue = today() - timedelta(days=45)
    create_invoice(
        status="sent",
        issue_date=issue.isoformat(),
        due_date=(issue + timedelta(days=30)).isoformat(),
    )
    create_invoice(status="sent")

    stats = client.get(f"{BASE}/stats").json()
    assert stats == {
        "total": 4,
        "total_revenue": pytest.approx(1363.92),
        "paid": 1,
        "overdue": 1,
        "draft": 1,
        "sent": 1,
    }


def test_alerts_list_overdue_before_reminders():
    issue = today() - timedelta(days=40)
    overdue = create_invoice(
        status="sent",
        issue_date=issue.isoformat(),
        due_date=(today() - timedelta(days=10)).isoformat(),
    )
    soon = create_invoice(status="sent", due_date=(today() + timedelta(days=3)).isoformat())
    create_invoice(status="sent", due_date=(today() + timedelta(days=20)).isoformat())
    create_invoice(status="draft", due_date=(today() + timedelta(days=1)).isoformat())

    alerts = client.get(f"{BASE}/alerts").json()
    assert [(a["invoice_id"], a["type"], a["days"]) for a in alerts] == [
        (overdue["invoice_id"], "overdue", 10),
        (soon["invoice_id"], "reminder", 3),
    ]


def test_export_csv():
    invoice = create_invoice()
    r = client.get(f"{BASE}/export")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert "attachment" in r.headers["content-disposition"]

    rows = list(csv.reader(io.StringIO(r.text)))
    assert rows[0][0] == "Invoice Number"
    assert rows[1][0] == invoice["invoice_number"]
    assert rows[1][-3:] == ["1259.97", "103.95", "1363.92"]
