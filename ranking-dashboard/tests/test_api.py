"""
Tests for the HTTP API (`api/`).

Repository functions are replaced per test, so no database is needed.

Covers rules:
- The public ranking is recomputed from the sales snapshot and redacts totals.
- Admin endpoints require the server-side access key.
- Wiping the history also requires the delete key.
- The notice `show` flag honors the visitor's dismissed notice id.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import UUID

import pytest
from fastapi.testclient import TestClient

import api.routers.contacts as contacts_router
import api.routers.notice as notice_router
import api.routers.ranking as ranking_router
import api.routers.sales as sales_router
from api.main import app
from domain.contact import ContactLink
from domain.notice import Notice
from domain.sale import SaleRecord

ADMIN = {"X-Admin-Key": "admin-secret"}


@pytest.fixture
def client(monkeypatch) -> TestClient:
    monkeypatch.setenv("ADMIN_ACCESS_KEY", "admin-secret")
    monkeypatch.setenv("DELETE_ACCESS_KEY", "delete-secret")
    return TestClient(app)


def _sale(n: int, first: str, last: str, amount: str, handle=None) -> SaleRecord:
    return SaleRecord(
        sale_id=UUID(int=n),
        first_name=first,
        last_name=last,
        handle=handle,
        amount=Decimal(amount),
        created_at=datetime(2025, 1, 1, tzinfo=timezone.utc) + timedelta(minutes=n),
    )


def test_health(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_ranking_empty(client, monkeypatch) -> None:
    monkeypatch.setattr(ranking_router, "list_sales", lambda: [])

    body = client.get("/api/v1/ranking").json()

    assert body["entries"] == []
    assert body["is_empty"] is True
    assert body["total_clients"] == 0


def test_ranking_groups_and_redacts(client, monkeypatch) -> None:
    sales = [_sale(i, f"Client{i}", "Test", str(100 - i)) for i in range(12)]
    sales.append(_sale(50, "client0", "TEST", "5"))
    monkeypatch.setattr(ranking_router, "list_sales", lambda: sales)

    body = client.get("/api/v1/ranking").json()
    entries = body["entries"]

    assert body["total_clients"] == 12
    assert len(entries) == 10
    assert entries[0]["rank"] == 1
    assert Decimal(entries[0]["total_amount"]) == Decimal("105")
    assert entries[0]["amount_label"] == "105.00"
    assert [e["disclosed"] for e in entries[:3]] == [True, True, True]
    assert all(e["total_amount"] is None for e in entries[3:])
    assert all(e["amount_label"] == "private" for e in entries[3:])


def test_ranking_query_bounds(client, monkeypatch) -> None:
    sales = [_sale(i, f"C{i}", "X", str(i + 1)) for i in range(5)]
    monkeypatch.setattr(ranking_router, "list_sales", lambda: sales)

    body = client.get("/api/v1/ranking", params={"top_n": 2, "visible_count": 0}).json()

    assert len(body["entries"]) == 2
    assert not any(e["disclosed"] for e in body["entries"])
    assert client.get("/api/v1/ranking", params={"top_n": -1}).status_code == 422


def test_ranking_backend_failure_is_500(client, monkeypatch) -> None:
    def boom():
        raise RuntimeError("Failed to list sales: offline")

    monkeypatch.setattr(ranking_router, "list_sales", boom)

    response = client.get("/api/v1/ranking")

    assert response.status_code == 500
    assert "offline" in response.json()["detail"]


def test_admin_endpoints_require_key(client, monkeypatch) -> None:
    monkeypatch.setattr(sales_router, "list_sales", lambda: [])

    assert client.get("/api/v1/sales").status_code == 403
    assert client.get("/api/v1/sales", headers={"X-Admin-Key": "wrong"}).status_code == 403
    assert client.post("/api/v1/admin/unlock").status_code == 403

    response = client.post("/api/v1/admin/unlock", headers=ADMIN)
    assert response.status_code == 200
    assert response.json() == {"admin_unlocked": True}


def test_admin_key_not_configured(monkeypatch) -> None:
    monkeypatch.delenv("ADMIN_ACCESS_KEY", raising=False)

    response = TestClient(app).post("/api/v1/admin/unlock", headers=ADMIN)

    assert response.status_code == 503


def test_sales_history_newest_first(client, monkeypatch) -> None:
    sales = [_sale(1, "Ana", "Silva", "1"), _sale(3, "Carla", "Souza", "3"), _sale(2, "Bruno", "Costa", "2")]
    monkeypatch.setattr(sales_router, "list_sales", lambda: sales)

    body = client.get("/api/v1/sales", headers=ADMIN).json()

    assert body["total_count"] == 3
    assert [item["first_name"] for item in body["items"]] == ["Carla", "Bruno", "Ana"]


def test_sales_history_lists_unreadable_amount(client, monkeypatch) -> None:
    broken = SaleRecord(
        sale_id=UUID(int=7),
        first_name="Ana",
        last_name="Silva",
        amount=None,
        amount_error="amount must be numeric, got 'abc'",
        created_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
    )
    monkeypatch.setattr(sales_router, "list_sales", lambda: [broken])
    monkeypatch.setattr(ranking_router, "list_sales", lambda: [broken])

    (item,) = client.get("/api/v1/sales", headers=ADMIN).json()["items"]

    assert item["amount"] is None
    assert item["amount_error"] == "amount must be numeric, got 'abc'"
    assert client.get("/api/v1/ranking").json()["is_empty"] is True


def test_create_sale(client, monkeypatch) -> None:
    captured = {}

    def fake_record_sale(first_name, last_name, amount, handle=None):
        captured.update(first_name=first_name, last_name=last_name, amount=amount, handle=handle)
        return _sale(1, first_name, last_name, str(amount), handle="@" + handle)

    monkeypatch.setattr(sales_router, "record_sale", fake_record_sale)

    response = client.post(
        "/api/v1/sales",
        json={"first_name": "Ana", "last_name": "Silva", "handle": "ana", "amount": "100.00"},
        headers=ADMIN,
    )

    assert response.status_code == 201
    assert response.json()["handle"] == "@ana"
    assert captured["amount"] == Decimal("100.00")


def test_create_sale_validation(client) -> None:
    response = client.post(
        "/api/v1/sales",
        json={"first_name": "Ana", "last_name": "Silva", "amount": "-5"},
        headers=ADMIN,
    )

    assert response.status_code == 422


def test_create_sale_blank_name_is_400(client, monkeypatch) -> None:
    def fake_record_sale(**kwargs):
        raise ValueError("first_name and last_name are required")

    monkeypatch.setattr(sales_router, "record_sale", fake_record_sale)

    response = client.post(
        "/api/v1/sales",
        json={"first_name": " ", "last_name": "Silva", "amount": "5"},
        headers=ADMIN,
    )

    assert response.status_code == 400


def test_edit_and_delete_sale(client, monkeypatch) -> None:
    monkeypatch.setattr(sales_router, "update_sale", lambda sale_id, **kw: None)
    monkeypatch.setattr(sales_router, "delete_sale", lambda sale_id: True)

    assert client.patch("/api/v1/sales/not-a-uuid", json={}, headers=ADMIN).status_code == 400
    assert client.patch(f"/api/v1/sales/{UUID(int=1)}", json={"amount": "3"}, headers=ADMIN).status_code == 404
    assert client.delete(f"/api/v1/sales/{UUID(int=1)}", headers=ADMIN).status_code == 204


def test_delete_all_requires_delete_key(client, monkeypatch) -> None:
    monkeypatch.setattr(sales_router, "delete_all_sales", lambda: 7)

    assert client.delete("/api/v1/sales", headers=ADMIN).status_code == 403

    response = client.delete("/api/v1/sales", headers={**ADMIN, "X-Delete-Key": "delete-secret"})
    assert response.status_code == 200
    assert response.json() == {"deleted_count": 7}


def test_client_suggestions(client, monkeypatch) -> None:
    sales = [_sale(1, "Ana", "Silva", "1"), _sale(2, "ana", "silva", "1"), _sale(3, "Bruno", "Costa", "1")]
    monkeypatch.setattr(sales_router, "list_sales", lambda: sales)

    body = client.get("/api/v1/clients/suggestions", params={"prefix": "an"}, headers=ADMIN).json()

    assert body == [{"first_name": "Ana", "last_name": "Silva", "handle": None}]


def test_notice_show_flag(client, monkeypatch) -> None:
    notice = Notice(notice_id="notice-1", html_content="<b>Hi</b>", is_active=True)
    monkeypatch.setattr(notice_router, "get_notice", lambda: notice)

    assert client.get("/api/v1/notice").json()["show"] is True
    dismissed = client.get("/api/v1/notice", params={"dismissed_notice_id": "notice-1"}).json()
    assert dismissed["show"] is False
    assert dismissed["html_content"] == "<b>Hi</b>"


def test_missing_notice(client, monkeypatch) -> None:
    monkeypatch.setattr(notice_router, "get_notice", lambda: None)

    assert client.get("/api/v1/notice").json() == {
        "notice_id": None,
        "html_content": "",
        "is_active": False,
        "show": False,
    }


def test_save_notice_requires_admin(client, monkeypatch) -> None:
    monkeypatch.setattr(
        notice_router,
        "save_notice",
        lambda html_content, is_active: Notice("notice-9", html_content, is_active),
    )

    assert client.put("/api/v1/notice", json={"html_content": "x", "is_active": True}).status_code == 403

    response = client.put("/api/v1/notice", json={"html_content": "x", "is_active": True}, headers=ADMIN)
    assert response.status_code == 200
    assert response.json()["notice_id"] == "notice-9"


def test_public_contacts_are_active_only(client, monkeypatch) -> None:
    calls = []

    def fake_list(active_only=False):
        calls.append(active_only)
        return [ContactLink(contact_id=UUID(int=1), number="5541999998888", label="Vendas")]

    monkeypatch.setattr(contacts_router, "list_contacts", fake_list)

    body = client.get("/api/v1/contacts").json()

    assert calls == [True]
    assert body[0]["whatsapp_url"] == "https://wa.me/5541999998888"
    assert client.get("/api/v1/admin/contacts").status_code == 403


def test_add_contact_bad_number_is_400(client, monkeypatch) -> None:
    def fake_add(number, label):
        raise ValueError("phone number has no digits")

    monkeypatch.setattr(contacts_router, "add_contact", fake_add)

    response = client.post("/api/v1/contacts", json={"number": "abc", "label": "Vendas"}, headers=ADMIN)

    assert response.status_code == 400


def test_toggle_and_delete_contact(client, monkeypatch) -> None:
    monkeypatch.setattr(
        contacts_router,
        "toggle_contact",
        lambda contact_id: ContactLink(contact_id=contact_id, number="551", label="Vendas", is_active=False),
    )
    monkeypatch.setattr(contacts_router, "delete_contact", lambda contact_id: False)

    response = client.post(f"/api/v1/contacts/{UUID(int=1)}/toggle", headers=ADMIN)
    assert response.status_code == 200
    assert response.json()["is_active"] is False

    assert client.delete(f"/api/v1/contacts/{UUID(int=1)}", headers=ADMIN).status_code == 404
