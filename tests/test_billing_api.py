from datetime import datetime
from decimal import Decimal

import pytest
from fastapi import HTTPException

from hospital_billing.api.deps import get_db
from hospital_billing.main import app
from hospital_billing.models import Billing, BillingStatus
from hospital_billing.schemas.billing import BillingCreateIn, BillingUpdateIn
from hospital_billing.services import billing_service

URL = "/api/transactions/billing"


def _insert(client, seed, **overrides):
    body = {
        "operation": "insertBilling",
        "admissionid": seed["admissionid"],
        "categoryid": seed["categoryid"],
        "quantity": 4,
        "unit_price": 250,
        "discount_amount": 100,
        "tax_amount": 50,
        "insurance_coverage_percent": 20,
    }
    body.update(overrides)
    return client.post(URL, json=body)


class TestInsertBilling:

    def test_computes_amounts(self, client, seed):
        res = _insert(client, seed)
        assert res.status_code == 201
        payload = res.json()
        assert payload["success"] is True
        data = payload["data"]
        assert payload["billingid"] == data["billingid"]
        assert Decimal(str(data["total_amount"])) == Decimal("1000")
        assert Decimal(str(data["insurance_covered_amount"])) == Decimal("200")
        assert Decimal(str(data["net_amount"])) == Decimal("750")
        assert data["status"] == "Pending"
        assert data["patient_name"] == "Garcia, Ana Lopez"
        assert data["category_name"] == "Room & Board"
        assert data["status_label"] == "Pending"

    def test_client_supplied_net_is_ignored(self, client, seed):
        res = _insert(client, seed, net_amount=1, total_amount=1)
        assert Decimal(str(res.json()["data"]["net_amount"])) == Decimal("750")

    def test_unknown_admission(self, client, seed):
        res = _insert(client, seed, admissionid=9999)
        assert res.status_code == 422
        assert res.json() == {"success": False, "error": "Invalid admission"}

    def test_stored_inputs_are_rounded(self, client, seed, db):
        res = _insert(client, seed, quantity=3, unit_price="0.335", discount_amount=0,
                      tax_amount=0, insurance_coverage_percent="33.335")
        assert res.status_code == 201
        data = res.json()["data"]
        assert Decimal(str(data["unit_price"])) == Decimal("0.34")
        assert Decimal(str(data["insurance_coverage_percent"])) == Decimal("33.34")
        assert Decimal(str(data["total_amount"])) == Decimal("1.02")
        assert Decimal(str(data["insurance_covered_amount"])) == Decimal("0.34")
        assert Decimal(str(data["net_amount"])) == Decimal("0.68")

        row = db.get(Billing, data["billingid"])
        assert row.total_amount == row.quantity * row.unit_price

    def test_coverage_above_hundred_rejected(self, client, seed):
        res = _insert(client, seed, insurance_coverage_percent=120)
        assert res.status_code == 422
        assert res.json()["success"] is False


class TestUpdateBilling:

    def test_recomputes_on_save(self, client, seed, db):
        billingid = _insert(client, seed).json()["billingid"]
        res = client.post(URL, json={
            "operation": "updateBilling",
            "billingid": billingid,
            "quantity": 2,
            "unit_price": 300,
            "amount": 1,
            "discount_amount": 0,
            "tax_amount": 0,
            "insurance_coverage_percent": 50,
            "status": "partial",
        })
        assert res.status_code == 200
        data = res.json()["data"]
        assert Decimal(str(data["total_amount"])) == Decimal("600")
        assert Decimal(str(data["net_amount"])) == Decimal("300")
        assert data["status"] == "Partial"

        row = db.get(Billing, billingid)
        assert row.net_amount == Decimal("300.00")

    def test_missing_record_is_404(self, client, seed):
        res = client.post(URL, json={
            "operation": "updateBilling",
            "billingid": 4242,
            "quantity": 1,
            "unit_price": 10,
            "status": "Pending",
        })
        assert res.status_code == 404
        assert res.json()["error"] == "Billing not found"

    def test_illegal_status_change(self, client, seed):
        billingid = _insert(client, seed, status="Paid").json()["billingid"]
        res = client.post(URL, json={
            "operation": "updateBilling",
            "billingid": billingid,
            "quantity": 1,
            "unit_price": 10,
            "status": "Pending",
        })
        assert res.status_code == 422
        assert "Cannot change billing status" in res.json()["error"]

    def test_update_is_all_or_nothing(self, seed, session_factory, failing_db):
        with session_factory() as s:
            row = billing_service.create_billing(s, BillingCreateIn(
                admissionid=seed["admissionid"], quantity=1, unit_price=Decimal("100")))
            billingid = row.billingid

        with pytest.raises(HTTPException) as exc:
            billing_service.update_billing(failing_db, BillingUpdateIn(
                billingid=billingid,
                quantity=9,
                unit_price=Decimal("999"),
                discount_amount=Decimal("5"),
                status="Paid",
            ))
        assert exc.value.status_code == 500
        assert exc.value.detail.startswith("Error updating billing")
        assert "server has gone away" in exc.value.detail

        with session_factory() as s:
            row = s.get(Billing, billingid)
            assert row.quantity == 1
            assert row.unit_price == Decimal("100.00")
            assert row.discount_amount == Decimal("0.00")
            assert row.net_amount == Decimal("100.00")
            assert row.status == BillingStatus.PENDING.value

    def test_database_failure_surfaces_as_500(self, client, seed, failing_db):
        billingid = _insert(client, seed).json()["billingid"]
        previous = app.dependency_overrides[get_db]
        app.dependency_overrides[get_db] = lambda: failing_db
        try:
            res = client.post(URL, json={"operation": "deleteBilling", "billingid": billingid})
        finally:
            app.dependency_overrides[get_db] = previous
        assert res.status_code == 500
        body = res.json()
        assert body["success"] is False
        assert body["error"].startswith("Error deleting billing: ")


class TestDeleteAndList:

    def test_delete_missing_mutates_nothing(self, client, seed, db):
        _insert(client, seed)
        res = client.post(URL, json={"operation": "deleteBilling", "billingid": 777})
        assert res.status_code == 404
        assert db.query(Billing).count() == 1

    def test_delete(self, client, seed, db):
        billingid = _insert(client, seed).json()["billingid"]
        res = client.post(URL, json={"operation": "deleteBilling", "billingid": billingid})
        assert res.status_code == 200
        assert res.json()["message"] == "Billing deleted successfully"
        assert db.get(Billing, billingid) is None

    def test_filters(self, client, seed, db):
        early = _insert(client, seed).json()["billingid"]
        late = _insert(client, seed, status="Paid").json()["billingid"]
        db.get(Billing, early).billing_date = datetime(2026, 10, 2, 9, 0)
        db.get(Billing, late).billing_date = datetime(2026, 10, 10, 23, 30)
        db.commit()

        res = client.get(URL, params={"operation": "getBillings"})
        assert [b["billingid"] for b in res.json()["data"]] == [late, early]

        res = client.get(URL, params={
            "operation": "getBillings",
            "date_from": "2026-10-05",
            "date_to": "2026-10-10",
        })
        assert [b["billingid"] for b in res.json()["data"]] == [late]

        res = client.get(URL, params={"operation": "getBillings", "status": "pending",
                                      "patientid": ""})
        assert [b["billingid"] for b in res.json()["data"]] == [early]

        res = client.get(URL, params={"operation": "getBillings",
                                      "patientid": seed["other_patientid"]})
        assert res.json()["data"] == []

    def test_list_carries_status_label(self, client, seed):
        _insert(client, seed, status="partial")
        data = client.get(URL, params={"operation": "getBillings"}).json()["data"]
        assert data[0]["status"] == "Partial"
        assert data[0]["status_label"] == "Partial"


class TestDatabaseUnavailable:

    def test_list_is_500(self, offline_client):
        res = offline_client.get(URL, params={"operation": "getBillings"})
        assert res.status_code == 500
        assert res.json() == {
            "success": False,
            "error": "Error fetching billings: server has gone away",
        }

    def test_insert_lookup_is_500(self, offline_client):
        res = offline_client.post(URL, json={
            "operation": "insertBilling",
            "admissionid": 1,
            "quantity": 1,
            "unit_price": 10,
        })
        assert res.status_code == 500
        assert res.json()["error"] == "Error fetching admission: server has gone away"

    def test_update_lookup_is_500(self, offline_client):
        res = offline_client.post(URL, json={
            "operation": "updateBilling",
            "billingid": 1,
            "quantity": 1,
            "unit_price": 10,
            "status": "Pending",
        })
        assert res.status_code == 500
        assert res.json()["error"] == "Error fetching billing: server has gone away"
