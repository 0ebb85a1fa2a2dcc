from datetime import datetime
from decimal import Decimal

from hospital_billing.models import Payment

URL = "/api/transactions/payment"


def _pay(client, seed, **overrides):
    body = {
        "operation": "insertPayment",
        "admission_id": seed["admissionid"],
        "amount": 300,
        "payment_method": "Cash",
    }
    body.update(overrides)
    return client.post(URL, json=body)


def _bill(client, seed, quantity=1, unit_price=1000, status="Pending"):
    return client.post("/api/transactions/billing", json={
        "operation": "insertBilling",
        "admissionid": seed["admissionid"],
        "quantity": quantity,
        "unit_price": unit_price,
        "status": status,
    })


class TestRecordPayment:

    def test_appends_row(self, client, seed, db):
        res = _pay(client, seed, insurance_provider="PhilHealth", insurance_coverage=120,
                   remarks="first installment")
        assert res.status_code == 201
        body = res.json()
        assert body["success"] is True
        data = body["data"]
        assert data["payment_id"] == body["payment_id"]
        assert data["payment_method"] == "Cash"
        assert data["insurance_provider"] == "PhilHealth"
        assert data["patient_name"] == "Garcia, Ana Lopez"
        assert db.query(Payment).count() == 1

    def test_overpayment_is_not_blocked(self, client, seed):
        _bill(client, seed, unit_price=500)
        assert _pay(client, seed, amount=400).status_code == 201
        assert _pay(client, seed, amount=400).status_code == 201

        res = client.get(URL, params={"operation": "getPaymentSummary",
                                      "admission_id": seed["admissionid"]})
        summary = res.json()["data"]
        assert Decimal(str(summary["total_billed"])) == Decimal("500")
        assert Decimal(str(summary["total_paid"])) == Decimal("800")
        assert Decimal(str(summary["remaining_balance"])) == Decimal("0")
        assert summary["payment_count"] == 2

    def test_unknown_admission(self, client, seed):
        res = _pay(client, seed, admission_id=31337)
        assert res.status_code == 422
        assert res.json()["error"] == "Invalid admission"

    def test_amount_must_be_positive(self, client, seed):
        assert _pay(client, seed, amount=0).status_code == 422

    def test_unknown_method(self, client, seed):
        assert _pay(client, seed, payment_method="Barter").status_code == 422


class TestSummaryAndListing:

    def test_remaining_balance_ignores_cancelled_lines(self, client, seed):
        _bill(client, seed, quantity=2, unit_price=1000)
        _bill(client, seed, unit_price=5000, status="Cancelled")
        _pay(client, seed, amount=750)

        res = client.get(URL, params={"operation": "getPaymentSummary",
                                      "admission_id": seed["admissionid"]})
        summary = res.json()["data"]
        assert Decimal(str(summary["total_billed"])) == Decimal("2000")
        assert Decimal(str(summary["remaining_balance"])) == Decimal("1250")

    def test_summary_unknown_admission(self, client, seed):
        res = client.get(URL, params={"operation": "getPaymentSummary", "admission_id": 5})
        assert res.status_code == 404

    def test_list_by_admission(self, client, seed):
        _pay(client, seed, amount=100)
        _pay(client, seed, amount=200)
        res = client.get(URL, params={"operation": "getPaymentsByAdmission",
                                      "admission_id": seed["admissionid"]})
        amounts = sorted(Decimal(str(p["amount"])) for p in res.json()["data"])
        assert amounts == [Decimal("100"), Decimal("200")]

    def test_filters(self, client, seed, db):
        cash = _pay(client, seed, amount=100).json()["payment_id"]
        card = _pay(client, seed, amount=200, payment_method="Credit Card").json()["payment_id"]
        db.get(Payment, cash).payment_date = datetime(2026, 10, 1, 10, 0)
        db.get(Payment, card).payment_date = datetime(2026, 10, 3, 18, 45)
        db.commit()

        res = client.get(URL, params={"operation": "getAllPayments",
                                      "payment_method": "Credit Card"})
        assert [p["payment_id"] for p in res.json()["data"]] == [card]

        res = client.get(URL, params={"operation": "getAllPayments",
                                      "date_from": "2026-10-01", "date_to": "2026-10-01"})
        assert [p["payment_id"] for p in res.json()["data"]] == [cash]

        res = client.get(URL, params={"operation": "getAllPayments", "payment_method": ""})
        assert [p["payment_id"] for p in res.json()["data"]] == [card, cash]


class TestUpdateDelete:

    def test_update(self, client, seed):
        payment_id = _pay(client, seed).json()["payment_id"]
        res = client.post(URL, json={
            "operation": "updatePayment",
            "payment_id": payment_id,
            "admission_id": seed["admissionid"],
            "amount": 450,
            "payment_method": "Bank Transfer",
            "remarks": "corrected",
        })
        assert res.status_code == 200
        data = res.json()["data"]
        assert Decimal(str(data["amount"])) == Decimal("450")
        assert data["payment_method"] == "Bank Transfer"
        assert data["remarks"] == "corrected"

    def test_update_missing(self, client, seed):
        res = client.post(URL, json={
            "operation": "updatePayment",
            "payment_id": 99,
            "admission_id": seed["admissionid"],
            "amount": 1,
        })
        assert res.status_code == 404

    def test_delete_missing_mutates_nothing(self, client, seed, db):
        _pay(client, seed)
        res = client.post(URL, json={"operation": "deletePayment", "payment_id": 99})
        assert res.status_code == 404
        assert res.json()["error"] == "Payment not found"
        assert db.query(Payment).count() == 1

    def test_delete(self, client, seed, db):
        payment_id = _pay(client, seed).json()["payment_id"]
        res = client.post(URL, json={"operation": "deletePayment", "payment_id": payment_id})
        assert res.status_code == 200
        assert db.query(Payment).count() == 0


class TestDatabaseUnavailable:

    def test_list_by_admission_is_500(self, offline_client):
        res = offline_client.get(URL, params={"operation": "getPaymentsByAdmission",
                                              "admission_id": 1})
        assert res.status_code == 500
        assert res.json()["error"] == "Error fetching payments: server has gone away"

    def test_list_all_is_500(self, offline_client):
        res = offline_client.get(URL, params={"operation": "getAllPayments"})
        assert res.status_code == 500
        assert res.json()["error"] == "Error fetching payments: server has gone away"

    def test_record_lookup_is_500(self, offline_client):
        res = offline_client.post(URL, json={
            "operation": "insertPayment",
            "admission_id": 1,
            "amount": 10,
            "payment_method": "Cash",
        })
        assert res.status_code == 500
        assert res.json()["error"] == "Error fetching admission: server has gone away"
