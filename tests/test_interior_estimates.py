# INTERIORFLOW/backend/tests/test_interior_estimates.py : devis intérieurs et approbation

import pytest
from interiorflow.models import models


@pytest.fixture
def client_id(client):
    response = client.post("/clients", json={
        "name": "Asha Menon",
        "email": "asha@example.com",
        "phone": "9876543210",
        "location": "Kochi"
    })
    return response.json()["client"]["id"]


def _create_estimate(client, headers, client_id, name="Kitchen", total=100000, **extra):
    payload = {
        "clientId": client_id,
        "estimateName": name,
        "items": [{"type": "pieces", "pieces": 1, "amountPerSqFt": 1000, "totalAmount": total}]
    }
    payload.update(extra)
    response = client.post("/interior-estimates", json=payload, headers=headers)
    assert response.status_code == 200
    return response.json()["estimateId"]


class TestInteriorEstimates:

    def test_requires_authentication(self, client, client_id):
        response = client.post("/interior-estimates", json={"clientId": client_id})
        assert response.status_code == 401

    def test_missing_fields(self, client, user_headers, client_id):
        response = client.post("/interior-estimates", json={"clientId": client_id, "estimateName": "X", "items": []},
                               headers=user_headers)
        assert response.status_code == 400
        assert response.json()["error"] == (
            "Missing required fields: clientId, estimateName, and items are required"
        )

    def test_total_is_grand_total_of_items(self, client, user_headers, client_id):
        """Articles sans total : calculés depuis les mesures, puis remise"""
        response = client.post("/interior-estimates", json={
            "clientId": client_id,
            "estimateName": "Living",
            "items": [
                {"type": "area", "length": 304.8, "breadth": 304.8, "amountPerSqFt": 100},
                {"type": "pieces", "pieces": 2, "amountPerSqFt": 500},
                {"type": "running", "runningLength": 60.96, "amountPerSqFt": 50}
            ],
            "discount": 10,
            "discountType": "percentage"
        }, headers=user_headers)
        estimate = response.json()["estimate"]
        assert [item["totalAmount"] for item in estimate["items"]] == [10000, 1000, pytest.approx(100)]
        assert estimate["totalAmount"] == pytest.approx(9990)
        assert estimate["status"] == "pending"

    def test_list_by_client_newest_first(self, client, user_headers, client_id):
        first = _create_estimate(client, user_headers, client_id, "First")
        second = _create_estimate(client, user_headers, client_id, "Second")

        response = client.get(f"/interior-estimates/client/{client_id}", headers=user_headers)
        ids = [e["id"] for e in response.json()["estimates"]]
        assert ids == [second, first]

    def test_update_and_delete(self, client, user_headers, client_id):
        estimate_id = _create_estimate(client, user_headers, client_id)
        response = client.put(f"/interior-estimates/{estimate_id}", json={
            "estimateName": "Kitchen v2",
            "items": [{"type": "pieces", "totalAmount": 5000}],
            "discount": 500,
            "discountType": "fixed"
        }, headers=user_headers)
        assert response.status_code == 200
        assert response.json()["estimate"]["totalAmount"] == 4500

        assert client.delete(f"/interior-estimates/{estimate_id}", headers=user_headers).status_code == 200
        assert client.get(f"/interior-estimates/{estimate_id}", headers=user_headers).status_code == 404


class TestApproval:

    def test_approval_side_effects(self, client, user_headers, client_id, db_session):
        """
        Approbation : les N autres devis non terminés du client sont supprimés,
        une étape "approved" et un acompte de 50% en attente sont créés
        """
        target = _create_estimate(client, user_headers, client_id, total=100000)
        siblings = [_create_estimate(client, user_headers, client_id, f"Alt {i}") for i in range(3)]

        response = client.post(f"/interior-estimates/{target}/approve", headers=user_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["approvedEstimateId"] == target
        assert data["deletedEstimatesCount"] == len(siblings)
        assert data["incomeAmount"] == 50000

        remaining = db_session.query(models.InteriorEstimate).filter_by(client_id=client_id).all()
        assert [(e.id, e.status) for e in remaining] == [(target, "approved")]

        stages = db_session.query(models.Stage).filter_by(client_id=client_id).all()
        assert len(stages) == 1
        assert stages[0].stage_desc == "approved"

        incomes = db_session.query(models.InteriorIncome).filter_by(client_id=client_id).all()
        assert len(incomes) == 1
        assert incomes[0].amount == 50000
        assert incomes[0].status == "pending"
        assert incomes[0].method is None

    def test_completed_estimates_are_kept(self, client, user_headers, client_id, db_session):
        old = _create_estimate(client, user_headers, client_id, "Old project")
        client.post(f"/interior-estimates/{old}/approve", headers=user_headers)
        client.patch(f"/interior-estimates/{old}/status", json={"status": "completed"}, headers=user_headers)

        target = _create_estimate(client, user_headers, client_id, "New project")
        response = client.post(f"/interior-estimates/{target}/approve", headers=user_headers)
        assert response.json()["deletedEstimatesCount"] == 0

        statuses = {e.id: e.status for e in db_session.query(models.InteriorEstimate).all()}
        assert statuses == {old: "completed", target: "approved"}

    def test_other_clients_are_untouched(self, client, user_headers, client_id, db_session):
        other_client = client.post("/clients", json={
            "name": "Ravi", "email": "ravi@example.com", "phone": "1", "location": "Calicut"
        }).json()["client"]["id"]
        other = _create_estimate(client, user_headers, other_client)
        target = _create_estimate(client, user_headers, client_id)

        client.post(f"/interior-estimates/{target}/approve", headers=user_headers)
        assert db_session.query(models.InteriorEstimate).filter_by(id=other).count() == 1

    def test_reapproval_is_rejected(self, client, user_headers, client_id, db_session):
        target = _create_estimate(client, user_headers, client_id)
        assert client.post(f"/interior-estimates/{target}/approve", headers=user_headers).status_code == 200

        response = client.post(f"/interior-estimates/{target}/approve", headers=user_headers)
        assert response.status_code == 409
        assert response.json()["error"] == "Estimate is already approved"
        assert db_session.query(models.Stage).count() == 1
        assert db_session.query(models.InteriorIncome).count() == 1

    def test_approve_unknown_estimate(self, client, user_headers):
        response = client.post("/interior-estimates/unknown/approve", headers=user_headers)
        assert response.status_code == 404
        assert response.json()["error"] == "Estimate not found"

    def test_complete_requires_approved(self, client, user_headers, client_id):
        estimate_id = _create_estimate(client, user_headers, client_id)
        response = client.patch(f"/interior-estimates/{estimate_id}/status", json={"status": "completed"},
                                headers=user_headers)
        assert response.status_code == 409

    def test_payment_progress(self, client, user_headers, client_id):
        target = _create_estimate(client, user_headers, client_id, total=100000)
        client.post(f"/interior-estimates/{target}/approve", headers=user_headers)
        income = client.get("/interior-income", params={"clientId": client_id},
                            headers=user_headers).json()["incomes"][0]
        client.patch(f"/interior-income/{income['id']}", json={"status": "paid", "method": "bank"},
                     headers=user_headers)

        payments = client.get(f"/interior-estimates/{target}/payments", headers=user_headers).json()["payments"]
        assert payments["receivedAmount"] == 50000
        assert payments["balanceAmount"] == 50000
        assert payments["receivedPercentage"] == 50
        assert payments["receivedByMethod"] == {"cash": 0, "bank": 50000}
        assert payments["pendingCount"] == 0
