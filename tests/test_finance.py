# INTERIORFLOW/backend/tests/test_finance.py : encaissements, étapes et dépenses


class TestInteriorIncome:

    def test_create_income_is_pending(self, client, user_headers):
        response = client.post("/interior-income", json={"clientId": "c1", "amount": 2500}, headers=user_headers)
        assert response.status_code == 200
        income = response.json()["income"]
        assert income["status"] == "pending"
        assert income["method"] is None

    def test_update_validation(self, client, user_headers):
        income = client.post("/interior-income", json={"clientId": "c1", "amount": 2500},
                             headers=user_headers).json()["income"]

        response = client.patch(f"/interior-income/{income['id']}", json={"markedBy": "Ravi"}, headers=user_headers)
        assert response.status_code == 400
        response = client.patch(f"/interior-income/{income['id']}", json={"status": "lost"}, headers=user_headers)
        assert response.status_code == 400
        response = client.patch(f"/interior-income/{income['id']}", json={"status": "paid", "method": "cheque"},
                                headers=user_headers)
        assert response.status_code == 400

    def test_mark_as_paid(self, client, user_headers):
        income = client.post("/interior-income", json={"clientId": "c1", "amount": 2500},
                             headers=user_headers).json()["income"]
        response = client.patch(f"/interior-income/{income['id']}", json={
            "status": "paid", "method": "cash", "markedBy": "Ravi", "amount": 2000
        }, headers=user_headers)
        assert response.status_code == 200
        updated = response.json()["income"]
        assert (updated["status"], updated["method"], updated["markedBy"], updated["amount"]) == (
            "paid", "cash", "Ravi", 2000
        )

    def test_only_owner_or_admin_can_update(self, client, user_headers, admin_headers):
        income = client.post("/interior-income", json={"clientId": "c1", "amount": 2500},
                             headers=admin_headers).json()["income"]

        response = client.patch(f"/interior-income/{income['id']}", json={"status": "paid"}, headers=user_headers)
        assert response.status_code == 403

        mine = client.post("/interior-income", json={"clientId": "c1", "amount": 100},
                           headers=user_headers).json()["income"]
        response = client.patch(f"/interior-income/{mine['id']}", json={"status": "paid"}, headers=admin_headers)
        assert response.status_code == 200

    def test_update_unknown_income(self, client, user_headers):
        response = client.patch("/interior-income/unknown", json={"status": "paid"}, headers=user_headers)
        assert response.status_code == 404


class TestStages:

    def test_stages_ordered_by_date(self, client, user_headers):
        client.post("/stages", json={"clientId": "c1", "stageDesc": "Handover", "date": "2024-03-01T10:00:00"},
                    headers=user_headers)
        client.post("/stages", json={"clientId": "c1", "stageDesc": "Site visit", "date": "2024-01-15T10:00:00"},
                    headers=user_headers)
        client.post("/stages", json={"clientId": "c2", "stageDesc": "Other"}, headers=user_headers)

        stages = client.get("/stages", params={"clientId": "c1"}, headers=user_headers).json()["stages"]
        assert [s["stageDesc"] for s in stages] == ["Site visit", "Handover"]

    def test_stage_requires_description(self, client, user_headers):
        response = client.post("/stages", json={"clientId": "c1"}, headers=user_headers)
        assert response.status_code == 400


class TestExpenses:

    def test_added_by_falls_back_to_email_local_part(self, client, user_headers):
        """Utilisateur sans nom : addedBy = partie locale de l'email"""
        response = client.post("/expenses", json={
            "clientId": "c1", "category": "Material", "amount": 450, "date": "2024-02-01T00:00:00"
        }, headers=user_headers)
        assert response.status_code == 200
        assert response.json()["expense"]["addedBy"] == "jane.doe"

    def test_added_by_uses_account_name(self, client, admin_headers):
        response = client.post("/common-expenses", json={
            "category": "wifi", "amount": 999, "date": "2024-02-01T00:00:00"
        }, headers=admin_headers)
        assert response.json()["expense"]["addedBy"] == "Admin"

    def test_list_expenses_filtered_by_client(self, client, user_headers):
        for client_id, date in [("c1", "2024-01-01"), ("c1", "2024-03-01"), ("c2", "2024-02-01")]:
            client.post("/expenses", json={
                "clientId": client_id, "category": "Labour", "amount": 100, "date": f"{date}T00:00:00"
            }, headers=user_headers)

        expenses = client.get("/expenses", params={"clientId": "c1"}, headers=user_headers).json()["expenses"]
        assert [e["date"][:10] for e in expenses] == ["2024-03-01", "2024-01-01"]
        assert len(client.get("/expenses", headers=user_headers).json()["expenses"]) == 3

    def test_expense_missing_fields(self, client, user_headers):
        response = client.post("/expenses", json={"clientId": "c1", "amount": 10}, headers=user_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields"

    def test_common_expense_category_is_validated(self, client, user_headers):
        response = client.post("/common-expenses", json={
            "category": "party", "amount": 10, "date": "2024-01-01T00:00:00"
        }, headers=user_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid category"
