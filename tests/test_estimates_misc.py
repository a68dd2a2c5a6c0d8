# INTERIORFLOW/backend/tests/test_estimates_misc.py : devis généraux, modèles, demandes de devis, tableau de bord

from interiorflow import config


class TestGeneralEstimates:

    def _payload(self, **overrides):
        payload = {
            "clientId": "c1",
            "estimateName": "Permit drawings",
            "estimateType": "permit",
            "items": [
                {"particulars": "Plan", "amountPerSqFt": 20, "sqFeet": 1000},
                {"particulars": "Elevation", "amountPerSqFt": 5, "sqFeet": 1000, "totalAmount": 1}
            ],
            "discount": 1000,
            "discountType": "fixed"
        }
        payload.update(overrides)
        return payload

    def test_totals_are_recomputed(self, client, user_headers):
        response = client.post("/general-estimates", json=self._payload(), headers=user_headers)
        assert response.status_code == 200
        estimate = response.json()["estimate"]
        assert [i["totalAmount"] for i in estimate["items"]] == [20000, 5000]
        assert estimate["subtotal"] == 25000
        assert estimate["totalAmount"] == 24000
        assert estimate["status"] == "pending"

    def test_invalid_estimate_type(self, client, user_headers):
        response = client.post("/general-estimates", json=self._payload(estimateType="interior"),
                               headers=user_headers)
        assert response.status_code == 400

    def test_listing_modes(self, client, user_headers, admin_headers):
        mine = client.post("/general-estimates", json=self._payload(), headers=user_headers).json()["estimate"]
        client.post("/general-estimates", json=self._payload(clientId="c2"), headers=admin_headers)

        own = client.get("/general-estimates", headers=user_headers).json()["estimates"]
        assert [e["id"] for e in own] == [mine["id"]]

        by_client = client.get("/general-estimates", params={"clientId": "c2"}, headers=user_headers).json()
        assert len(by_client["estimates"]) == 1

        single = client.get("/general-estimates", params={"estimateId": mine["id"]}, headers=user_headers).json()
        assert single["estimate"]["estimateName"] == "Permit drawings"

        assert client.get("/general-estimates", params={"estimateId": "nope"},
                          headers=user_headers).status_code == 404

    def test_update_recomputes(self, client, user_headers):
        estimate = client.post("/general-estimates", json=self._payload(), headers=user_headers).json()["estimate"]
        response = client.put(f"/general-estimates/{estimate['id']}", json={
            "items": [{"particulars": "3D views", "amountPerSqFt": 10, "sqFeet": 100}],
            "discount": 10,
            "discountType": "percentage"
        }, headers=user_headers)
        updated = response.json()["estimate"]
        assert updated["subtotal"] == 1000
        assert updated["totalAmount"] == 900


class TestInteriorPresets:

    def test_preset_total_from_items(self, client):
        response = client.post("/interior-presets", json={
            "name": "2BHK basic",
            "items": [{"type": "pieces", "pieces": 2, "amountPerSqFt": 1500}, {"totalAmount": 500}]
        })
        assert response.status_code == 200
        preset = response.json()["preset"]
        assert preset["totalAmount"] == 3500

        response = client.put(f"/interior-presets/{preset['id']}", json={"name": "2BHK", "items": []})
        assert response.json()["preset"]["totalAmount"] == 0
        assert client.delete(f"/interior-presets/{preset['id']}").status_code == 200
        assert client.get(f"/interior-presets/{preset['id']}").status_code == 404

    def test_invalid_preset(self, client):
        response = client.post("/interior-presets", json={"name": "No items"})
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid data provided"


class TestQuotes:

    def test_partial_quote_gets_defaults(self, client):
        """Seul le nom est fourni : 201 et valeurs par défaut"""
        response = client.post("/quote", json={"name": "Jane"})
        assert response.status_code == 201
        quote = response.json()["quote"]
        assert quote["name"] == "Jane"
        assert quote["phone"] == ""
        assert quote["sq_feet"] == 0
        assert quote["request_call"] is False
        assert quote["additional_info"] == ""

    def test_list_and_delete(self, client):
        quote = client.post("/quote", json={"name": "Jane", "sq_feet": 1200}).json()["quote"]
        assert len(client.get("/quote").json()["quotes"]) == 1

        assert client.delete(f"/quote/{quote['id']}").status_code == 200
        response = client.delete(f"/quote/{quote['id']}")
        assert response.status_code == 404
        assert response.json()["error"] == "Quote enquiry not found"

    def test_created_at_is_camel_case(self, client):
        """Seule la date de création sort en camelCase, comme le formulaire l'attend"""
        quote = client.post("/quote", json={"name": "Jane"}).json()["quote"]
        assert "createdAt" in quote
        assert "created_at" not in quote
        assert "sq_feet" in quote

    def test_preflight_from_public_site(self, client):
        """Le site vitrine (autre origine) peut envoyer le formulaire"""
        response = client.options("/quote", headers={
            "Origin": "https://www.takshaga.example",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "content-type"
        })
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert "access-control-allow-credentials" not in response.headers

    def test_post_from_public_site(self, client):
        response = client.post("/quote", json={"name": "Jane"},
                               headers={"Origin": "https://www.takshaga.example"})
        assert response.status_code == 201
        assert response.headers["access-control-allow-origin"] == "*"

    def test_dashboard_routes_stay_restricted(self, client):
        response = client.options("/clients", headers={
            "Origin": "https://www.takshaga.example",
            "Access-Control-Request-Method": "POST"
        })
        assert response.status_code == 400
        response = client.options("/quote", headers={
            "Origin": "https://www.takshaga.example",
            "Access-Control-Request-Method": "DELETE"
        })
        assert response.status_code == 400

    def test_dashboard_can_still_list_quotes(self, client):
        """Pré-vol du tableau de bord pour GET /quote : origine explicite et cookie autorisés"""
        dashboard = config.ALLOWED_ORIGINS[0]
        response = client.options("/quote", headers={
            "Origin": dashboard,
            "Access-Control-Request-Method": "GET",
            "Access-Control-Request-Headers": "authorization"
        })
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == dashboard
        assert response.headers["access-control-allow-credentials"] == "true"


class TestDashboard:

    def test_dashboard_requires_admin(self, client, user_headers):
        assert client.get("/dashboard", headers=user_headers).status_code == 403
        client.cookies.clear()
        assert client.get("/dashboard").status_code == 401

    def test_dashboard_stats(self, client, admin_headers, regular_user):
        client.post("/quote", json={"name": "Jane"})
        client.post("/clients", json={"name": "A", "email": "a@x.com", "phone": "1", "location": "K"})

        response = client.get("/dashboard", headers=admin_headers)
        assert response.status_code == 200
        stats = response.json()["dashboard"]["stats"]
        assert stats["totalUsers"] == 2
        assert stats["activeUsers"] == 2
        assert stats["totalClients"] == 1
        assert stats["enquiries"] == 1
        assert stats["activeProjects"] == 0


class TestService:

    def test_root(self, client):
        response = client.get("/")
        assert response.json()["success"] is True

    def test_validation_errors_are_normalised(self, client):
        response = client.post("/clients", json={"name": 12})
        assert response.status_code == 400
        assert response.json()["success"] is False
