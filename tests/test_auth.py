# INTERIORFLOW/backend/tests/test_auth.py : tests pour l'authentification

from datetime import timedelta
from interiorflow.auth import create_access_token, decode_token
from interiorflow.schemas.schemas import Identity

ADMIN_EMAIL = "admin@x.com"
ADMIN_PASSWORD = "admin123"


class TestAuth:

    def test_login_seeded_admin(self, client, admin_user):
        """Connexion de l'administrateur créé au démarrage"""
        response = client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["user"]["role"] == "admin"
        assert data["token"]
        assert "passwordHash" not in data["user"]
        assert "token" in response.cookies

    def test_login_wrong_password(self, client, admin_user):
        """Mauvais mot de passe : 401 Invalid credentials"""
        response = client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": "wrong"})
        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Invalid credentials"}

    def test_login_unknown_user(self, client):
        response = client.post("/auth/login", json={"email": "nobody@x.com", "password": "admin123"})
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid credentials"

    def test_login_email_is_case_insensitive(self, client, admin_user):
        response = client.post("/auth/login", json={"email": "ADMIN@X.COM", "password": ADMIN_PASSWORD})
        assert response.status_code == 200

    def test_login_missing_fields(self, client):
        response = client.post("/auth/login", json={"email": ADMIN_EMAIL})
        assert response.status_code == 400
        assert response.json()["error"] == "Email and password are required"

    def test_register_then_duplicate(self, client):
        """Inscription puis doublon (409)"""
        payload = {"email": "New.User@x.com", "password": "secret1", "name": "New User"}
        response = client.post("/auth/register", json=payload)
        assert response.status_code == 200
        user = response.json()["user"]
        assert user["email"] == "new.user@x.com"
        assert user["role"] == "user"

        response = client.post("/auth/register", json=payload)
        assert response.status_code == 409
        assert response.json()["success"] is False

    def test_protected_route_without_token(self, client):
        response = client.get("/auth/me")
        assert response.status_code == 401
        assert response.json()["error"] == "Unauthorized - Please login"

    def test_protected_route_with_invalid_token(self, client):
        response = client.get("/auth/me", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401

    def test_expired_token_is_rejected(self, client, admin_user):
        identity = Identity(user_id=admin_user.id, email=admin_user.email, role=admin_user.role)
        token = create_access_token(identity, expires_delta=timedelta(seconds=-1))
        assert decode_token(token) is None
        response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_me_with_header(self, client, admin_headers):
        response = client.get("/auth/me", headers=admin_headers)
        assert response.status_code == 200
        user = response.json()["user"]
        assert user["email"] == ADMIN_EMAIL
        assert user["name"] == "admin"
        assert user["role"] == "admin"

    def test_verify_with_cookie(self, client, admin_user):
        """Le cookie posé par le login suffit à s'authentifier"""
        client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
        response = client.get("/auth/verify")
        assert response.status_code == 200
        assert response.json()["user"]["id"] == admin_user.id

    def test_logout_clears_cookie(self, client, admin_user):
        client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
        response = client.post("/auth/logout")
        assert response.status_code == 200
        assert client.get("/auth/verify").status_code == 401


class TestUsers:

    def test_list_users_requires_admin(self, client, user_headers):
        response = client.get("/users", headers=user_headers)
        assert response.status_code == 403
        assert response.json()["error"] == "Access denied. Admin role required."

    def test_list_users_as_admin(self, client, admin_headers, regular_user):
        response = client.get("/users", headers=admin_headers)
        assert response.status_code == 200
        emails = {u["email"] for u in response.json()["users"]}
        assert emails == {ADMIN_EMAIL, regular_user.email}

    def test_get_user_hides_password(self, client, user_headers, admin_user):
        response = client.get(f"/users/{admin_user.id}", headers=user_headers)
        assert response.status_code == 200
        assert "passwordHash" not in response.json()["user"]
        assert "password_hash" not in response.json()["user"]

    def test_get_unknown_user(self, client, user_headers):
        response = client.get("/users/unknown", headers=user_headers)
        assert response.status_code == 404
