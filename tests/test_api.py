"""API endpoint tests: health, authentication and user profile."""

from unittest.mock import patch

from src.config import get_settings
from src.models.user import User


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_register_user(client):
    """Test user registration."""
    response = client.post(
        "/api/v1/auth/register",
        json={
            "email": "newuser@example.com",
            "username": "newuser",
            "password": "password123",
            "first_name": "New",
        },
    )
    assert response.status_code == 201
    data = response.json()
    assert "access_token" in data
    assert data["user"]["username"] == "newuser"
    assert data["user"]["first_name"] == "New"
    assert data["user"]["role"] == "USER"


def test_register_duplicate_email(client, auth_headers):
    """Test registration with duplicate email fails."""
    response = client.post(
        "/api/v1/auth/register",
        json={"email": auth_headers.email, "username": "someoneelse", "password": "password123"},
    )
    assert response.status_code == 409
    assert "Email" in response.json()["detail"]


def test_register_duplicate_username(client, auth_headers):
    """Test registration with a taken username fails."""
    response = client.post(
        "/api/v1/auth/register",
        json={"email": "fresh@example.com", "username": "testuser", "password": "password123"},
    )
    assert response.status_code == 409
    assert "Username" in response.json()["detail"]


def test_register_when_signup_disabled(client):
    """Test self-registration can be switched off."""
    closed = get_settings().model_copy(update={"signup_enabled": False})
    with patch("src.api.auth.get_settings", return_value=closed):
        response = client.post(
            "/api/v1/auth/register",
            json={"email": "late@example.com", "username": "late", "password": "password123"},
        )
    assert response.status_code == 403


def test_register_short_password(client):
    """Test password length validation."""
    response = client.post(
        "/api/v1/auth/register",
        json={"email": "short@example.com", "username": "shorty", "password": "short"},
    )
    assert response.status_code == 422


def test_login(client, auth_headers):
    """Test user login."""
    response = client.post(
        "/api/v1/auth/login", json={"email": auth_headers.email, "password": "testpass123"}
    )
    assert response.status_code == 200
    assert "access_token" in response.json()


def test_login_wrong_password(client, auth_headers):
    """Test login with wrong password."""
    response = client.post(
        "/api/v1/auth/login", json={"email": auth_headers.email, "password": "wrongpass"}
    )
    assert response.status_code == 401


def test_login_disabled_account(client, auth_headers, db):
    """Test disabled accounts cannot log in or use their token."""
    user = db.query(User).filter(User.id == auth_headers.user_id).first()
    user.is_enabled = False
    db.commit()

    response = client.post(
        "/api/v1/auth/login", json={"email": auth_headers.email, "password": "testpass123"}
    )
    assert response.status_code == 403

    response = client.get("/api/v1/auth/me", headers=auth_headers)
    assert response.status_code == 403


def test_get_current_user(client, auth_headers):
    """Test getting current user info."""
    response = client.get("/api/v1/auth/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["email"] == auth_headers.email


def test_unauthorized_access(client):
    """Test accessing protected endpoint without auth."""
    response = client.get("/api/v1/recipes")
    assert response.status_code in (401, 403)


def test_invalid_token(client):
    """Test a garbage bearer token is rejected."""
    response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_logout(client, auth_headers):
    """Test logout endpoint."""
    response = client.post("/api/v1/auth/logout", headers=auth_headers)
    assert response.status_code == 200


# --- Profile ---


def test_get_profile(client, auth_headers):
    """Test reading the profile."""
    response = client.get("/api/v1/users/profile", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["username"] == "testuser"


def test_update_profile(client, auth_headers):
    """Test updating names and username."""
    response = client.put(
        "/api/v1/users/profile",
        headers=auth_headers,
        json={"first_name": "Ada", "last_name": "Lovelace", "username": "ada"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["first_name"] == "Ada"
    assert data["last_name"] == "Lovelace"
    assert data["username"] == "ada"
    assert data["email"] == auth_headers.email


def test_update_profile_username_conflict(client, auth_headers, second_user_headers):
    """Test a profile cannot take another user's username."""
    response = client.put(
        "/api/v1/users/profile", headers=auth_headers, json={"username": "otheruser"}
    )
    assert response.status_code == 409


def test_change_password(client, auth_headers):
    """Test changing the password and logging in with the new one."""
    response = client.put(
        "/api/v1/users/change-password",
        headers=auth_headers,
        json={"current_password": "testpass123", "new_password": "newpass456"},
    )
    assert response.status_code == 200

    response = client.post(
        "/api/v1/auth/login", json={"email": auth_headers.email, "password": "newpass456"}
    )
    assert response.status_code == 200


def test_change_password_wrong_current(client, auth_headers):
    """Test the current password must match."""
    response = client.put(
        "/api/v1/users/change-password",
        headers=auth_headers,
        json={"current_password": "wrongpass1", "new_password": "newpass456"},
    )
    assert response.status_code == 400
