"""API endpoint tests."""


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_register_user(client):
    """Test user registration."""
    response = client.post(
        "/auth/register",
        json={
            "username": "newuser",
            "password": "password123",
            "email": "newuser@example.com",
            "location": {"latitude": 52.52, "longitude": 13.405, "city": "Berlin"},
        },
    )
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "success"
    assert body["data"]["token_type"] == "bearer"
    assert body["data"]["access_token"] != body["data"]["refresh_token"]
    assert body["data"]["user"]["username"] == "newuser"
    assert body["data"]["user"]["city"] == "Berlin"


def test_register_duplicate_username(client, auth_headers):
    """Test registration with duplicate username fails."""
    response = client.post(
        "/auth/register", json={"username": "testuser", "password": "password123"}
    )
    assert response.status_code == 409
    assert response.json()["status"] == "error"
    assert response.json()["message"] == "Username already exists"


def test_register_duplicate_email(client, make_user):
    """Test registration with duplicate email fails."""
    make_user("first", email="same@example.com")
    response = client.post(
        "/auth/register",
        json={"username": "second", "password": "password123", "email": "same@example.com"},
    )
    assert response.status_code == 409
    assert response.json()["message"] == "Email already exists"


def test_register_invalid_username(client):
    """Test registration validation errors use the error envelope."""
    response = client.post("/auth/register", json={"username": "no spaces", "password": "pw"})
    assert response.status_code == 400
    body = response.json()
    assert body["status"] == "error"
    assert "username" in body["message"]
    assert "password" in body["message"]
    assert body["error"] is None


def test_login(client, auth_headers):
    """Test user login."""
    response = client.post("/auth/login", json={"username": "testuser", "password": "testpass123"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["user"]["id"] == auth_headers.user_id
    assert data["user"]["last_seen_at"] is not None


def test_login_wrong_password(client, auth_headers):
    """Test login with wrong password."""
    response = client.post("/auth/login", json={"username": "testuser", "password": "wrongpass"})
    assert response.status_code == 401
    assert response.json()["message"] == "Incorrect username or password"


def test_login_unknown_user(client):
    response = client.post("/auth/login", json={"username": "ghost", "password": "whatever"})
    assert response.status_code == 401


def test_login_replaces_previous_tokens(client, auth_headers):
    """Test a new login revokes the previously issued pair."""
    response = client.post("/auth/login", json={"username": "testuser", "password": "testpass123"})
    assert response.status_code == 200

    response = client.get("/auth/me", headers=auth_headers)
    assert response.status_code == 401


def test_get_current_user(client, auth_headers):
    """Test getting current user info."""
    response = client.get("/auth/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["data"]["username"] == "testuser"


def test_get_current_user_without_token(client):
    response = client.get("/auth/me")
    assert response.status_code == 401
    assert response.json()["message"] == "Access denied. No token provided."


def test_get_current_user_with_garbage_token(client):
    response = client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_refresh_rotates_pair(client, auth_headers):
    """Test refresh issues a new pair and invalidates the old one."""
    response = client.post("/auth/refresh", json={"refresh_token": auth_headers.refresh_token})
    assert response.status_code == 200
    pair = response.json()["data"]
    assert pair["refresh_token"] != auth_headers.refresh_token

    # Old access token no longer matches the stored one
    assert client.get("/auth/me", headers=auth_headers).status_code == 401
    new_headers = {"Authorization": f"Bearer {pair['access_token']}"}
    assert client.get("/auth/me", headers=new_headers).status_code == 200


def test_refresh_token_reuse_rejected(client, auth_headers):
    """Test a refresh token can only be rotated once."""
    first = client.post("/auth/refresh", json={"refresh_token": auth_headers.refresh_token})
    assert first.status_code == 200

    second = client.post("/auth/refresh", json={"refresh_token": auth_headers.refresh_token})
    assert second.status_code == 401


def test_refresh_with_access_token_rejected(client, auth_headers):
    token = auth_headers["Authorization"].removeprefix("Bearer ")
    response = client.post("/auth/refresh", json={"refresh_token": token})
    assert response.status_code == 401


def test_logout(client, auth_headers):
    """Test logout revokes the pair and can be repeated."""
    response = client.post("/auth/logout", json={"refresh_token": auth_headers.refresh_token})
    assert response.status_code == 200
    assert response.json()["message"] == "Logout successful"

    assert client.get("/auth/me", headers=auth_headers).status_code == 401
    refresh = client.post("/auth/refresh", json={"refresh_token": auth_headers.refresh_token})
    assert refresh.status_code == 401

    again = client.post("/auth/logout", json={"refresh_token": auth_headers.refresh_token})
    assert again.status_code == 200


def test_logout_all(client, auth_headers):
    response = client.post("/auth/logout-all", headers=auth_headers)
    assert response.status_code == 200
    assert client.get("/auth/me", headers=auth_headers).status_code == 401


def test_change_password(client, auth_headers):
    """Test changing password issues a new pair and updates credentials."""
    response = client.put(
        "/auth/change-password",
        headers=auth_headers,
        json={"current_password": "testpass123", "new_password": "newpass456"},
    )
    assert response.status_code == 200
    assert "access_token" in response.json()["data"]

    old_login = client.post(
        "/auth/login", json={"username": "testuser", "password": "testpass123"}
    )
    assert old_login.status_code == 401
    new_login = client.post("/auth/login", json={"username": "testuser", "password": "newpass456"})
    assert new_login.status_code == 200


def test_change_password_wrong_current(client, auth_headers):
    response = client.put(
        "/auth/change-password",
        headers=auth_headers,
        json={"current_password": "wrongpass", "new_password": "newpass456"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Current password is incorrect"
