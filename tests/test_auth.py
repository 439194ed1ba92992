import asyncio

from tests.utils import ADMIN_EMAIL, ADMIN_PASSWORD, create_admin


def test_login_returns_token(client):
    asyncio.run(create_admin(ADMIN_EMAIL, ADMIN_PASSWORD))

    response = client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})

    assert response.status_code == 200
    assert response.json()["token"]


def test_login_with_wrong_password_is_unauthorized(client):
    asyncio.run(create_admin(ADMIN_EMAIL, ADMIN_PASSWORD))

    response = client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": "wrong-password"})

    assert response.status_code == 401
    assert response.json() == {"message": "Invalid credentials"}


def test_token_endpoint_accepts_password_form(client):
    asyncio.run(create_admin(ADMIN_EMAIL, ADMIN_PASSWORD))

    response = client.post("/auth/token", data={"username": ADMIN_EMAIL, "password": ADMIN_PASSWORD})

    assert response.status_code == 200
    assert response.json()["token_type"] == "bearer"


def test_me_returns_current_admin(client, admin_headers):
    response = client.get("/auth/me", headers=admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["email"] == ADMIN_EMAIL
    assert body["name"] == "Test Admin"
    assert "hashedPassword" not in body


def test_me_without_token_is_unauthorized(client):
    response = client.get("/auth/me")

    assert response.status_code == 401
    assert "message" in response.json()


def test_me_with_garbage_token_is_unauthorized(client):
    response = client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401
    assert response.json() == {"message": "Could not validate credentials"}


def test_create_and_list_admins(client, admin_headers):
    created = client.post("/admin/admins", headers=admin_headers, json={
        "name": "Second Admin",
        "email": "second@cinema.com",
        "password": "secret123",
    })

    assert created.status_code == 201
    assert created.json()["email"] == "second@cinema.com"

    listed = client.get("/admin/admins", headers=admin_headers)
    assert listed.status_code == 200
    emails = [admin["email"] for admin in listed.json()]
    assert set(emails) == {ADMIN_EMAIL, "second@cinema.com"}
    assert all("createdAt" in admin for admin in listed.json())


def test_duplicate_admin_is_conflict(client, admin_headers):
    response = client.post("/admin/admins", headers=admin_headers, json={
        "name": "Copy Admin",
        "email": ADMIN_EMAIL,
        "password": "secret123",
    })

    assert response.status_code == 409
    assert response.json() == {"message": "Admin already exists"}


def test_admin_cannot_delete_themselves(client, admin_headers):
    me = client.get("/auth/me", headers=admin_headers).json()

    response = client.delete(f"/admin/admins/{me['id']}", headers=admin_headers)

    assert response.status_code == 400
    assert response.json() == {"message": "You cannot delete yourself"}


def test_delete_other_admin_then_their_token_stops_working(client, admin_headers):
    created = client.post("/admin/admins", headers=admin_headers, json={
        "name": "Temporary Admin",
        "email": "temp@cinema.com",
        "password": "secret123",
    }).json()
    login = client.post("/auth/login", json={"email": "temp@cinema.com", "password": "secret123"})
    temp_headers = {"Authorization": f"Bearer {login.json()['token']}"}

    deleted = client.delete(f"/admin/admins/{created['id']}", headers=admin_headers)

    assert deleted.status_code == 204
    assert client.get("/auth/me", headers=temp_headers).status_code == 401
    assert client.delete(f"/admin/admins/{created['id']}", headers=admin_headers).status_code == 404
