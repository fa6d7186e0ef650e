import uuid

import jwt
import pytest

from school_platform.school_platform.school_service.models import User

from .conftest import TEST_SECRET


def unique_email():
    return f"user_{uuid.uuid4().hex[:8]}@example.com"


def test_register_and_login(client):
    register = client.post("/auth/register", json={"name": "Ann", "email": "a@x.com", "password": "secret1"})
    assert register.status_code == 201
    assert register.json() == {"message": "User registered successfully"}

    login = client.post("/auth/login", json={"email": "a@x.com", "password": "secret1"})
    assert login.status_code == 200
    body = login.json()
    assert body["success"] is True
    assert body["message"] == "Login successful"
    assert body["token"]
    assert body["user"] == {"email": "a@x.com", "name": "Ann"}
    assert "password" not in body["user"]


def test_login_token_carries_identity(client):
    email = unique_email()
    client.post("/auth/register", json={"name": "Bob", "email": email, "password": "testing12345"})

    token = client.post("/auth/login", json={"email": email, "password": "testing12345"}).json()["token"]
    claims = jwt.decode(token, TEST_SECRET, algorithms=["HS256"])
    assert claims["email"] == email
    assert claims["name"] == "Bob"
    assert claims["exp"] > claims["iat"]


def test_register_stores_hash_not_plaintext(client, db_session):
    email = unique_email()
    client.post("/auth/register", json={"name": "Carol", "email": email, "password": "plaintext-pw"})

    user = db_session.query(User).filter(User.email == email).first()
    assert user is not None
    assert user.password != "plaintext-pw"
    assert user.password.startswith("$pbkdf2-sha256$")


@pytest.mark.parametrize("payload", [
    {"email": "a@x.com", "password": "secret1"},
    {"name": "Ann", "password": "secret1"},
    {"name": "Ann", "email": "a@x.com"},
    {"name": "", "email": "a@x.com", "password": "secret1"},
    {"name": "Ann", "email": "a@x.com", "password": ""},
    {},
])
def test_register_missing_fields(client, payload):
    response = client.post("/auth/register", json=payload)
    assert response.status_code == 400
    assert response.json() == {"error": "Name, email, and password are required"}


def test_register_duplicate_email_conflicts(client, db_session):
    data = {"name": "Ann", "email": "dup@example.com", "password": "secret1"}
    assert client.post("/auth/register", json=data).status_code == 201

    again = client.post("/auth/register", json={**data, "name": "Other Ann"})
    assert again.status_code == 409
    assert again.json() == {"error": "Email already registered"}
    assert db_session.query(User).filter(User.email == "dup@example.com").count() == 1


def test_register_rejects_non_string_fields(client):
    response = client.post("/auth/register", json={"name": 5, "email": "a@x.com", "password": "secret1"})
    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.parametrize("payload", [
    {"password": "secret1"},
    {"email": "a@x.com"},
    {"email": "", "password": ""},
])
def test_login_missing_fields(client, payload):
    response = client.post("/auth/login", json=payload)
    assert response.status_code == 400
    assert response.json() == {"error": "Email and password are required"}


def test_login_unknown_user(client):
    response = client.post("/auth/login", json={"email": "nobody@example.com", "password": "whatever"})
    assert response.status_code == 404
    assert response.json() == {"message": "User not found"}
    assert "token" not in response.json()


def test_login_invalid_password(client):
    client.post("/auth/register", json={"name": "Ann", "email": "a@x.com", "password": "secret1"})

    bad_login = client.post("/auth/login", json={"email": "a@x.com", "password": "wrong"})
    assert bad_login.status_code == 400
    assert bad_login.json() == {"message": "Incorrect password"}
    assert "token" not in bad_login.json()


def test_login_email_match_is_exact(client):
    client.post("/auth/register", json={"name": "Ann", "email": "a@x.com", "password": "secret1"})

    response = client.post("/auth/login", json={"email": "A@X.COM", "password": "secret1"})
    assert response.status_code == 404


def test_register_without_body(client):
    response = client.post("/auth/register")
    assert response.status_code == 400
    assert response.json() == {"error": "Name, email, and password are required"}


def test_login_without_body(client):
    response = client.post("/auth/login")
    assert response.status_code == 400
    assert response.json() == {"error": "Email and password are required"}
