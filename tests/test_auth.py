from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime
from http.cookies import SimpleCookie

from fastapi.testclient import TestClient
from jose import jwt

from question_bank.auth.jwt_handler import create_access_token, verify_token
from question_bank.main import app
from question_bank.settings import settings


def test_register_returns_token_and_student_role(client):
    r = client.post("/api/auth/register", json={"email": "new@questionbank.com", "password": "secret1"})
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["token"]
    assert body["role"] == "student"
    assert body["userId"]

    cookie = r.headers["set-cookie"]
    assert cookie.startswith("token=")
    assert "httponly" in cookie.lower()
    assert "; secure" not in cookie.lower()


def test_register_twice_keeps_one_user(client, repo):
    payload = {"email": "twice@questionbank.com", "password": "secret1"}
    assert client.post("/api/auth/register", json=payload).status_code == 200

    r = client.post("/api/auth/register", json=payload)
    assert r.status_code == 400
    assert r.json() == {"success": False, "error": "Email already exists"}
    users = [u for u in repo.collections["users"].values() if u["email"] == payload["email"]]
    assert len(users) == 1


def test_register_rejects_invalid_email(client):
    r = client.post("/api/auth/register", json={"email": "not-an-email", "password": "secret1"})
    assert r.status_code == 400
    assert r.json()["success"] is False
    assert "email" in r.json()["error"]


def test_login_requires_email_and_password(client):
    r = client.post("/api/auth/login", json={"email": "student@questionbank.com"})
    assert r.status_code == 400
    assert r.json()["error"] == "Please provide an email and password"


def test_login_with_bad_credentials(client, seeded):
    r = client.post("/api/auth/login", json={"email": "student@questionbank.com", "password": "wrong"})
    assert r.status_code == 401
    assert r.json() == {"success": False, "error": "Invalid credentials"}

    r = client.post("/api/auth/login", json={"email": "nobody@questionbank.com", "password": "student123"})
    assert r.status_code == 401


def test_login_and_use_token(client, seeded):
    r = client.post("/api/auth/login", json={"email": "admin@questionbank.com", "password": "admin123"})
    assert r.status_code == 200
    body = r.json()
    assert body["role"] == "admin"
    assert body["userId"] == seeded["admin"].id

    client.cookies.clear()
    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['token']}"})
    assert me.status_code == 200
    assert me.json()["data"]["email"] == "admin@questionbank.com"
    assert "password" not in me.json()["data"]


def test_session_cookie_authenticates(client, seeded):
    client.post("/api/auth/login", json={"email": "student@questionbank.com", "password": "student123"})
    r = client.get("/api/questions")
    assert r.status_code == 200


def test_protected_route_without_token():
    with TestClient(app) as fresh:
        r = fresh.get("/api/questions")
    assert r.status_code == 401
    assert r.json() == {"success": False, "error": "Not authorized to access this route"}


def test_invalid_token_rejected(client):
    r = client.get("/api/auth/me", headers={"Authorization": "Bearer not.a.token"})
    assert r.status_code == 401


def test_forgot_password_mails_a_working_temporary_password(client, seeded, mailer, repo):
    r = client.post("/api/auth/forgotpassword", json={"email": "student@questionbank.com"})
    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "Temporary password sent to your email"}

    assert len(mailer.sent) == 1
    mail = mailer.sent[0]
    assert mail["to"] == "student@questionbank.com"
    assert mail["subject"] == "Your Temporary Password"
    temp_password = mail["message"].split("Your new password is: ")[1].split("\n")[0]
    assert len(temp_password) == 8

    old = client.post("/api/auth/login", json={"email": "student@questionbank.com", "password": "student123"})
    assert old.status_code == 401
    new = client.post("/api/auth/login", json={"email": "student@questionbank.com", "password": temp_password})
    assert new.status_code == 200


def test_forgot_password_unknown_email(client, mailer):
    r = client.post("/api/auth/forgotpassword", json={"email": "ghost@questionbank.com"})
    assert r.status_code == 404
    assert r.json()["error"] == "No user with that email"
    assert mailer.sent == []


def _token_cookie(response):
    cookie = SimpleCookie()
    cookie.load(response.headers["set-cookie"])
    return cookie["token"]


def test_cookie_is_secure_in_production(client, monkeypatch):
    monkeypatch.setattr(settings, "env", "production")
    r = client.post("/api/auth/register", json={"email": "prod@questionbank.com", "password": "secret1"})
    assert r.status_code == 200
    assert "; secure" in r.headers["set-cookie"].lower()
    assert _token_cookie(r)["httponly"]


def test_cookie_expires_after_configured_days(client, monkeypatch):
    monkeypatch.setattr(settings, "jwt_cookie_expire_days", 7)
    before = datetime.now(timezone.utc)
    r = client.post("/api/auth/register", json={"email": "expiry@questionbank.com", "password": "secret1"})

    expires = parsedate_to_datetime(_token_cookie(r)["expires"])
    expected = before + timedelta(days=7)
    assert abs((expires - expected).total_seconds()) < 60


def test_mixed_case_domain_can_log_in_and_reset(client, mailer):
    payload = {"email": "Mixed@QuestionBank.COM", "password": "secret1"}
    assert client.post("/api/auth/register", json=payload).status_code == 200

    r = client.post("/api/auth/login", json=payload)
    assert r.status_code == 200
    assert r.json()["role"] == "student"

    r = client.post("/api/auth/forgotpassword", json={"email": payload["email"]})
    assert r.status_code == 200
    assert mailer.sent[0]["to"].lower() == "mixed@questionbank.com"


def test_login_with_malformed_email_is_invalid_credentials(client):
    r = client.post("/api/auth/login", json={"email": "not-an-email", "password": "secret1"})
    assert r.status_code == 401


def test_token_lifetime_follows_settings(monkeypatch):
    monkeypatch.setattr(settings, "jwt_expire_days", 2)
    token = create_access_token(user_id="u1", email="u1@questionbank.com", role="student")
    claims = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    assert claims["exp"] - claims["iat"] == 2 * 24 * 60 * 60
    assert verify_token(token).user_id == "u1"
