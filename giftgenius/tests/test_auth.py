from __future__ import annotations

from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import jwt
from fastapi.testclient import TestClient

from giftgenius.app import app
from giftgenius.auth.config import DEFAULT_AUTH_CONFIG
from giftgenius.auth.tokens import decode_token, issue_token
from giftgenius.auth.users import clear_users, create_user, get_user_by_email, mark_verified
from giftgenius.auth.verification import clear_codes, save_code, verify_code

client = TestClient(app)


def _register(email: str = "ana@example.com", password: str = "secret123"):
    with patch("giftgenius.app.send_verification_email", return_value=True) as mock_send:
        resp = client.post("/api/auth/register", json={
            "name": "Ana", "email": email, "password": password,
        })
    code = mock_send.call_args.args[2] if mock_send.called else None
    return resp, code


def _auth_headers(email: str = "ana@example.com") -> dict[str, str]:
    user = get_user_by_email(email) or create_user("Ana", email, "secret123")
    mark_verified(email)
    return {"Authorization": f"Bearer {issue_token(user)}"}


def setup_function():
    clear_users()
    clear_codes()


# ── Register / verify ────────────────────────────────────────────────────


def test_register_creates_unverified_user():
    resp, code = _register()
    assert resp.status_code == 201
    body = resp.json()
    assert body["needs_verification"] is True
    assert "debug_code" not in body
    assert len(code) == 6 and code.isdigit()
    assert get_user_by_email("ana@example.com")["email_verified"] is False


def test_register_rejects_short_password():
    resp, _ = _register(password="123")
    assert resp.status_code == 422


def test_password_length_boundary_follows_config():
    minimum = DEFAULT_AUTH_CONFIG.min_password_length
    short, _ = _register(password="x" * (minimum - 1))
    assert short.status_code == 422
    exact, _ = _register(password="x" * minimum)
    assert exact.status_code == 201


def test_register_rejects_bad_email():
    resp, _ = _register(email="not-an-email")
    assert resp.status_code == 422


def test_register_again_while_unverified_resends_code():
    _register()
    resp, code = _register()
    assert resp.status_code == 200
    assert resp.json()["needs_verification"] is True
    assert code is not None


def test_register_verified_email_is_rejected():
    _auth_headers("ana@example.com")
    resp, _ = _register()
    assert resp.status_code == 400


def test_verify_email_activates_and_logs_in():
    _, code = _register()
    with patch("giftgenius.app.send_welcome_email", return_value=True) as mock_welcome:
        resp = client.post("/api/auth/verify-email", json={"email": "ana@example.com", "code": code})
    assert resp.status_code == 200
    body = resp.json()
    assert body["verified"] is True
    assert body["user"]["email"] == "ana@example.com"
    assert decode_token(body["token"])["email"] == "ana@example.com"
    mock_welcome.assert_called_once()


def test_verify_email_wrong_code():
    _register()
    resp = client.post("/api/auth/verify-email", json={"email": "ana@example.com", "code": "000000"})
    assert resp.status_code == 400


def test_verification_code_is_single_use():
    save_code("bia@example.com", "123456")
    assert verify_code("bia@example.com", "123456") is True
    assert verify_code("bia@example.com", "123456") is False


def test_newer_code_replaces_older_one():
    save_code("bia@example.com", "111111")
    save_code("bia@example.com", "222222")
    assert verify_code("bia@example.com", "111111") is False
    assert verify_code("bia@example.com", "222222") is True


def test_expired_code_is_rejected():
    save_code("bia@example.com", "123456")
    with patch("giftgenius.auth.verification.time.time", return_value=10**12):
        assert verify_code("bia@example.com", "123456") is False


def test_resend_verification():
    _register()
    with patch("giftgenius.app.send_verification_email", return_value=True):
        resp = client.post("/api/auth/resend-verification", json={"email": "ana@example.com"})
    assert resp.status_code == 200


def test_resend_verification_unknown_user():
    resp = client.post("/api/auth/resend-verification", json={"email": "ghost@example.com"})
    assert resp.status_code == 404


# ── Login ────────────────────────────────────────────────────────────────


def test_login_success():
    _auth_headers("ana@example.com")
    resp = client.post("/api/auth/login", json={"email": "ana@example.com", "password": "secret123"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["user"]["email"] == "ana@example.com"
    assert get_user_by_email("ana@example.com")["last_login"] is not None


def test_login_wrong_password():
    _auth_headers("ana@example.com")
    resp = client.post("/api/auth/login", json={"email": "ana@example.com", "password": "wrong"})
    assert resp.status_code == 401


def test_login_unverified():
    _register()
    resp = client.post("/api/auth/login", json={"email": "ana@example.com", "password": "secret123"})
    assert resp.status_code == 401
    assert resp.json()["detail"]["needs_verification"] is True


# ── Tokens and protected routes ──────────────────────────────────────────


def test_profile_requires_token():
    resp = client.get("/api/auth/profile")
    assert resp.status_code == 401


def test_profile_rejects_garbage_token():
    resp = client.get("/api/auth/profile", headers={"Authorization": "Bearer not.a.jwt"})
    assert resp.status_code == 403


def test_profile_rejects_expired_token():
    user = create_user("Ana", "ana@example.com", "secret123")
    past = datetime.now(timezone.utc) - timedelta(hours=1)
    token = jwt.encode(
        {"sub": str(user["id"]), "email": user["email"], "exp": past},
        DEFAULT_AUTH_CONFIG.jwt_secret,
        algorithm=DEFAULT_AUTH_CONFIG.jwt_algorithm,
    )
    resp = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 403


def test_profile_returns_user_and_defaults():
    headers = _auth_headers()
    resp = client.get("/api/auth/profile", headers=headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["user"]["email"] == "ana@example.com"
    assert body["current_plan"] == "essential"
    assert "personal_stats" in body


def test_update_profile_changes_name_and_password():
    headers = _auth_headers()
    resp = client.put("/api/auth/update-profile", headers=headers, json={
        "name": "Ana Maria", "email": "ana@example.com", "password": "newsecret",
    })
    assert resp.status_code == 200
    assert resp.json()["user"]["name"] == "Ana Maria"
    login = client.post("/api/auth/login", json={"email": "ana@example.com", "password": "newsecret"})
    assert login.status_code == 200


def test_update_profile_rejects_taken_email():
    _auth_headers("bia@example.com")
    headers = _auth_headers("ana@example.com")
    resp = client.put("/api/auth/update-profile", headers=headers, json={
        "name": "Ana", "email": "bia@example.com",
    })
    assert resp.status_code == 400


def test_update_profile_rejects_short_password():
    headers = _auth_headers()
    resp = client.put("/api/auth/update-profile", headers=headers, json={
        "name": "Ana",
        "email": "ana@example.com",
        "password": "x" * (DEFAULT_AUTH_CONFIG.min_password_length - 1),
    })
    assert resp.status_code == 422
