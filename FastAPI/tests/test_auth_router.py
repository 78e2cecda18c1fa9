import myjob.routers.auth as auth_mod
from myjob.core.errors import ConflictError, ForbiddenError, NotFoundError, UnauthorizedError
from myjob.schemas.auth import (
    CheckCredsResponse,
    CompanySummary,
    TokenResponse,
    UserInfoResponse,
    UserSettingsResponse,
)


class _User:
    def __init__(self, *, user_id="u1", email="u@example.com", role_name="JOB_SEEKER", full_name="U"):
        self.id = user_id
        self.email = email
        self.full_name = full_name
        self.role_name = role_name
        self.is_active = True
        self.is_verify_email = False
        self.avatar_url = None


SEEKER_BODY = {"email": "new@example.com", "full_name": "New", "password": "password123"}
EMPLOYER_BODY = {
    "email": "hr@example.com",
    "full_name": "HR",
    "password": "password123",
    "company": {
        "company_name": "Acme",
        "company_email": "contact@acme.example",
        "company_phone": "0123",
        "tax_code": "TAX",
        "location": {"city_id": 1, "district_id": 2, "address": "1 Main St"},
    },
}


def test_job_seeker_register_success(monkeypatch, anon_client):
    monkeypatch.setattr(auth_mod, "register_job_seeker", lambda db, data: _User(email=data.email))
    resp = anon_client.post("/auth/job-seeker/register", json=SEEKER_BODY)
    assert resp.status_code == 201
    assert resp.json()["user"]["email"] == "new@example.com"
    assert resp.json()["user"]["role_name"] == "JOB_SEEKER"


def test_job_seeker_register_duplicate_email(monkeypatch, anon_client):
    def _conflict(db, data):
        raise ConflictError("User with this email already exists")

    monkeypatch.setattr(auth_mod, "register_job_seeker", _conflict)
    resp = anon_client.post("/auth/job-seeker/register", json=SEEKER_BODY)
    assert resp.status_code == 409
    assert "already" in resp.json()["detail"]


def test_job_seeker_register_short_password_rejected(anon_client):
    resp = anon_client.post("/auth/job-seeker/register", json={**SEEKER_BODY, "password": "short"})
    assert resp.status_code == 422


def test_job_seeker_register_unexpected_error_is_500(monkeypatch, anon_client):
    def _boom(db, data):
        raise RuntimeError("db down")

    monkeypatch.setattr(auth_mod, "register_job_seeker", _boom)
    resp = anon_client.post("/auth/job-seeker/register", json=SEEKER_BODY)
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Registration failed"


def test_employer_register_success(monkeypatch, anon_client):
    seen = {}

    def _register(db, data):
        seen["company"] = data.company.company_name
        return _User(email=data.email, role_name="EMPLOYER")

    monkeypatch.setattr(auth_mod, "register_employer", _register)
    resp = anon_client.post("/auth/employer/register", json=EMPLOYER_BODY)
    assert resp.status_code == 201
    assert resp.json()["user"]["role_name"] == "EMPLOYER"
    assert seen["company"] == "Acme"


def test_employer_register_unknown_district(monkeypatch, anon_client):
    def _nf(db, data):
        raise NotFoundError("District not found")

    monkeypatch.setattr(auth_mod, "register_employer", _nf)
    resp = anon_client.post("/auth/employer/register", json=EMPLOYER_BODY)
    assert resp.status_code == 404


def test_check_creds(monkeypatch, anon_client):
    monkeypatch.setattr(
        auth_mod,
        "check_credentials",
        lambda db, data: CheckCredsResponse(email=data.email, email_verified=False, exists=True),
    )
    resp = anon_client.post("/auth/check-creds", json={"email": "u@example.com"})
    assert resp.status_code == 200
    assert resp.json() == {"email": "u@example.com", "email_verified": False, "exists": True}


def test_token_success(monkeypatch, anon_client):
    monkeypatch.setattr(
        auth_mod, "get_token", lambda db, data: TokenResponse(access_token="a", refresh_token="r")
    )
    resp = anon_client.post("/auth/token", json={"email": "u@example.com", "password": "password123"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["access_token"] == "a"
    assert body["token_type"] == "Bearer"


def test_token_invalid_credentials_and_disabled(monkeypatch, anon_client):
    def _nf(db, data):
        raise NotFoundError("User not found!")

    def _forbidden(db, data):
        raise ForbiddenError("Account is disabled")

    monkeypatch.setattr(auth_mod, "get_token", _nf)
    assert anon_client.post("/auth/token", json={"email": "u@example.com", "password": "x"}).status_code == 404
    monkeypatch.setattr(auth_mod, "get_token", _forbidden)
    assert anon_client.post("/auth/token", json={"email": "u@example.com", "password": "x"}).status_code == 403


def test_token_refresh(monkeypatch, anon_client):
    def _refresh(db, token):
        if token != "good":
            raise UnauthorizedError("Invalid or expired refresh token")
        return TokenResponse(access_token="a2", refresh_token="r2")

    monkeypatch.setattr(auth_mod, "refresh_tokens", _refresh)
    assert anon_client.post("/auth/token/refresh", json={"refresh_token": "good"}).json()["access_token"] == "a2"
    assert anon_client.post("/auth/token/refresh", json={"refresh_token": "bad"}).status_code == 401


def test_revoke_requires_auth(anon_client):
    assert anon_client.post("/auth/revoke-token", json={"token": "t"}).status_code == 401


def test_revoke_token(monkeypatch, client):
    monkeypatch.setattr(auth_mod, "revoke_token", lambda token: True)
    resp = client.post("/auth/revoke-token", json={"token": "t"})
    assert resp.status_code == 200


def test_user_info_uses_current_user_email(monkeypatch, employer_client, employer_user):
    def _info(db, email):
        assert email == employer_user.email
        return UserInfoResponse(
            id=employer_user.id,
            full_name=employer_user.full_name,
            email=email,
            is_active=True,
            is_verify_email=False,
            role_name="EMPLOYER",
            company_id=7,
            company=CompanySummary(id=7, slug="acme", company_name="Acme"),
        )

    monkeypatch.setattr(auth_mod, "get_user_info", _info)
    resp = employer_client.get("/auth/user-info")
    assert resp.status_code == 200
    assert resp.json()["company"]["slug"] == "acme"
    assert resp.json()["job_seeker_profile"] is None


def test_settings(monkeypatch, client):
    monkeypatch.setattr(auth_mod, "get_user_settings", lambda: UserSettingsResponse())
    resp = client.get("/auth/settings")
    assert resp.json() == {"email_notification_active": True, "sms_notifications_active": True}
