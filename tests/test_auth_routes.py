from fastapi.testclient import TestClient

from auth.credentials import CredentialStore
from auth.models import Credential, User
from tests.conftest import bearer


def test_login_token_claims_match_user_row(client, tokens, regular_user):
    response = client.post("/auth/login", json={"email": "kim@hanbit.ac.kr", "password": "password123"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    claims = tokens.verify(body["data"]["token"])
    assert claims.id == regular_user.id
    assert claims.email == regular_user.email
    assert claims.role == regular_user.role
    assert claims.name == regular_user.name
    assert claims.institution_id == regular_user.institution_id
    assert body["data"]["user"]["institution"]["name"] == "Hanbit University"


def test_login_is_case_insensitive_on_email(client, regular_user):
    response = client.post("/auth/login", json={"email": "KIM@hanbit.ac.kr", "password": "password123"})
    assert response.status_code == 200


def test_login_with_wrong_password_returns_401(client, regular_user):
    response = client.post("/auth/login", json={"email": "kim@hanbit.ac.kr", "password": "nope"})

    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "invalid_credentials"


def test_login_with_unknown_email_returns_401(client):
    response = client.post("/auth/login", json={"email": "ghost@example.com", "password": "password123"})
    assert response.status_code == 401


def test_login_without_password_returns_400(client):
    response = client.post("/auth/login", json={"email": "kim@hanbit.ac.kr"})

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_login_without_user_profile_returns_404(client, db):
    CredentialStore(db).create_account("orphan@example.com", "password123")
    db.commit()

    response = client.post("/auth/login", json={"email": "orphan@example.com", "password": "password123"})
    assert response.status_code == 404


def test_register_creates_user_and_signs_in(client, tokens, institution, db):
    response = client.post("/auth/register", json={
        "email": "park@hanbit.ac.kr",
        "password": "s3cret",
        "name": "Park",
        "institution_id": institution.id,
    })

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["user"]["role"] == "user"
    assert data["user"]["institution_id"] == institution.id
    claims = tokens.verify(data["token"])
    assert claims.email == "park@hanbit.ac.kr"

    user = db.query(User).filter(User.email == "park@hanbit.ac.kr").one()
    assert user.id == claims.id

    login = client.post("/auth/login", json={"email": "park@hanbit.ac.kr", "password": "s3cret"})
    assert login.status_code == 200


def test_register_accepts_camel_case_institution_id(client, institution):
    response = client.post("/auth/register", json={
        "email": "choi@hanbit.ac.kr",
        "password": "s3cret",
        "name": "Choi",
        "institutionId": institution.id,
    })
    assert response.status_code == 201


def test_register_ignores_requested_role(client, institution):
    response = client.post("/auth/register", json={
        "email": "sneaky@hanbit.ac.kr",
        "password": "s3cret",
        "name": "Sneaky",
        "institution_id": institution.id,
        "role": "admin",
    })
    assert response.status_code == 201
    assert response.json()["data"]["user"]["role"] == "user"


def test_register_duplicate_email_returns_400(client, regular_user, institution):
    response = client.post("/auth/register", json={
        "email": "kim@hanbit.ac.kr",
        "password": "another",
        "name": "Kim Again",
        "institution_id": institution.id,
    })

    assert response.status_code == 400
    assert response.json()["error"] == "email_taken"


def test_register_requires_all_fields(client):
    response = client.post("/auth/register", json={"email": "x@example.com", "password": "pw"})
    assert response.status_code == 400


def test_register_with_unknown_institution_returns_404(client, db):
    response = client.post("/auth/register", json={
        "email": "nobody@example.com",
        "password": "s3cret",
        "name": "Nobody",
        "institution_id": "does-not-exist",
    })

    assert response.status_code == 404
    assert db.query(User).count() == 0


def test_register_with_inactive_institution_returns_404(client, make_institution):
    closed = make_institution(name="Closed College", domain="closed.ac.kr", is_active=False)
    response = client.post("/auth/register", json={
        "email": "late@closed.ac.kr",
        "password": "s3cret",
        "name": "Late",
        "institution_id": closed.id,
    })
    assert response.status_code == 404


def test_me_returns_current_user(client, regular_user, user_headers):
    response = client.get("/auth/me", headers=user_headers)

    assert response.status_code == 200
    assert response.json()["data"]["id"] == regular_user.id


def test_me_requires_token(client):
    assert client.get("/auth/me").status_code == 401


def test_token_from_login_authorizes_requests(client, regular_user):
    token = client.post("/auth/login", json={"email": "kim@hanbit.ac.kr", "password": "password123"}).json()["data"]["token"]
    response = client.get("/subscriptions", headers=bearer(token))
    assert response.status_code == 200


def test_register_unique_violation_maps_to_email_taken(client, regular_user, institution, monkeypatch):
    def create_without_precheck(self, email, password):
        credential = Credential(email=self.normalize_email(email), password_hash=self.pwd_context.hash(password))
        self.db.add(credential)
        self.db.flush()
        return credential.user_id

    # Both requests passed the lookup; only the unique index stops the second one
    monkeypatch.setattr(CredentialStore, "create_account", create_without_precheck)

    response = client.post("/auth/register", json={
        "email": "kim@hanbit.ac.kr",
        "password": "another",
        "name": "Kim Again",
        "institution_id": institution.id,
    })

    assert response.status_code == 400
    assert response.json()["error"] == "email_taken"


def test_unexpected_error_is_returned_in_envelope(app, db):
    db.add(Credential(email="broken@example.com", password_hash="not-a-passlib-hash"))
    db.commit()
    client = TestClient(app, raise_server_exceptions=False)

    response = client.post("/auth/login", json={"email": "broken@example.com", "password": "password123"})

    assert response.status_code == 500
    assert response.headers["content-type"].startswith("application/json")
    body = response.json()
    assert body["success"] is False
    assert body["data"] is None
    assert body["message"] == "Internal server error"
    assert body["error"].endswith("Error")
