import jwt

from idv.config import get_settings
from idv.models.user import User
from idv.services.auth_service import AuthService
from idv.utils.hashing import hash_password, verify_password


def test_password_hash_roundtrip():
    encoded = hash_password("Secret@1")
    assert encoded.startswith("$2b$")
    assert encoded != hash_password("Secret@1")
    assert verify_password("Secret@1", encoded)
    assert not verify_password("secret@1", encoded)
    assert not verify_password("Secret@1", "garbage")
    assert not verify_password("Secret@1", None)


def test_login_returns_token_and_user(client):
    response = client.post("/api/auth/login", json={"username": "agent", "password": "Agent@123"})

    assert response.status_code == 200
    body = response.json()
    assert set(body) >= {"token", "refreshToken", "expiresAt", "user"}
    assert body["user"]["username"] == "agent"
    assert body["user"]["role"] == "Agent"
    assert body["user"]["lastLoginAt"] is not None

    settings = get_settings()
    claims = jwt.decode(
        body["token"], settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM],
        audience=settings.JWT_AUDIENCE, issuer=settings.JWT_ISSUER,
    )
    assert claims["name"] == "agent"
    assert claims["role"] == "Agent"


def test_wrong_password_is_unauthorized(client):
    response = client.post("/api/auth/login", json={"username": "admin", "password": "nope"})
    assert response.status_code == 401


def test_disabled_account_is_unauthorized(client, seeded_db):
    user = seeded_db.query(User).filter(User.username == "viewer").first()
    user.is_active = False
    seeded_db.commit()

    response = client.post("/api/auth/login", json={"username": "viewer", "password": "Viewer@123"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Account is disabled"


def test_empty_credentials_fail_validation(client):
    response = client.post("/api/auth/login", json={"username": "", "password": ""})
    assert response.status_code == 422


def test_me_and_logout(client, auth_headers):
    me = client.get("/api/auth/me", headers=auth_headers)
    assert me.status_code == 200
    assert me.json()["username"] == "admin"

    logout = client.post("/api/auth/logout", headers=auth_headers)
    assert logout.status_code == 200


def test_protected_routes_need_a_token(client):
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/clients").status_code == 401
    response = client.get("/api/verification/available-test-ids", headers={"Authorization": "Bearer junk"})
    assert response.status_code == 401


def test_token_from_other_issuer_is_rejected(client, seeded_db):
    user = seeded_db.query(User).filter(User.username == "admin").first()
    settings = get_settings()
    forged = jwt.encode(
        {"sub": user.user_id, "iss": "someone-else", "aud": settings.JWT_AUDIENCE},
        settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM,
    )
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {forged}"})
    assert response.status_code == 401


def test_issued_token_decodes_to_user(seeded_db):
    user = seeded_db.query(User).filter(User.username == "admin").first()
    token, expires_at = AuthService.issue_token(user)
    claims = AuthService.decode_token(token)
    assert claims["sub"] == user.user_id
    assert claims["email"] == "admin@ekwantu.com"
    assert expires_at.tzinfo is not None


def test_seeded_passwords_are_bcrypt(seeded_db):
    user = seeded_db.query(User).filter(User.username == "admin").first()
    assert user.password_hash.startswith("$2b$")
    assert verify_password("Admin@123", user.password_hash)
