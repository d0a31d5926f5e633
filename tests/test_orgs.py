"""
Organization registration, session and profile tests.
"""

import uuid

import pytest
from sqlalchemy import func, select

from conftest import auth, register_org, unique_email
from petadopt.core.security import create_access_token, verify_access_token
from petadopt.models import Organization


# ---------------------------------------------------------------------------
# Register
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_register_returns_org_and_token(client):
    email = unique_email("reg")
    data = await register_org(client, email=email, name="Happy Paws", city="Campinas")

    org = data["org"]
    assert org["name"] == "Happy Paws"
    assert org["email"] == email
    assert org["whatsapp"] == "+5511999990000"
    assert org["address"] == {"city": "Campinas", "street": "Rua das Flores 10"}
    assert "password" not in org
    assert "password_hash" not in org

    identity = verify_access_token(data["token"])
    assert str(identity.org_id) == org["id"]
    assert identity.email == email


@pytest.mark.asyncio
async def test_register_stores_password_hashed(client, db):
    email = unique_email("hash")
    await register_org(client, email=email, password="secret123")

    async with db.session_factory() as session:
        org = (await session.execute(
            select(Organization).where(Organization.email == email)
        )).scalar_one()

    assert org.password_hash != "secret123"
    assert org.password_hash.startswith("$2")


@pytest.mark.asyncio
async def test_register_duplicate_email_conflicts(client, db):
    email = unique_email("dup")
    await register_org(client, email=email)

    resp = await client.post("/orgs", json={
        "name": "Second Org",
        "email": email,
        "password": "secret123",
        "whatsapp": "+5511999990001",
        "address": {"city": "Recife"},
    })

    assert resp.status_code == 409
    assert resp.json()["detail"] == {
        "code": "EMAIL_IN_USE",
        "message": "Email already registered",
    }

    async with db.session_factory() as session:
        count = (await session.execute(
            select(func.count()).select_from(Organization).where(Organization.email == email)
        )).scalar_one()
    assert count == 1


@pytest.mark.asyncio
async def test_register_email_is_case_insensitive(client):
    email = unique_email("case")
    await register_org(client, email=email)

    resp = await client.post("/orgs", json={
        "name": "Shouting Org",
        "email": email.upper(),
        "password": "secret123",
        "whatsapp": "+5511999990001",
    })
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_register_accepts_plain_string_address(client):
    resp = await client.post("/orgs", json={
        "name": "String Address Org",
        "email": unique_email("straddr"),
        "password": "secret123",
        "whatsapp": "+5511999990000",
        "address": "Rua Augusta 100, Sao Paulo",
    })
    assert resp.status_code == 201, resp.text
    assert resp.json()["org"]["address"] == "Rua Augusta 100, Sao Paulo"


@pytest.mark.asyncio
async def test_register_without_address_stores_null(client, db):
    email = unique_email("noaddr")
    resp = await client.post("/orgs", json={
        "name": "No Address Org",
        "email": email,
        "password": "secret123",
        "whatsapp": "+5511999990000",
    })

    assert resp.status_code == 201, resp.text
    assert resp.json()["org"]["address"] is None
    async with db.session_factory() as session:
        org = (await session.execute(
            select(Organization).where(Organization.email == email)
        )).scalar_one()
    assert org.address is None


@pytest.mark.asyncio
async def test_register_keeps_accents_in_stored_address(client, db):
    email = unique_email("accent")
    await register_org(client, email=email, city="São Paulo")

    async with db.session_factory() as session:
        org = (await session.execute(
            select(Organization).where(Organization.email == email)
        )).scalar_one()
    assert "São Paulo" in org.address


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "override",
    [
        {"email": "not-an-email"},
        {"password": "12345"},
        {"name": ""},
        {"whatsapp": "123"},
    ],
)
async def test_register_validation_errors(client, override):
    body = {
        "name": "Valid Org",
        "email": unique_email("val"),
        "password": "secret123",
        "whatsapp": "+5511999990000",
        **override,
    }
    resp = await client.post("/orgs", json=body)
    assert resp.status_code == 400
    assert resp.json()["detail"]["code"] == "VALIDATION_ERROR"


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_login_returns_token(client):
    email = unique_email("login")
    registered = await register_org(client, email=email, password="secret123")

    resp = await client.post("/sessions", json={"email": email, "password": "secret123"})

    assert resp.status_code == 200
    data = resp.json()
    assert data["org"] == {
        "id": registered["org"]["id"],
        "name": registered["org"]["name"],
        "email": email,
    }
    assert str(verify_access_token(data["token"]).org_id) == registered["org"]["id"]


@pytest.mark.asyncio
async def test_login_ignores_email_case(client):
    email = unique_email("mixed")
    await register_org(client, email=email, password="secret123")

    resp = await client.post("/sessions", json={"email": email.upper(), "password": "secret123"})

    assert resp.status_code == 200
    assert resp.json()["org"]["email"] == email


@pytest.mark.asyncio
async def test_login_wrong_password(client):
    email = unique_email("wrongpw")
    await register_org(client, email=email, password="secret123")

    resp = await client.post("/sessions", json={"email": email, "password": "nope-nope"})

    assert resp.status_code == 401
    assert resp.json()["detail"]["code"] == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_login_unknown_email(client):
    resp = await client.post(
        "/sessions", json={"email": unique_email("ghost"), "password": "secret123"}
    )
    assert resp.status_code == 401
    assert resp.json()["detail"]["code"] == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_login_missing_fields(client):
    resp = await client.post("/sessions", json={"email": unique_email("nopw")})
    assert resp.status_code == 400


# ---------------------------------------------------------------------------
# Me
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_me_requires_token(client):
    resp = await client.get("/orgs/me")
    assert resp.status_code == 401
    assert resp.json()["detail"]["code"] == "UNAUTHORIZED"
    assert resp.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_me_rejects_invalid_token(client):
    resp = await client.get("/orgs/me", headers=auth("not.a.token"))
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_me_returns_profile(client):
    data = await register_org(client, city="Curitiba")

    resp = await client.get("/orgs/me", headers=auth(data["token"]))

    assert resp.status_code == 200
    assert resp.json() == data["org"]


@pytest.mark.asyncio
async def test_me_for_deleted_org_is_not_found(client):
    token = create_access_token(uuid.uuid4(), "gone@example.com")
    resp = await client.get("/orgs/me", headers=auth(token))
    assert resp.status_code == 404
    assert resp.json()["detail"] == {"code": "NOT_FOUND", "message": "Org not found"}
