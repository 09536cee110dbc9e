"""Access policy: read needs a verified token, writes need the admin role."""

from datetime import timedelta

import pytest
from jose import jwt

from deskmap.config import Settings
from deskmap.main import app
from deskmap.services.auth import (
    DEV_IDENTITY,
    ROLE_CAPABILITIES,
    AuthService,
    Capability,
    Identity,
    Role,
    has_capability,
)


def test_roles_grant_capabilities():
    user = Identity(id="u", email="u@x.com", role=Role.USER)
    admin = Identity(id="a", email="a@x.com", role=Role.ADMIN)
    assert has_capability(user, Capability.READ)
    assert not has_capability(user, Capability.WRITE)
    assert has_capability(admin, Capability.READ)
    assert has_capability(admin, Capability.WRITE)


def test_every_role_can_read():
    for role in Role:
        assert Capability.READ in ROLE_CAPABILITIES[role]


def test_token_round_trips_identity(settings):
    identity = Identity(id="42", email="jo@x.com", role=Role.ADMIN)
    token = AuthService.create_access_token(identity, settings)
    assert AuthService.decode_token(token, settings) == identity


def test_token_signed_with_other_key_is_rejected(settings):
    token = AuthService.create_access_token(Identity("1", "a@x.com", Role.ADMIN), settings)
    other = settings.model_copy(update={"jwt_secret_key": "another-key"})
    assert AuthService.decode_token(token, other) is None


def test_expired_token_is_rejected(settings):
    token = AuthService.create_access_token(
        Identity("1", "a@x.com", Role.ADMIN), settings, expires_delta=timedelta(minutes=-5)
    )
    assert AuthService.decode_token(token, settings) is None


def test_unknown_role_is_rejected(settings):
    token = jwt.encode(
        {"sub": "1", "email": "a@x.com", "role": "SUPERUSER"},
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )
    assert AuthService.decode_token(token, settings) is None


async def test_read_without_token_401(client):
    res = await client.get("/api/maps")
    assert res.status_code == 401
    assert res.json() == {"error": "No token provided"}
    assert res.headers["www-authenticate"] == "Bearer"


async def test_read_with_garbage_token_401(client):
    res = await client.get("/api/employees", headers={"Authorization": "Bearer not-a-jwt"})
    assert res.status_code == 401
    assert res.json() == {"error": "Invalid token"}


async def test_user_can_read(client, user_headers):
    res = await client.get("/api/locations", headers=user_headers)
    assert res.status_code == 200


@pytest.mark.parametrize("method, path", [
    ("post", "/api/employees"),
    ("put", "/api/employees/some-id"),
    ("delete", "/api/employees/some-id"),
    ("post", "/api/maps"),
    ("put", "/api/maps/some-id"),
    ("delete", "/api/maps/some-id"),
    ("post", "/api/locations"),
    ("put", "/api/locations/some-id"),
    ("delete", "/api/locations/some-id"),
])
async def test_user_cannot_write(client, user_headers, method, path):
    kwargs = {"json": {}} if "locations" in path and method != "delete" else {}
    res = await client.request(method.upper(), path, headers=user_headers, **kwargs)
    assert res.status_code == 403
    assert res.json() == {"error": "Admin access required"}


async def test_write_without_token_401(client):
    res = await client.delete("/api/maps/some-id")
    assert res.status_code == 401


async def test_disabled_auth_acts_as_admin(client, settings):
    settings.disable_auth = True

    res = await client.post(
        "/api/employees", data={"name": "Dev", "phone": "1", "email": "dev@x.com"}
    )

    assert res.status_code == 201
    assert DEV_IDENTITY.role is Role.ADMIN


async def test_auth_status_reports_mode(client, settings):
    res = await client.get("/api/auth/status")
    assert res.json() == {"authEnabled": True, "mode": "production"}

    settings.disable_auth = True
    res = await client.get("/api/auth/status")
    assert res.json() == {"authEnabled": False, "mode": "development"}


def test_auth_enabled_by_default():
    assert Settings.model_fields["disable_auth"].default is False


async def test_health_needs_no_token(client):
    res = await client.get("/api/health")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "ok"
    assert body["timestamp"]


async def test_unknown_route_404(client):
    res = await client.get("/api/nowhere")
    assert res.status_code == 404
    assert res.json() == {"error": "Route not found"}


def test_app_exposes_every_resource():
    paths = set(app.openapi()["paths"])
    for path in ("/api/maps", "/api/employees", "/api/locations", "/api/search",
                 "/api/health", "/api/auth/status", "/uploads/{filename}"):
        assert path in paths
