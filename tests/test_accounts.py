import json

import pytest
from django.contrib.auth import get_user_model
from django.core import signing
from django.urls import reverse

from apps.accounts.tokens import ADMIN_SALT, make_admin_token, read_admin_token, read_member_token

User = get_user_model()


def _post(client, url, data):
    return client.post(url, data=json.dumps(data), content_type="application/json")


@pytest.mark.django_db
def test_signup_login_me_logout(client):
    r = _post(client, reverse("accounts:signup"), {"email": "New@Example.com", "password": "secret1", "name": "Nia"})
    assert r.status_code == 201
    assert r.json()["user"]["email"] == "new@example.com"

    assert client.get(reverse("accounts:me")).status_code == 401
    r = _post(client, reverse("accounts:login"), {"email": "new@example.com", "password": "secret1"})
    assert r.status_code == 200
    assert "auth-token" in r.cookies

    r = client.get(reverse("accounts:me"))
    assert r.status_code == 200
    assert r.json()["user"]["name"] == "Nia"

    _post(client, reverse("accounts:logout"), {})
    assert client.get(reverse("accounts:me")).status_code == 401


@pytest.mark.django_db
@pytest.mark.parametrize(
    "data,message",
    [
        ({"email": "x@example.com", "password": "secret1"}, "Email, password, and name are required"),
        ({"email": "bad", "password": "secret1", "name": "Al"}, "Invalid email format"),
        ({"email": "x@example.com", "password": "123", "name": "Al"}, "Password must be at least 6 characters long"),
        ({"email": "x@example.com", "password": "secret1", "name": "A"}, "Name must be at least 2 characters long"),
    ],
)
def test_signup_validation(client, data, message):
    r = _post(client, reverse("accounts:signup"), data)
    assert r.status_code == 400
    assert r.json()["error"] == message


@pytest.mark.django_db
def test_signup_duplicate_email_is_conflict(client, member):
    r = _post(client, reverse("accounts:signup"), {"email": "MEMBER@example.com", "password": "secret1", "name": "Mo"})
    assert r.status_code == 409


@pytest.mark.django_db
def test_login_wrong_password(client, member):
    r = _post(client, reverse("accounts:login"), {"email": "member@example.com", "password": "nope"})
    assert r.status_code == 401
    assert r.json() == {"error": "Unauthorized"}


def test_admin_token_roundtrip_and_tampering():
    assert read_admin_token(make_admin_token())
    assert not read_admin_token("")
    assert not read_admin_token(signing.dumps({"role": "member"}, salt=ADMIN_SALT))
    # a member token must not pass the admin gate
    assert not read_admin_token(signing.dumps({"role": "admin"}, salt="accounts.member"))
    assert read_member_token("garbage") is None


def test_admin_token_expires(settings):
    settings.ADMIN_TOKEN_MAX_AGE = -1
    assert not read_admin_token(make_admin_token())


def test_production_hashers_are_all_loadable():
    from django.utils.module_loading import import_string

    from config import settings as prod_settings

    for dotted in prod_settings.PASSWORD_HASHERS:
        hasher = import_string(dotted)()
        # every listed hasher must have its backend library installed
        if hasher.library:
            hasher._load_library()
