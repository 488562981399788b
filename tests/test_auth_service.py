from firebase_admin import auth as firebase_auth

from config import Settings
from services import auth_service
from services.auth_service import FirebaseSessionResolver, bearer_token


def test_bearer_token_parsing():
    assert bearer_token({"authorization": "Bearer abc.def"}) == "abc.def"
    assert bearer_token({"Authorization": "bearer xyz"}) == "xyz"
    assert bearer_token({"authorization": "Basic dXNlcjpwYXNz"}) is None
    assert bearer_token({"authorization": "Bearer "}) is None
    assert bearer_token({}) is None


def resolver_with(monkeypatch, verify):
    resolver = FirebaseSessionResolver(Settings())
    monkeypatch.setattr(resolver, "_get_app", lambda: object())
    monkeypatch.setattr(auth_service.auth, "verify_id_token", verify)
    return resolver


def test_valid_token_resolves_to_uid(monkeypatch):
    resolver = resolver_with(monkeypatch, lambda token, app=None: {"uid": f"user-of-{token}"})
    assert resolver.resolve({"authorization": "Bearer tok"}) == "user-of-tok"


def test_invalid_token_resolves_to_none(monkeypatch):
    def reject(token, app=None):
        raise firebase_auth.InvalidIdTokenError("bad signature")

    resolver = resolver_with(monkeypatch, reject)
    assert resolver.resolve({"authorization": "Bearer forged"}) is None


def test_missing_header_skips_verification(monkeypatch):
    calls = []
    resolver = resolver_with(monkeypatch, lambda token, app=None: calls.append(token))
    assert resolver.resolve({}) is None
    assert calls == []
