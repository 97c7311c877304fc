import asyncio

import users.resolver as resolver
from core.security import self_check_password, verify_password


def _on_event_loop():
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


def test_password_hashing_runs_off_the_event_loop(graphql, monkeypatch):
    seen = []

    def recording_self_check(password):
        seen.append(_on_event_loop())
        return self_check_password(password)

    monkeypatch.setattr(resolver, "self_check_password", recording_self_check)

    body = graphql('{ testPassword(password: "anything") }')

    assert body["data"]["testPassword"] is True
    assert seen == [False]


def test_login_verification_runs_off_the_event_loop(graphql, monkeypatch):
    graphql(
        'mutation { createUser(username: "alice", email: "alice@x.com", password: "secret1") { error } }'
    )
    seen = []

    def recording_verify(plain, stored_hash):
        seen.append(_on_event_loop())
        return verify_password(plain, stored_hash)

    monkeypatch.setattr(resolver, "verify_password", recording_verify)

    body = graphql('mutation { login(username: "alice", password: "secret1") { error token } }')

    assert body["data"]["login"]["error"] is None
    assert seen == [False]


def test_repository_calls_run_off_the_event_loop(graphql, monkeypatch):
    seen = []
    real_list = resolver.UserRepository.list

    def recording_list(self):
        seen.append(_on_event_loop())
        return real_list(self)

    monkeypatch.setattr(resolver.UserRepository, "list", recording_list)

    assert graphql("{ users { id } }")["data"]["users"] == []
    assert seen == [False]
