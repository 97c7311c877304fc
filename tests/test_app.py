import logging

import pytest

from main import create_app


def test_unusable_database_halts_startup(settings, tmp_path):
    broken = settings.model_copy(
        update={"database_url": f"sqlite:///{tmp_path / 'no' / 'such' / 'dir' / 'users.db'}"}
    )

    with pytest.raises(SystemExit) as excinfo:
        create_app(broken)

    assert excinfo.value.code == 1


def test_session_factory_lives_on_app_state(settings):
    app = create_app(settings)

    assert app.state.settings is settings
    assert app.state.session_factory.kw["bind"] is app.state.engine


def test_request_log_does_not_echo_body(client, caplog):
    service_logger = logging.getLogger("usersvc")
    service_logger.addHandler(caplog.handler)
    try:
        client.post(
            "/graphql",
            json={"query": 'mutation { login(username: "alice", password: "topsecret9") { error } }'},
        )
    finally:
        service_logger.removeHandler(caplog.handler)

    assert "POST /graphql" in caplog.text
    assert "topsecret9" not in caplog.text


def test_malformed_database_url_halts_startup(settings):
    broken = settings.model_copy(update={"database_url": "not a database url"})

    with pytest.raises(SystemExit) as excinfo:
        create_app(broken)

    assert excinfo.value.code == 1
