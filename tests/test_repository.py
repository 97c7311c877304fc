import pytest
from sqlalchemy import inspect

from models.user import User, UserRole
from users.errors import UserConflictError, UserNotFoundError, UserValidationError


def _create_alice(repository, **overrides):
    fields = {"username": "alice", "email": "alice@x.com", "password": "secret1"}
    fields.update(overrides)
    return repository.create(**fields)


def test_create_hashes_password_and_applies_defaults(repository):
    user = _create_alice(repository)

    assert len(user.id) == 36
    assert user.role == UserRole.USER
    assert user.is_active is True
    assert user.created_at is not None
    assert user.updated_at is not None
    assert user.last_login_at is None

    stored = repository.find_by_username_with_password("alice")
    assert stored.password != "secret1"
    assert stored.password.startswith("$2b$10$")


def test_reads_do_not_load_password(repository, db):
    _create_alice(repository)
    db.expunge_all()

    user = repository.list()[0]
    assert "password" in inspect(user).unloaded

    by_id = repository.get_by_id(user.id)
    assert "password" in inspect(by_id).unloaded


def test_find_by_username_with_password_loads_digest(repository, db):
    _create_alice(repository)
    db.expunge_all()

    user = repository.find_by_username_with_password("alice")
    assert "password" not in inspect(user).unloaded
    assert repository.find_by_username_with_password("nobody") is None


def test_create_accepts_optional_fields_and_role(repository):
    user = _create_alice(
        repository,
        first_name="Alice",
        last_name="Liddell",
        phone_number="+15550100",
        role=UserRole.MANAGER,
    )

    assert user.first_name == "Alice"
    assert user.last_name == "Liddell"
    assert user.phone_number == "+15550100"
    assert user.role == UserRole.MANAGER


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"username": "al"}, "Username must be at least 3 characters long"),
        ({"email": "not-an-email"}, "Invalid email format"),
        ({"password": "12345"}, "Password must be at least 6 characters long"),
        ({"role": "owner"}, "Invalid role. Must be 'admin', 'user' or 'manager'"),
    ],
)
def test_create_rejects_invalid_fields(repository, db, overrides, message):
    with pytest.raises(UserValidationError) as excinfo:
        _create_alice(repository, **overrides)

    assert str(excinfo.value) == message
    assert db.query(User).count() == 0


def test_duplicate_username_leaves_single_row(repository, db):
    _create_alice(repository)

    with pytest.raises(UserConflictError):
        _create_alice(repository, email="other@x.com")

    assert db.query(User).count() == 1


def test_duplicate_email_is_rejected(repository):
    _create_alice(repository)

    with pytest.raises(UserConflictError):
        _create_alice(repository, username="alice2")


def test_unique_constraint_is_reported_as_conflict(repository, db, monkeypatch):
    _create_alice(repository)

    # Simulate losing the race: the pre-check sees nothing, the insert collides.
    real_query = db.query
    state = {"bypassed": False}

    def query(*entities, **kwargs):
        q = real_query(*entities, **kwargs)
        if not state["bypassed"] and entities == (User,):
            state["bypassed"] = True
            return q.filter(User.id == "no-such-id")
        return q

    monkeypatch.setattr(db, "query", query)

    with pytest.raises(UserConflictError):
        _create_alice(repository, email="other@x.com")

    monkeypatch.undo()
    assert db.query(User).count() == 1


def test_update_with_only_is_active_false(repository):
    user = _create_alice(repository, first_name="Alice", phone_number="555")
    before = {
        "username": user.username,
        "email": user.email,
        "role": user.role,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "phone_number": user.phone_number,
    }

    updated = repository.update(user.id, is_active=False)

    assert updated.is_active is False
    assert {k: getattr(updated, k) for k in before} == before
    assert repository.get_by_id(user.id).is_active is False


def test_update_ignores_empty_strings_and_none(repository):
    user = _create_alice(repository, first_name="Alice", last_name="Liddell")

    updated = repository.update(user.id, first_name="", last_name=None, phone_number="555-0100")

    assert updated.first_name == "Alice"
    assert updated.last_name == "Liddell"
    assert updated.phone_number == "555-0100"
    assert updated.is_active is True


def test_update_keeps_password_digest(repository):
    user = _create_alice(repository)
    digest = repository.find_by_username_with_password("alice").password

    repository.update(user.id, first_name="Alice")

    assert repository.find_by_username_with_password("alice").password == digest


def test_update_unknown_id_raises(repository):
    with pytest.raises(UserNotFoundError):
        repository.update("missing", first_name="x")


def test_delete(repository):
    user_id = _create_alice(repository).id

    assert repository.delete(user_id) is True
    assert repository.get_by_id(user_id) is None
    assert repository.delete(user_id) is False


def test_prepare_for_persistence_without_password_is_noop(repository):
    user = User(username="bob", email="bob@x.com")

    repository.prepare_for_persistence(user)
    assert user.password is None

    repository.prepare_for_persistence(user, "secret1")
    assert user.password.startswith("$2b$10$")
