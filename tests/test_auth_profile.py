import pytest

from services.auth_service import SIGNED_IN, SIGNED_OUT, USER_UPDATED


def test_sign_up_creates_profile_and_session(ctx):
    session = ctx.auth.sign_up("Ana@Example.com", "secret1", "Ana")
    assert ctx.auth.user_id == session.user_id
    profile = ctx.profiles.get(session.user_id)
    assert (profile.name, profile.email) == ("Ana", "Ana@Example.com")


def test_sign_up_rules(ctx, user_id):
    with pytest.raises(ValueError, match="at least 6"):
        ctx.auth.sign_up("new@example.com", "12345", "New")
    with pytest.raises(ValueError, match="already exists"):
        ctx.auth.sign_up("ANA@example.com", "secret1", "Ana")


def test_sign_up_requires_valid_email_and_name(ctx, db):
    with pytest.raises(ValueError, match="Invalid email"):
        ctx.auth.sign_up("not-an-email", "secret1", "Ana")
    with pytest.raises(ValueError, match="Name is required"):
        ctx.auth.sign_up("ana@example.com", "secret1", "   ")
    count = db.get_connection().execute("SELECT COUNT(*) FROM users").fetchone()[0]
    assert count == 0
    assert ctx.auth.session is None


def test_signed_up_profile_can_be_saved_unchanged(ctx):
    user_id = ctx.auth.sign_up(" ana@example.com ", "secret1", " Ana ").user_id
    profile = ctx.profiles.get(user_id)
    assert (profile.name, profile.email) == ("Ana", "ana@example.com")
    saved = ctx.profiles.update(user_id, profile.name, profile.email)
    assert saved.name == "Ana"


def test_password_is_hashed(ctx, db, user_id):
    row = db.get_connection().execute(
        "SELECT password_hash FROM users WHERE id = ?", (user_id,)
    ).fetchone()
    assert row["password_hash"] != "secret1"
    assert row["password_hash"].startswith("$2")


def test_sign_in_and_out(ctx, user_id):
    ctx.auth.sign_out()
    assert ctx.auth.session is None
    with pytest.raises(ValueError):
        ctx.auth.sign_in("ana@example.com", "wrong-pass")
    session = ctx.auth.sign_in("ANA@example.com", "secret1")
    assert session.user_id == user_id


def test_listener_events_and_unsubscribe(ctx):
    events = []
    unsubscribe = ctx.auth.on_auth_state_change(lambda event, s: events.append((event, s)))
    ctx.auth.sign_up("ana@example.com", "secret1", "Ana")
    ctx.auth.update_password("secret2")
    ctx.auth.sign_out()
    assert [e for e, _ in events] == [SIGNED_IN, USER_UPDATED, SIGNED_OUT]
    assert events[0][1].email == "ana@example.com"
    assert events[-1][1] is None

    unsubscribe()
    ctx.auth.sign_in("ana@example.com", "secret2")
    assert len(events) == 3


def test_profile_update_name_and_email(ctx, user_id):
    profile = ctx.profiles.update(user_id, "Ana Maria", "ana.maria@example.com")
    assert profile.email == "ana.maria@example.com"
    assert ctx.auth.session.email == "ana.maria@example.com"
    ctx.auth.sign_out()
    assert ctx.auth.sign_in("ana.maria@example.com", "secret1").user_id == user_id


@pytest.mark.parametrize("kwargs, message", [
    ({"name": "", "email": "ana@example.com"}, "Name"),
    ({"name": "Ana", "email": ""}, "Email"),
    ({"name": "Ana", "email": "not-an-email"}, "Invalid email"),
    ({"name": "Ana", "email": "ana@example.com", "new_password": "abcdef",
      "confirm_password": "abcdef"}, "current password"),
    ({"name": "Ana", "email": "ana@example.com", "current_password": "secret1",
      "new_password": "abc", "confirm_password": "abc"}, "at least 6"),
    ({"name": "Ana", "email": "ana@example.com", "current_password": "secret1",
      "new_password": "abcdef", "confirm_password": "abcdeg"}, "do not match"),
    ({"name": "Ana", "email": "ana@example.com", "current_password": "nope00",
      "new_password": "abcdef", "confirm_password": "abcdef"}, "incorrect"),
])
def test_profile_update_validation(ctx, user_id, kwargs, message):
    with pytest.raises(ValueError, match=message):
        ctx.profiles.update(user_id, **kwargs)
    assert ctx.profiles.get(user_id).name == "Ana"


def test_profile_password_change(ctx, user_id):
    ctx.profiles.update(user_id, "Ana", "ana@example.com", "secret1", "newpass", "newpass")
    ctx.auth.sign_out()
    with pytest.raises(ValueError):
        ctx.auth.sign_in("ana@example.com", "secret1")
    assert ctx.auth.sign_in("ana@example.com", "newpass").user_id == user_id
