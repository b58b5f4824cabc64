import pytest

from account_platform.auth import crud
from account_platform.errors import ConflictError
from account_platform.models import AccountPatch


def _insert(conn, username="alice", email="a@x.com", full_name=None):
    return crud.insert_user(
        conn,
        username=username,
        email=email,
        password_hash="hash:" + username,
        full_name=full_name,
    )


def test_insert_and_find_by_each_key(pool):
    with pool.connection() as conn:
        acct = _insert(conn, full_name="Alice A")

        assert acct.user_id > 0
        assert crud.get_user_by_id(conn, acct.user_id) == acct
        assert crud.get_user_by_username(conn, "alice") == acct
        assert crud.get_user_by_email(conn, "a@x.com") == acct
        assert crud.get_user_by_id(conn, acct.user_id + 100) is None


def test_lookups_are_exact_and_case_preserving(pool):
    with pool.connection() as conn:
        _insert(conn, username="Alice", email="Alice@X.com")

        assert crud.get_user_by_username(conn, "Alice") is not None
        assert crud.get_user_by_username(conn, "alice") is None
        assert crud.get_user_by_username(conn, " Alice") is None
        assert crud.get_user_by_email(conn, "alice@x.com") is None


def test_public_view_has_no_hash(pool):
    with pool.connection() as conn:
        acct = _insert(conn, full_name="Alice A")

    view = crud.public_user(acct)
    assert view == {"id": acct.user_id, "username": "alice", "email": "a@x.com", "fullName": "Alice A"}


@pytest.mark.parametrize(
    "username,email,message",
    [
        ("alice", "other@x.com", "Username already taken"),
        ("bob", "a@x.com", "Email already registered"),
    ],
)
def test_duplicate_insert_is_a_conflict(pool, username, email, message):
    with pool.connection() as conn:
        _insert(conn)

    with pytest.raises(ConflictError) as excinfo:
        with pool.connection() as conn:
            _insert(conn, username=username, email=email)
    assert excinfo.value.message == message

    with pool.connection() as conn:
        assert len(crud.list_users(conn)) == 1


def test_update_changes_only_supplied_fields(pool):
    with pool.connection() as conn:
        acct = _insert(conn, full_name="Alice A")
        assert crud.update_user(conn, acct.user_id, AccountPatch(full_name="Alice B"))
        after = crud.get_user_by_id(conn, acct.user_id)

    assert after.full_name == "Alice B"
    assert after.username == acct.username
    assert after.email == acct.email
    assert after.password_hash == acct.password_hash
    assert after.created_at == acct.created_at


def test_empty_patch_is_a_noop(pool):
    with pool.connection() as conn:
        acct = _insert(conn)
        assert crud.update_user(conn, acct.user_id, AccountPatch()) is False
        assert crud.get_user_by_id(conn, acct.user_id) == acct


def test_update_unknown_id_reports_no_change(pool):
    with pool.connection() as conn:
        assert crud.update_user(conn, 999, AccountPatch(full_name="x")) is False


def test_update_to_taken_email_is_a_conflict(pool):
    with pool.connection() as conn:
        _insert(conn)
        bob = _insert(conn, username="bob", email="b@y.com")

    with pytest.raises(ConflictError):
        with pool.connection() as conn:
            crud.update_user(conn, bob.user_id, AccountPatch(email="a@x.com"))


def test_delete(pool):
    with pool.connection() as conn:
        acct = _insert(conn)
        assert crud.delete_user(conn, acct.user_id)
        assert not crud.delete_user(conn, acct.user_id)
        assert crud.count_users(conn) == 0
