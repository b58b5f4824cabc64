import pytest

from account_platform.auth.security import hash_password, verify_password


def test_hash_is_salted_and_never_the_raw_password():
    h1 = hash_password("secret1")
    h2 = hash_password("secret1")

    assert "secret1" not in h1
    assert h1 != h2
    assert verify_password("secret1", h1)
    assert verify_password("secret1", h2)


def test_verify_rejects_wrong_password():
    h = hash_password("secret1")
    assert not verify_password("secret2", h)
    assert not verify_password("", h)


def test_verify_rejects_corrupt_hash():
    assert not verify_password("secret1", "not-a-real-hash")
    assert not verify_password("secret1", "")


def test_blank_password_cannot_be_hashed():
    with pytest.raises(ValueError):
        hash_password("")
