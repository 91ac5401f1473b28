import bcrypt

from rbacbootstrap.utils.passwords import DEFAULT_ROUNDS, hash_password


def test_hash_is_bcrypt_and_verifies():
    hashed = hash_password("admin", rounds=4)

    assert hashed.startswith("$2b$04$")
    assert bcrypt.checkpw(b"admin", hashed.encode())
    assert not bcrypt.checkpw(b"not-admin", hashed.encode())


def test_hashes_are_salted():
    assert hash_password("admin", rounds=4) != hash_password("admin", rounds=4)


def test_default_cost():
    assert DEFAULT_ROUNDS == 10
