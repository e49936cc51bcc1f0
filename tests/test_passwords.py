"""Password hashing tests."""

from user_directory.services.passwords import hash_password, verify_password


def test_hash_is_not_clear_text():
    assert hash_password("password123") != "password123"


def test_hashes_are_salted():
    """Test two hashes of one password differ yet both verify."""
    first = hash_password("password123")
    second = hash_password("password123")

    assert first != second
    assert verify_password("password123", first)
    assert verify_password("password123", second)


def test_wrong_password_fails():
    hashed = hash_password("password123")
    assert verify_password("wrongpassword", hashed) is False


def test_malformed_hash_fails():
    assert verify_password("password123", "not-a-hash") is False
