"""
Tests for password hashing
"""

from usersvc.security import ALGORITHM, hash_password, verify_password


class TestPasswordHashing:
    def test_hash_format(self):
        encoded = hash_password("password1", salt="abc", iterations=10)

        algorithm, iterations, salt, digest = encoded.split("$")
        assert algorithm == ALGORITHM
        assert iterations == "10"
        assert salt == "abc"
        assert digest

    def test_hash_is_salted(self):
        assert hash_password("password1", iterations=10) != hash_password("password1", iterations=10)

    def test_verify_password(self):
        encoded = hash_password("password1", iterations=10)

        assert verify_password("password1", encoded)
        assert not verify_password("password2", encoded)

    def test_verify_rejects_malformed_hashes(self):
        assert not verify_password("password1", "password1")
        assert not verify_password("password1", "md5$10$salt$digest")
        assert not verify_password("password1", "pbkdf2_sha256$many$salt$digest")

    def test_default_iterations_come_from_settings(self):
        encoded = hash_password("password1")

        assert encoded.split("$")[1] == "100000"
