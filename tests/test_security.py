from app.services.security import generate_session_token, hash_password, verify_password


class TestPasswordHashing:
    def test_hash_is_salted(self):
        first = hash_password("pw1234567", rounds=4)
        second = hash_password("pw1234567", rounds=4)

        assert first != second
        assert verify_password("pw1234567", first)
        assert verify_password("pw1234567", second)

    def test_work_factor_is_encoded(self):
        assert hash_password("pw1234567").startswith("$2b$10$")

    def test_wrong_password(self):
        assert not verify_password("nope", hash_password("pw1234567", rounds=4))

    def test_malformed_hash(self):
        assert not verify_password("pw1234567", "not-a-bcrypt-hash")
        assert not verify_password("pw1234567", "")

    def test_overlong_password_uses_first_72_bytes(self):
        hashed = hash_password("x" * 80, rounds=4)

        assert verify_password("x" * 80, hashed)
        assert verify_password("x" * 72, hashed)
        assert not verify_password("x" * 71, hashed)


def test_session_tokens_are_unique_hex():
    tokens = {generate_session_token() for _ in range(50)}

    assert len(tokens) == 50
    assert all(len(token) == 96 for token in tokens)
