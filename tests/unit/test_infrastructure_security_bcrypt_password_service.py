"""Unit tests for BcryptPasswordService.

Uses the minimum cost factor (10) to keep the suite fast.
"""

import pytest

from branchauth.infrastructure.security.bcrypt_password_service import (
    BcryptPasswordService,
)


@pytest.fixture
def password_service():
    return BcryptPasswordService(cost_factor=10)


@pytest.mark.unit
class TestBcryptPasswordService:
    def test_hash_encodes_algorithm_and_cost(self, password_service):
        password_hash = password_service.hash_password("correct horse")

        assert password_hash.startswith("$2b$10$")
        assert len(password_hash) == 60

    def test_hashes_are_salted(self, password_service):
        first = password_service.hash_password("correct horse")
        second = password_service.hash_password("correct horse")

        assert first != second

    def test_verify_matches_correct_password(self, password_service):
        password_hash = password_service.hash_password("correct horse")

        assert password_service.verify_password("correct horse", password_hash)

    def test_verify_rejects_wrong_password(self, password_service):
        password_hash = password_service.hash_password("correct horse")

        assert not password_service.verify_password("battery staple", password_hash)

    def test_verify_returns_false_for_malformed_hash(self, password_service):
        assert not password_service.verify_password("correct horse", "not-a-hash")

    def test_hash_rejects_password_over_72_bytes(self, password_service):
        with pytest.raises(ValueError, match="at most 72 bytes"):
            password_service.hash_password("a" * 73)

    @pytest.mark.parametrize("cost", [9, 32])
    def test_rejects_out_of_range_cost(self, cost):
        with pytest.raises(ValueError):
            BcryptPasswordService(cost_factor=cost)
