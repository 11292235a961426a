"""Unit tests for RefreshTokenService."""

import hashlib

import pytest

from branchauth.infrastructure.security.refresh_token_service import (
    RefreshTokenService,
)


@pytest.mark.unit
class TestRefreshTokenService:
    def test_generate_returns_token_and_sha256_digest(self):
        token, token_hash = RefreshTokenService().generate_token()

        assert token_hash == hashlib.sha256(token.encode("utf-8")).hexdigest()
        assert len(token_hash) == 64

    def test_token_carries_64_random_bytes(self):
        token, _ = RefreshTokenService().generate_token()

        # 64 bytes urlsafe-base64 encoded without padding
        assert len(token) == 86

    def test_tokens_are_unique(self):
        service = RefreshTokenService()

        tokens = {service.generate_token()[0] for _ in range(50)}

        assert len(tokens) == 50

    def test_hash_token_is_deterministic(self):
        assert RefreshTokenService.hash_token("abc") == RefreshTokenService.hash_token(
            "abc"
        )
