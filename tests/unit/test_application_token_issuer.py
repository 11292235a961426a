"""Unit tests for TokenIssuer.

Tests cover:
- Issuance (refresh record persisted before returning, claims bound to it)
- Rotation happy path (new session, one-time use)
- Rotation rejections (bad access token, unknown record, owner mismatch,
  expiry, inactive/locked/missing owner)
- Reuse detection (USED/REVOKED replay, lost compare-and-set)
- Session revocation and blacklisting

Architecture:
- SessionStore and UserRepository mocked (AsyncMock)
- Real JWTService and RefreshTokenService (pure, fast)
- FakeClock for time
"""

from dataclasses import replace
from datetime import timedelta
from unittest.mock import AsyncMock, Mock
from uuid import uuid4

import pytest

from branchauth.application.services import TokenIssuer
from branchauth.core.constants import REASON_TOKEN_REUSE, REASON_USER_LOGOUT
from branchauth.core.result import Failure, Success
from branchauth.domain.entities import RefreshToken
from branchauth.domain.errors import (
    AccountInactiveError,
    AccountLockedError,
    InvalidRefreshTokenError,
    InvalidTokenError,
    RefreshTokenExpiredError,
)
from branchauth.infrastructure.security import JWTService, RefreshTokenService
from tests.conftest import (
    T0,
    TEST_AUDIENCE,
    TEST_ISSUER,
    TEST_SECRET_KEY,
    create_credential,
)


@pytest.fixture
def codec():
    return JWTService(
        secret_key=TEST_SECRET_KEY, issuer=TEST_ISSUER, audience=TEST_AUDIENCE
    )


@pytest.fixture
def session_store():
    store = AsyncMock()
    store.mark_used.return_value = True
    store.mark_revoked.return_value = 0
    store.find_unrevoked_by_user.return_value = []
    store.find_by_session_id.return_value = []
    return store


@pytest.fixture
def user_repo():
    return AsyncMock()


@pytest.fixture
def logger():
    return Mock()


@pytest.fixture
def issuer(session_store, user_repo, codec, clock, logger):
    return TokenIssuer(
        session_store=session_store,
        user_repo=user_repo,
        token_codec=codec,
        refresh_token_service=RefreshTokenService(),
        clock=clock,
        logger=logger,
        access_token_ttl=timedelta(minutes=60),
        refresh_token_ttl=timedelta(days=7),
    )


def saved_record(session_store, index: int = -1) -> RefreshToken:
    return session_store.save_refresh_token.await_args_list[index].args[0]


def other_token(user_id, session_id: str) -> RefreshToken:
    return RefreshToken(
        id=uuid4(),
        user_id=user_id,
        token_hash=uuid4().hex * 2,
        jwt_id=str(uuid4()),
        session_id=session_id,
        expires_at=T0 + timedelta(days=7),
        created_at=T0,
    )


@pytest.mark.unit
class TestTokenIssuerIssue:
    async def test_issue_persists_record_bound_to_access_token(
        self, issuer, session_store, codec
    ):
        # Arrange
        credential = create_credential()

        # Act
        tokens = await issuer.issue(credential, "10.0.0.7", "Mozilla/5.0", "dev-1")

        # Assert
        record = saved_record(session_store)
        claims = codec.decode(tokens.access_token, T0).value
        assert record.user_id == credential.id
        assert record.token_hash == RefreshTokenService.hash_token(
            tokens.refresh_token
        )
        assert record.jwt_id == claims.jwt_id
        assert record.session_id == claims.session_id == tokens.session_id
        assert record.expires_at == T0 + timedelta(days=7)
        assert record.created_at == T0
        assert record.device_id == "dev-1"
        assert record.is_active(T0)
        assert tokens.expires_in == 3600
        assert tokens.token_type == "Bearer"

    async def test_issue_never_stores_plain_refresh_token(
        self, issuer, session_store
    ):
        tokens = await issuer.issue(create_credential(), "10.0.0.7", None)

        assert saved_record(session_store).token_hash != tokens.refresh_token

    async def test_issue_opens_distinct_sessions(self, issuer):
        credential = create_credential()

        first = await issuer.issue(credential, "10.0.0.7", None)
        second = await issuer.issue(credential, "10.0.0.7", None)

        assert first.session_id != second.session_id


@pytest.mark.unit
class TestTokenIssuerRotate:
    async def test_rotate_returns_new_pair_in_new_session(
        self, issuer, session_store, user_repo, clock, codec
    ):
        # Arrange
        credential = create_credential()
        tokens = await issuer.issue(credential, "10.0.0.7", "Mozilla/5.0", "dev-1")
        record = saved_record(session_store)
        session_store.find_refresh_token.return_value = record
        user_repo.find_by_id.return_value = credential
        clock.advance(hours=2)

        # Act
        result = await issuer.rotate(
            tokens.access_token, tokens.refresh_token, "10.0.0.8", "Mozilla/5.0"
        )

        # Assert
        assert isinstance(result, Success)
        assert result.value.session_id != tokens.session_id
        assert (
            codec.decode(result.value.access_token, clock.now()).value.session_id
            == result.value.session_id
        )
        assert result.value.refresh_token != tokens.refresh_token
        session_store.find_refresh_token.assert_awaited_once_with(
            record.token_hash, record.jwt_id
        )
        session_store.mark_used.assert_awaited_once_with(record, clock.now())
        new_record = saved_record(session_store)
        assert new_record.session_id == result.value.session_id
        assert new_record.session_id != record.session_id
        assert new_record.device_id == "dev-1"
        assert new_record.ip_address == "10.0.0.8"
        assert new_record.created_at == clock.now()
        session_store.add_blacklist_entry.assert_not_awaited()

    async def test_rotate_rejects_invalid_access_token(self, issuer, session_store):
        result = await issuer.rotate("garbage", "refresh", "10.0.0.7", None)

        assert isinstance(result, Failure)
        assert isinstance(result.error, InvalidTokenError)
        session_store.find_refresh_token.assert_not_awaited()

    async def test_rotate_rejects_unknown_refresh_token(self, issuer, session_store):
        tokens = await issuer.issue(create_credential(), "10.0.0.7", None)
        session_store.find_refresh_token.return_value = None

        result = await issuer.rotate(
            tokens.access_token, "not-the-token", "10.0.0.7", None
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, InvalidRefreshTokenError)
        session_store.mark_used.assert_not_awaited()

    async def test_rotate_rejects_record_of_another_user(
        self, issuer, session_store
    ):
        tokens = await issuer.issue(create_credential(), "10.0.0.7", None)
        record = replace(saved_record(session_store), user_id=uuid4())
        session_store.find_refresh_token.return_value = record

        result = await issuer.rotate(
            tokens.access_token, tokens.refresh_token, "10.0.0.7", None
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, InvalidRefreshTokenError)
        session_store.mark_used.assert_not_awaited()

    async def test_rotate_rejects_expired_refresh_token(
        self, issuer, session_store, clock
    ):
        tokens = await issuer.issue(create_credential(), "10.0.0.7", None)
        session_store.find_refresh_token.return_value = saved_record(session_store)
        clock.advance(days=7)

        result = await issuer.rotate(
            tokens.access_token, tokens.refresh_token, "10.0.0.7", None
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, RefreshTokenExpiredError)
        session_store.mark_used.assert_not_awaited()
        session_store.mark_revoked.assert_not_awaited()

    @pytest.mark.parametrize(
        ("overrides", "expected"),
        [
            ({"is_active": False}, AccountInactiveError),
            ({"is_locked": True}, AccountLockedError),
        ],
    )
    async def test_rotate_rejects_disabled_owner(
        self, issuer, session_store, user_repo, overrides, expected
    ):
        credential = create_credential()
        tokens = await issuer.issue(credential, "10.0.0.7", None)
        session_store.find_refresh_token.return_value = saved_record(session_store)
        user_repo.find_by_id.return_value = replace(credential, **overrides)

        result = await issuer.rotate(
            tokens.access_token, tokens.refresh_token, "10.0.0.7", None
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, expected)
        session_store.mark_used.assert_not_awaited()

    async def test_rotate_rejects_missing_owner(
        self, issuer, session_store, user_repo
    ):
        tokens = await issuer.issue(create_credential(), "10.0.0.7", None)
        session_store.find_refresh_token.return_value = saved_record(session_store)
        user_repo.find_by_id.return_value = None

        result = await issuer.rotate(
            tokens.access_token, tokens.refresh_token, "10.0.0.7", None
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, InvalidRefreshTokenError)


@pytest.mark.unit
class TestTokenIssuerReuseDetection:
    async def test_replayed_used_token_revokes_every_session(
        self, issuer, session_store, logger
    ):
        # Arrange
        credential = create_credential()
        tokens = await issuer.issue(credential, "10.0.0.7", None)
        record = replace(saved_record(session_store), is_used=True, used_at=T0)
        session_store.find_refresh_token.return_value = record
        live = [
            other_token(credential.id, "session-2"),
            other_token(credential.id, "session-2"),
            other_token(credential.id, "session-3"),
        ]
        session_store.find_unrevoked_by_user.return_value = live
        session_store.mark_revoked.return_value = 3

        # Act
        result = await issuer.rotate(
            tokens.access_token, tokens.refresh_token, "10.0.0.9", None
        )

        # Assert
        assert isinstance(result, Failure)
        assert isinstance(result.error, InvalidRefreshTokenError)
        session_store.find_unrevoked_by_user.assert_awaited_once_with(credential.id)
        session_store.mark_revoked.assert_awaited_once_with(
            live, T0, REASON_TOKEN_REUSE
        )
        blacklisted = [
            call.args[0].session_id
            for call in session_store.add_blacklist_entry.await_args_list
        ]
        assert blacklisted == ["session-2", "session-3", record.session_id]
        assert all(
            call.args[0].reason == REASON_TOKEN_REUSE
            for call in session_store.add_blacklist_entry.await_args_list
        )
        session_store.mark_used.assert_not_awaited()
        warnings = [call.args[0] for call in logger.warning.call_args_list]
        assert "refresh_token_reuse_detected" in warnings

    async def test_replayed_revoked_token_is_reuse(self, issuer, session_store):
        tokens = await issuer.issue(create_credential(), "10.0.0.7", None)
        record = replace(saved_record(session_store), is_revoked=True)
        session_store.find_refresh_token.return_value = record

        result = await issuer.rotate(
            tokens.access_token, tokens.refresh_token, "10.0.0.7", None
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, InvalidRefreshTokenError)
        session_store.find_unrevoked_by_user.assert_awaited_once()
        session_store.add_blacklist_entry.assert_awaited_once()

    async def test_replay_is_detected_even_after_expiry(
        self, issuer, session_store, clock
    ):
        tokens = await issuer.issue(create_credential(), "10.0.0.7", None)
        record = replace(saved_record(session_store), is_used=True)
        session_store.find_refresh_token.return_value = record
        clock.advance(days=30)

        result = await issuer.rotate(
            tokens.access_token, tokens.refresh_token, "10.0.0.7", None
        )

        assert isinstance(result.error, InvalidRefreshTokenError)
        session_store.find_unrevoked_by_user.assert_awaited_once()

    async def test_lost_compare_and_set_is_handled_as_reuse(
        self, issuer, session_store, user_repo
    ):
        # Arrange
        credential = create_credential()
        tokens = await issuer.issue(credential, "10.0.0.7", None)
        session_store.find_refresh_token.return_value = saved_record(session_store)
        user_repo.find_by_id.return_value = credential
        session_store.mark_used.return_value = False
        winner = other_token(credential.id, tokens.session_id)
        session_store.find_unrevoked_by_user.return_value = [winner]

        # Act
        result = await issuer.rotate(
            tokens.access_token, tokens.refresh_token, "10.0.0.7", None
        )

        # Assert
        assert isinstance(result, Failure)
        assert isinstance(result.error, InvalidRefreshTokenError)
        session_store.mark_revoked.assert_awaited_once_with(
            [winner], T0, REASON_TOKEN_REUSE
        )
        # Only the original issuance was saved; no pair for the loser
        assert session_store.save_refresh_token.await_count == 1


@pytest.mark.unit
class TestTokenIssuerRevoke:
    async def test_revoke_unknown_session_writes_nothing(
        self, issuer, session_store
    ):
        session_store.find_by_session_id.return_value = []

        revoked = await issuer.revoke("nope", REASON_USER_LOGOUT)

        assert revoked == 0
        session_store.mark_revoked.assert_not_awaited()
        session_store.add_blacklist_entry.assert_not_awaited()

    async def test_revoke_marks_unrevoked_tokens_and_blacklists_once(
        self, issuer, session_store
    ):
        # Arrange
        user_id = uuid4()
        used = replace(other_token(user_id, "session-1"), is_used=True)
        current = other_token(user_id, "session-1")
        already = replace(other_token(user_id, "session-1"), is_revoked=True)
        session_store.find_by_session_id.return_value = [used, current, already]
        session_store.mark_revoked.return_value = 2

        # Act
        revoked = await issuer.revoke("session-1", REASON_USER_LOGOUT)

        # Assert
        assert revoked == 2
        session_store.mark_revoked.assert_awaited_once_with(
            [used, current], T0, REASON_USER_LOGOUT
        )
        session_store.add_blacklist_entry.assert_awaited_once()
        entry = session_store.add_blacklist_entry.await_args.args[0]
        assert entry.session_id == "session-1"
        assert entry.user_id == user_id
        assert entry.expires_at == T0 + timedelta(days=7)

    async def test_revoke_uses_callers_instant(self, issuer, session_store, clock):
        user_id = uuid4()
        session_store.find_by_session_id.return_value = [
            other_token(user_id, "session-1")
        ]
        at = T0 + timedelta(minutes=5)
        clock.advance(hours=1)

        await issuer.revoke("session-1", REASON_USER_LOGOUT, now=at)

        assert session_store.mark_revoked.await_args.args[1] == at
        entry = session_store.add_blacklist_entry.await_args.args[0]
        assert entry.blacklisted_at == at
        assert entry.expires_at == at + timedelta(days=7)

    async def test_revoke_all_for_user_blacklists_each_session(
        self, issuer, session_store
    ):
        user_id = uuid4()
        tokens = [
            other_token(user_id, "session-1"),
            other_token(user_id, "session-2"),
        ]
        session_store.find_unrevoked_by_user.return_value = tokens
        session_store.mark_revoked.return_value = 2

        revoked = await issuer.revoke_all_for_user(user_id, "all_sessions_revoked")

        assert revoked == 2
        assert session_store.add_blacklist_entry.await_count == 2

    async def test_revoke_all_except_keeps_named_session(
        self, issuer, session_store
    ):
        user_id = uuid4()
        keep = other_token(user_id, "session-1")
        drop = other_token(user_id, "session-2")
        session_store.find_unrevoked_by_user.return_value = [keep, drop]

        await issuer.revoke_all_for_user_except(
            user_id, "session-1", "other_sessions_revoked"
        )

        session_store.mark_revoked.assert_awaited_once_with(
            [drop], T0, "other_sessions_revoked"
        )
        entry = session_store.add_blacklist_entry.await_args.args[0]
        assert entry.session_id == "session-2"
        session_store.add_blacklist_entry.assert_awaited_once()

    async def test_is_blacklisted_checks_at_clock_now(
        self, issuer, session_store, clock
    ):
        session_store.is_blacklisted.return_value = True

        assert await issuer.is_blacklisted("session-1")
        session_store.is_blacklisted.assert_awaited_once_with("session-1", clock.now())
