"""Token issuer: access/refresh issuance and the refresh token state machine.

Refresh token states:

    ACTIVE ──rotate──▶ USED
       ├──revoke──────▶ REVOKED
       └──time────────▶ EXPIRED (derived)

Rotation is one-time-use and opens a new session (the device id carries
over). Presenting a USED or REVOKED refresh token is treated as theft of
the token family: every refresh token of the user is revoked and every one
of the user's sessions is blacklisted.

The USED transition goes through SessionStore.mark_used(), an atomic
compare-and-set. When two requests race on the same token, the loser is
handled exactly like a replay.

Architecture:
    - Application service (no framework imports)
    - Collaborators injected via domain protocols
"""

from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta
from uuid import UUID

from uuid_extensions import uuid7

from branchauth.application.dtos import IssuedTokens
from branchauth.core.constants import REASON_TOKEN_REUSE
from branchauth.core.errors import DomainError
from branchauth.core.result import Failure, Result, Success
from branchauth.domain.entities import BlacklistEntry, Credential, RefreshToken
from branchauth.domain.errors import (
    AccountInactiveError,
    AccountLockedError,
    InvalidRefreshTokenError,
    RefreshTokenExpiredError,
)
from branchauth.domain.protocols import (
    ClockProtocol,
    LoggerProtocol,
    RefreshTokenServiceProtocol,
    SessionStore,
    TokenCodecProtocol,
    UserRepository,
)
from branchauth.domain.value_objects import AccessTokenClaims


class TokenIssuer:
    """Issues, rotates and revokes session tokens.

    Example:
        >>> tokens = await issuer.issue(credential, "10.0.0.7", "Mozilla/5.0")
        >>> result = await issuer.rotate(
        ...     tokens.access_token, tokens.refresh_token, "10.0.0.7", "Mozilla/5.0"
        ... )
    """

    def __init__(
        self,
        session_store: SessionStore,
        user_repo: UserRepository,
        token_codec: TokenCodecProtocol,
        refresh_token_service: RefreshTokenServiceProtocol,
        clock: ClockProtocol,
        logger: LoggerProtocol,
        *,
        access_token_ttl: timedelta,
        refresh_token_ttl: timedelta,
    ) -> None:
        self._session_store = session_store
        self._user_repo = user_repo
        self._token_codec = token_codec
        self._refresh_token_service = refresh_token_service
        self._clock = clock
        self._logger = logger
        self._access_token_ttl = access_token_ttl
        self._refresh_token_ttl = refresh_token_ttl

    async def issue(
        self,
        user: Credential,
        ip_address: str | None,
        user_agent: str | None,
        device_id: str | None = None,
        *,
        now: datetime | None = None,
    ) -> IssuedTokens:
        """Mint an access/refresh pair and persist the refresh record.

        Args:
            user: Authenticated credential.
            ip_address: Client IP.
            user_agent: Client user agent.
            device_id: Client device identifier, carried across rotations.
            now: Instant of the enclosing operation; read from the clock
                when omitted.

        Returns:
            IssuedTokens. The refresh record is committed before returning.
        """
        now = now or self._clock.now()
        jwt_id = str(uuid7())
        session_id = str(uuid7())

        claims = AccessTokenClaims(
            user_id=user.id,
            username=user.username,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            jwt_id=jwt_id,
            session_id=session_id,
            branch_id=user.branch_id,
            roles=tuple(user.roles),
        )
        access_token = self._token_codec.encode(claims, now, self._access_token_ttl)
        refresh_token, token_hash = self._refresh_token_service.generate_token()

        await self._session_store.save_refresh_token(
            RefreshToken(
                id=uuid7(),
                user_id=user.id,
                token_hash=token_hash,
                jwt_id=jwt_id,
                session_id=session_id,
                expires_at=now + self._refresh_token_ttl,
                created_at=now,
                ip_address=ip_address,
                user_agent=user_agent,
                device_id=device_id,
            )
        )

        self._logger.info(
            "tokens_issued",
            user_id=str(user.id),
            session_id=session_id,
            jwt_id=jwt_id,
        )

        return IssuedTokens(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=int(self._access_token_ttl.total_seconds()),
            session_id=session_id,
        )

    async def rotate(
        self,
        access_token: str,
        refresh_token: str,
        ip_address: str | None,
        user_agent: str | None,
    ) -> Result[IssuedTokens, DomainError]:
        """Exchange a refresh token for a new pair (one-time use).

        Order of checks:
            1. Access token signature/issuer/audience (expiry ignored)
            2. Refresh record lookup by (token hash, jti) and owner match
            3. Replay: USED or REVOKED record revokes the whole family
            4. Expiry
            5. Owner still exists, is active and is not locked
            6. Atomic ACTIVE -> USED; losing the race counts as a replay

        Returns:
            Success(IssuedTokens) for a new session, or Failure
            with InvalidTokenError, InvalidRefreshTokenError,
            RefreshTokenExpiredError, AccountInactiveError or
            AccountLockedError.
        """
        now = self._clock.now()

        match self._token_codec.decode_ignoring_expiry(access_token):
            case Failure(error=error):
                self._logger.warning("refresh_rejected", reason=error.code.value)
                return Failure(error=error)
            case Success(value=claims):
                pass

        token_hash = self._refresh_token_service.hash_token(refresh_token)
        record = await self._session_store.find_refresh_token(
            token_hash, claims.jwt_id
        )
        if record is None or record.user_id != claims.user_id:
            self._logger.warning(
                "refresh_rejected",
                reason="refresh_token_not_found",
                user_id=str(claims.user_id),
                session_id=claims.session_id,
            )
            return Failure(error=InvalidRefreshTokenError())

        if record.was_consumed():
            await self._handle_reuse(record, now)
            return Failure(error=InvalidRefreshTokenError())

        if record.is_expired(now):
            self._logger.info(
                "refresh_rejected",
                reason="refresh_token_expired",
                user_id=str(record.user_id),
                session_id=record.session_id,
            )
            return Failure(error=RefreshTokenExpiredError())

        user = await self._user_repo.find_by_id(record.user_id)
        if user is None:
            self._logger.warning(
                "refresh_rejected",
                reason="user_not_found",
                user_id=str(record.user_id),
            )
            return Failure(error=InvalidRefreshTokenError())
        if not user.is_active:
            self._logger.warning(
                "refresh_rejected", reason="account_inactive", user_id=str(user.id)
            )
            return Failure(error=AccountInactiveError())
        if user.is_locked:
            self._logger.warning(
                "refresh_rejected", reason="account_locked", user_id=str(user.id)
            )
            return Failure(error=AccountLockedError())

        if not await self._session_store.mark_used(record, now):
            await self._handle_reuse(record, now)
            return Failure(error=InvalidRefreshTokenError())

        tokens = await self.issue(
            user,
            ip_address,
            user_agent,
            device_id=record.device_id,
            now=now,
        )
        self._logger.info(
            "refresh_token_rotated",
            user_id=str(user.id),
            previous_session_id=record.session_id,
            session_id=tokens.session_id,
        )
        return Success(value=tokens)

    async def revoke(
        self, session_id: str, reason: str, *, now: datetime | None = None
    ) -> int:
        """Revoke every refresh token of a session and blacklist it.

        Returns:
            Number of tokens newly revoked. An unknown session returns 0
            and writes nothing.
        """
        now = now or self._clock.now()
        tokens = await self._session_store.find_by_session_id(session_id)
        if not tokens:
            self._logger.warning(
                "session_not_found", session_id=session_id, reason=reason
            )
            return 0

        unrevoked = [token for token in tokens if not token.is_revoked]
        revoked = await self._session_store.mark_revoked(unrevoked, now, reason)
        await self._session_store.add_blacklist_entry(
            BlacklistEntry.for_session(session_id, tokens[0].user_id, reason, now)
        )

        self._logger.info(
            "session_revoked",
            session_id=session_id,
            user_id=str(tokens[0].user_id),
            reason=reason,
            revoked_count=revoked,
        )
        return revoked

    async def revoke_all_for_user(
        self, user_id: UUID, reason: str, *, now: datetime | None = None
    ) -> int:
        """Revoke every session of a user.

        Returns:
            Number of tokens newly revoked.
        """
        now = now or self._clock.now()
        tokens = await self._session_store.find_unrevoked_by_user(user_id)
        return await self._revoke_sessions(user_id, tokens, reason, now)

    async def revoke_all_for_user_except(
        self,
        user_id: UUID,
        except_session_id: str,
        reason: str,
        *,
        now: datetime | None = None,
    ) -> int:
        """Revoke every session of a user but one."""
        now = now or self._clock.now()
        tokens = [
            token
            for token in await self._session_store.find_unrevoked_by_user(user_id)
            if token.session_id != except_session_id
        ]
        return await self._revoke_sessions(user_id, tokens, reason, now)

    async def is_blacklisted(self, session_id: str) -> bool:
        """True while a blacklist entry for the session is in effect."""
        return await self._session_store.is_blacklisted(session_id, self._clock.now())

    async def _handle_reuse(self, record: RefreshToken, now: datetime) -> None:
        self._logger.warning(
            "refresh_token_reuse_detected",
            user_id=str(record.user_id),
            session_id=record.session_id,
            token_state=record.state(now).value,
        )
        tokens = await self._session_store.find_unrevoked_by_user(record.user_id)
        await self._revoke_sessions(
            record.user_id,
            tokens,
            REASON_TOKEN_REUSE,
            now,
            extra_session_ids=[record.session_id],
        )

    async def _revoke_sessions(
        self,
        user_id: UUID,
        tokens: Sequence[RefreshToken],
        reason: str,
        now: datetime,
        extra_session_ids: Iterable[str] = (),
    ) -> int:
        revoked = await self._session_store.mark_revoked(tokens, now, reason)

        session_ids = dict.fromkeys(
            [*(token.session_id for token in tokens), *extra_session_ids]
        )
        for session_id in session_ids:
            await self._session_store.add_blacklist_entry(
                BlacklistEntry.for_session(session_id, user_id, reason, now)
            )

        self._logger.info(
            "sessions_revoked",
            user_id=str(user_id),
            reason=reason,
            session_count=len(session_ids),
            revoked_count=revoked,
        )
        return revoked
