"""Server-side session storage and the signed cookie that points at it.

The cookie carries only the session token plus an HMAC signature; the user id
lives in the sessions table. An unknown, forged or expired token gets a fresh
session the first time a page asks for the shopper.
"""

import base64
import hashlib
import hmac
from datetime import UTC, datetime, timedelta

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.domain import logger
from storefront.session.session import Session

COOKIE_NAME = "shopmate.sid"


def sign_token(token: str, secret: str) -> str:
    return f"{token}.{_signature(token, secret)}"


def unsign_token(value: str | None, secret: str) -> str | None:
    """Return the token from a signed cookie value, or None if it doesn't verify."""
    if not value or "." not in value:
        return None

    token, _, signature = value.rpartition(".")
    if not hmac.compare_digest(signature, _signature(token, secret)):
        logger.warning("session.cookie.bad_signature")
        return None
    return token


def _signature(token: str, secret: str) -> str:
    digest = hmac.new(secret.encode(), token.encode(), hashlib.sha256).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode()


class SessionStore:
    def __init__(self, ttl: timedelta = timedelta(hours=24)):
        self.ttl = ttl

    def get(self, token: str | None, now: datetime | None = None) -> Session | None:
        """Load a live session. Expired sessions are deleted and treated as missing."""
        if not token:
            return None

        repo = current_domain.repository_for(Session)
        try:
            session = repo.get(token)
        except ObjectNotFoundError:
            return None

        if session.is_expired(now):
            repo._dao.delete(session)
            logger.info("session.expired", user_id=session.user_id)
            return None
        return session

    def create(self, now: datetime | None = None) -> Session:
        session = Session.start(self.ttl, now=now or datetime.now(UTC))
        current_domain.repository_for(Session).add(session)
        logger.info("session.created", user_id=session.user_id)
        return session

    def get_or_create(self, token: str | None, now: datetime | None = None) -> tuple[Session, bool]:
        """Return ``(session, created)`` for the given token."""
        session = self.get(token, now=now)
        if session is not None:
            return session, False
        return self.create(now=now), True
