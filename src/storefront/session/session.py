"""Session aggregate — an anonymous shopper identified by a cookie token."""

import secrets
from datetime import UTC, datetime, timedelta
from uuid import uuid4

from protean.fields import DateTime, Identifier, String

from shared.config import get_settings
from storefront.domain import storefront
from storefront.session.events import SessionStarted


@storefront.aggregate(schema_name=get_settings().sessions_table)
class Session:
    token = String(identifier=True, max_length=64)
    user_id = Identifier(required=True)
    created_at = DateTime(required=True)
    expires_at = DateTime(required=True)

    @classmethod
    def start(cls, ttl: timedelta, now: datetime | None = None):
        """Open a session for a new anonymous user."""
        now = now or datetime.now(UTC)
        session = cls(
            token=secrets.token_urlsafe(32),
            user_id=str(uuid4()),
            created_at=now,
            expires_at=now + ttl,
        )
        session.raise_(SessionStarted(user_id=session.user_id, expires_at=session.expires_at))
        return session

    def is_expired(self, now: datetime | None = None) -> bool:
        now = now or datetime.now(UTC)
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        return expires_at <= now
