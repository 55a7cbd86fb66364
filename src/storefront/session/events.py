"""Domain events for the Session aggregate."""

from protean.fields import DateTime, Identifier

from storefront.domain import storefront


@storefront.event(part_of="Session")
class SessionStarted:
    __version__ = 1

    user_id = Identifier(required=True)
    expires_at = DateTime(required=True)
