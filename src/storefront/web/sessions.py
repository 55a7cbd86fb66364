"""Shopper sessions for storefront requests.

A session is opened lazily, the first time a page asks for the shopper
(``current_session``). Requests that never do (operational endpoints, static
files, API docs, unknown paths) neither open a session nor get a cookie.
"""

from fastapi import Request

from shared.config import get_settings
from storefront.session.session import Session
from storefront.session.store import COOKIE_NAME, sign_token, unsign_token


def current_session(request: Request) -> Session:
    """Return the request's session, loading or opening it on first use."""
    session = getattr(request.state, "session", None)
    if session is None:
        session, created = request.app.state.sessions.get_or_create(request.state.session_token)
        request.state.session = session
        request.state.session_created = created
    return session


async def session_middleware(request: Request, call_next):
    settings = get_settings()
    request.state.session_token = unsign_token(request.cookies.get(COOKIE_NAME), settings.session_secret)
    request.state.session = None
    request.state.session_created = False

    response = await call_next(request)

    if request.state.session_created:
        response.set_cookie(
            COOKIE_NAME,
            sign_token(request.state.session.token, settings.session_secret),
            max_age=int(request.app.state.sessions.ttl.total_seconds()),
            httponly=True,
            secure=settings.is_production,
            samesite="lax",
        )
    return response
