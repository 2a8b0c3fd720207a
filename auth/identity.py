"""Caller identity resolution.

The API core only ever sees an owner identifier. How that identifier is
obtained is decided once at process start by picking a resolver; the
identity middleware asks it for every request.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

from jose import JWTError
from starlette.requests import Request

import config
from auth.jwt import decode_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallerIdentity:
    """Resolved caller."""

    user_id: str
    email: str | None = None
    name: str | None = None


class IdentityResolver(Protocol):
    def resolve(self, request: Request) -> CallerIdentity | None:
        """Return the caller, or None if the request is unauthenticated."""


class DemoIdentityResolver:
    """Treat every request as coming from one fixed demo user."""

    def __init__(self, identity: CallerIdentity):
        self.identity = identity

    def resolve(self, request: Request) -> CallerIdentity | None:
        return self.identity


class HeaderIdentityResolver:
    """Trust identity headers set by an upstream authentication gateway."""

    def __init__(self, header: str = "X-User-Id"):
        self.header = header

    def resolve(self, request: Request) -> CallerIdentity | None:
        user_id = (request.headers.get(self.header) or "").strip()
        if not user_id:
            return None
        return CallerIdentity(
            user_id=user_id,
            email=request.headers.get("X-User-Email"),
            name=request.headers.get("X-User-Name"),
        )


class JwtIdentityResolver:
    """Resolve the caller from an ``Authorization: Bearer <jwt>`` header."""

    def resolve(self, request: Request) -> CallerIdentity | None:
        authorization = request.headers.get("Authorization") or ""
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            return None

        try:
            payload = decode_token(token.strip())
        except JWTError as e:
            logger.info("Rejected bearer token: %s", e)
            return None

        return CallerIdentity(user_id=payload.sub, email=payload.email, name=payload.name)


def build_identity_resolver(settings: config.Settings) -> IdentityResolver:
    """
    Pick the resolver named by ``settings.AUTH_MODE``.

    Raises:
        ValueError: If AUTH_MODE is not one of demo, header, jwt
    """
    mode = settings.AUTH_MODE.lower()
    if mode == "demo":
        return DemoIdentityResolver(
            CallerIdentity(
                user_id=settings.DEMO_USER_ID,
                email=settings.DEMO_USER_EMAIL,
                name=settings.DEMO_USER_NAME,
            )
        )
    if mode == "header":
        return HeaderIdentityResolver()
    if mode == "jwt":
        return JwtIdentityResolver()
    raise ValueError(f"Unknown AUTH_MODE: {settings.AUTH_MODE!r}")
