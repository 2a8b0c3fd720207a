"""JWT token creation and validation."""

from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError

import config
from auth.schemas import TokenPayload


def create_token(
    user_id: str,
    email: str | None = None,
    name: str | None = None,
    expires_in_hours: int = 24,
) -> str:
    """
    Create a signed JWT for a caller.

    Args:
        user_id: Caller identifier (becomes the ``sub`` claim)
        email: Optional email claim
        name: Optional display name claim
        expires_in_hours: Token expiration in hours

    Returns:
        Encoded JWT token string
    """
    exp = datetime.now(timezone.utc) + timedelta(hours=expires_in_hours)

    payload = {
        "sub": user_id,
        "email": email,
        "name": name,
        "exp": int(exp.timestamp()),  # JWT expects Unix timestamp
    }

    return jwt.encode(
        payload,
        config.settings.JWT_SECRET,
        algorithm=config.settings.JWT_ALGORITHM,
    )


def decode_token(token: str) -> TokenPayload:
    """
    Decode and validate a JWT token.

    Args:
        token: JWT token string

    Returns:
        TokenPayload with decoded claims

    Raises:
        JWTError: If token is invalid, expired, or has no subject or expiration
    """
    try:
        payload = jwt.decode(
            token,
            config.settings.JWT_SECRET,
            algorithms=[config.settings.JWT_ALGORITHM],
        )
    except JWTError as e:
        raise JWTError(f"Invalid token: {str(e)}") from e

    if not payload.get("sub"):
        raise JWTError("Invalid token: missing subject")

    # python-jose only checks exp when the claim is present
    if payload.get("exp") is None:
        raise JWTError("Invalid token: missing expiration")

    return TokenPayload(
        sub=payload["sub"],
        email=payload.get("email"),
        name=payload.get("name"),
        exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )
