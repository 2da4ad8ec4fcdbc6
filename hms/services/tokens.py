"""
Session token issuing and validation.

Tokens are HS256 JWTs carrying ``sub`` (user id), ``role`` and ``exp``.
They are never stored: validity depends only on the signature and the
expiry, so revoking a token means rotating the secret.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional, Union

import jwt
from django.conf import settings
from django.utils import timezone

from hms.exceptions import ExpiredToken, InvalidInput, InvalidToken
from hms.models import Role

ALGORITHM = 'HS256'
DEFAULT_LIFETIME = timedelta(hours=24)


@dataclass(frozen=True)
class Identity:
    """Authenticated caller extracted from a verified token.

    Installed as ``request.user`` by the bearer authentication class and
    passed explicitly to the services that need to know who is acting.
    """
    user_id: uuid.UUID
    role: Role

    is_authenticated = True
    is_anonymous = False

    @property
    def pk(self) -> uuid.UUID:
        return self.user_id

    def has_role(self, *roles) -> bool:
        return not roles or self.role in roles


class TokenService:
    def __init__(
        self,
        secret: str,
        lifetime: timedelta = DEFAULT_LIFETIME,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if not secret:
            raise ValueError('token signing secret must not be empty')
        self._secret = secret
        self.lifetime = lifetime
        self._clock = clock or timezone.now

    def issue(self, identity: Union[uuid.UUID, str], role) -> str:
        try:
            role = Role(role)
            user_id = uuid.UUID(str(identity))
        except ValueError:
            raise InvalidInput('invalid identity or role')
        expires_at = self._clock() + self.lifetime
        payload = {
            'sub': str(user_id),
            'role': role.value,
            'exp': int(expires_at.timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def validate(self, token: str) -> Identity:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                # expiry is checked below against the injected clock
                options={'verify_exp': False, 'require': ['exp', 'sub', 'role']},
            )
        except jwt.InvalidTokenError:
            raise InvalidToken()

        exp = payload['exp']
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            raise InvalidToken()
        try:
            user_id = uuid.UUID(str(payload['sub']))
            role = Role(payload['role'])
        except ValueError:
            raise InvalidToken()

        if self._clock().timestamp() >= exp:
            raise ExpiredToken()
        return Identity(user_id=user_id, role=role)


def get_token_service() -> TokenService:
    """Build the service from settings; the secret is read at call time."""
    return TokenService(
        settings.JWT_SECRET,
        lifetime=timedelta(hours=settings.JWT_LIFETIME_HOURS),
    )
