"""
Session token issuing and verification (HS256 JWT).
"""
from datetime import datetime, timedelta, timezone
from typing import Iterable

import jwt

from backend.common.errors import Unauthenticated
from backend.common.rest.request_context import CallerIdentity
from backend.services.system.logger_service import get_logger

logger = get_logger(__name__)

ALGORITHM = 'HS256'


class TokenService:
    def __init__(self, secret: str, expires_minutes: int = 60):
        self.secret = secret
        self.expires_minutes = expires_minutes

    def issue(self, subject: str, roles: Iterable[str]) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            'sub': subject,
            'roles': sorted(set(roles)),
            'iat': now,
            'exp': now + timedelta(minutes=self.expires_minutes),
        }
        return jwt.encode(claims, self.secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> CallerIdentity:
        """
        Decode a token into a caller identity.

        Raises:
            Unauthenticated: If the token is expired, tampered with or malformed
        """
        try:
            claims = jwt.decode(token, self.secret, algorithms=[ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise Unauthenticated('Token has expired')
        except jwt.InvalidTokenError as e:
            raise Unauthenticated(f'Invalid token: {e}')

        subject = claims.get('sub')
        if not subject:
            raise Unauthenticated('Token has no subject')
        return CallerIdentity(subject=str(subject), roles=frozenset(claims.get('roles') or ()))
