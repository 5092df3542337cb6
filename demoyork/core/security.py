"""Password hashing and signed session tokens."""

import calendar
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import bcrypt
from jose import JWTError, jwt

from demoyork.core.config import Settings, settings
from demoyork.core.exceptions import ExpiredSession, InvalidSession


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    # bcrypt only looks at the first 72 bytes
    pwd_bytes = password.encode("utf-8")[:72]
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(pwd_bytes, salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    pwd_bytes = plain_password.encode("utf-8")[:72]
    hashed_bytes = hashed_password.encode("utf-8")
    try:
        return bcrypt.checkpw(pwd_bytes, hashed_bytes)
    except ValueError:
        return False


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionCodec:
    """Issues and parses the signed, time-bounded session token.

    The token is a JWT whose ``sub`` claim is the user identity. Expiry is
    checked here rather than by ``jose`` so the clock can be injected.
    """

    TOKEN_TYPE = "session"

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=1),
        clock: Callable[[], datetime] = _utcnow,
    ):
        if not secret:
            raise ValueError("Session secret must be non-empty")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, user_identity: str) -> str:
        """Create a session token for ``user_identity`` expiring after the TTL."""
        now = self._clock()
        claims = {
            "sub": str(user_identity),
            "iat": calendar.timegm(now.utctimetuple()),
            "exp": calendar.timegm((now + self._ttl).utctimetuple()),
            "type": self.TOKEN_TYPE,
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def parse(self, token: str) -> str:
        """Verify a session token and return the user identity it carries.

        Raises:
            InvalidSession: bad signature, malformed token or missing claims.
            ExpiredSession: the current time is past the token's expiry.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JWTError:
            raise InvalidSession("Invalid session")

        if payload.get("type") != self.TOKEN_TYPE:
            raise InvalidSession("Invalid session type")

        subject: Optional[str] = payload.get("sub")
        expires_at = payload.get("exp")
        if not subject or not isinstance(expires_at, int):
            raise InvalidSession("Invalid session payload")

        if calendar.timegm(self._clock().utctimetuple()) > expires_at:
            raise ExpiredSession("Session has expired")
        return subject


def build_session_codec(config: Settings = settings) -> SessionCodec:
    """Create the process-wide codec from settings."""
    return SessionCodec(
        secret=config.SESSION_SECRET,
        algorithm=config.SESSION_ALGORITHM,
        ttl=timedelta(minutes=config.SESSION_TTL_MINUTES),
    )
