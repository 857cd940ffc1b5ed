"""
TutorHub Backend — Password Hashing & Access Tokens
====================================================

What:  The two cryptographic collaborators of the auth flows.
       - PasswordHasher: salted bcrypt hash + constant-time verification
       - TokenService:   issues and verifies signed, stateless access tokens
How:   Both are constructed once in `create_app()` from settings and reached
       through dependencies; neither keeps per-request state.

Token contract:
    Payload is `{"id": <principal id>, "role": "student" | "instructor"}`,
    signed with HS256 and the process-wide JWT_SECRET. There is no expiry and
    no revocation list; the server is the only signer and verifier.
"""

import logging
from dataclasses import dataclass

import bcrypt
from jose import JWTError, jwt

from tutorhub.exceptions import InvalidTokenError

logger = logging.getLogger(__name__)

# bcrypt only reads the first 72 bytes of its input; recent releases raise past that
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """
    Secure password hashing using bcrypt.

    Example:
        >>> hasher = PasswordHasher(rounds=4)
        >>> hashed = hasher.hash("pw123456")
        >>> hasher.verify("pw123456", hashed)
        True
        >>> hasher.verify("wrong", hashed)
        False
    """

    def __init__(self, rounds: int = 10) -> None:
        self._rounds = rounds
        # Verified against when the email is unknown, so both login failures cost one bcrypt check
        self._dummy_hash = bcrypt.hashpw(b"tutorhub-dummy", bcrypt.gensalt(rounds=rounds))

    def hash(self, password: str) -> str:
        """
        Hash a password with a fresh salt.

        Raises:
            ValueError: If password is empty.
        """
        if not password:
            raise ValueError("Password cannot be empty")

        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Returns True when `password` matches `password_hash`; malformed hashes never match."""
        if not password or not password_hash:
            return False

        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except ValueError as e:
            logger.warning("Password verification failed: %s", str(e))
            return False

    def burn(self, password: str) -> None:
        """Runs one verification against a throwaway hash and discards the result."""
        try:
            bcrypt.checkpw(_encode(password or ""), self._dummy_hash)
        except ValueError as e:
            logger.warning("Dummy password verification failed: %s", str(e))


@dataclass(frozen=True)
class TokenClaims:
    id: int
    role: str


class TokenService:
    """
    Issues and verifies access tokens.

    Every verification failure (absent, malformed, bad signature, missing
    claims) surfaces as `InvalidTokenError`; callers never see jose errors.
    """

    def __init__(self, secret: str, algorithm: str = "HS256") -> None:
        self._secret = secret
        self._algorithm = algorithm

    def issue(self, principal_id: int, role: str) -> str:
        return jwt.encode(
            {"id": principal_id, "role": role},
            self._secret,
            algorithm=self._algorithm,
        )

    def verify(self, token: str | None) -> TokenClaims:
        if not token:
            raise InvalidTokenError(context={"reason": "missing"})

        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except JWTError as e:
            raise InvalidTokenError(context={"reason": "decode", "detail": str(e)})

        principal_id = payload.get("id")
        role = payload.get("role")
        # bool is an int subclass; reject it explicitly
        if not isinstance(principal_id, int) or isinstance(principal_id, bool):
            raise InvalidTokenError(context={"reason": "claims"})
        if not isinstance(role, str):
            raise InvalidTokenError(context={"reason": "claims"})

        return TokenClaims(id=principal_id, role=role)
