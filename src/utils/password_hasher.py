"""Password hashing utilities.

One-way, salted bcrypt hashing. Digests embed their own salt and work
factor, so verification never compares digests directly.
"""

import logging

import bcrypt

from config import BCRYPT_ROUNDS

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of the password
BCRYPT_MAX_BYTES = 72


def _to_bytes(password: str) -> bytes:
    # Truncate the same way on hash and verify so long passwords still match
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """Hashes and verifies passwords with bcrypt."""

    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        """Initialize PasswordHasher.

        Args:
            rounds: Bcrypt work factor (log2 of the iteration count).
        """
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: Plain text password.

        Returns:
            Hashed password (bcrypt hash string).
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_to_bytes(password), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a bcrypt hash.

        A malformed hash fails closed.

        Args:
            password: Plain text password to verify.
            password_hash: Bcrypt hash string to verify against.

        Returns:
            True if password matches, False otherwise.
        """
        try:
            return bcrypt.checkpw(_to_bytes(password), password_hash.encode("utf-8"))
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning("Password verification failed on malformed hash: %s", e)
            return False
