"""Password hashing backed by bcrypt."""

import bcrypt

# bcrypt only reads the first 72 bytes of its input; longer secrets are refused
# instead of being silently truncated.
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """One-way salted password hashing with a tunable cost factor."""

    def __init__(self, rounds: int = 12):
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, plaintext: str) -> str:
        """Hash a password with a fresh random salt.

        Args:
            plaintext: The password to hash

        Returns:
            The bcrypt hash in modular crypt format (``$2b$<cost>$...``)

        Raises:
            ValueError: If the password is empty, not a string, or longer than 72 bytes
        """
        if not isinstance(plaintext, str) or not plaintext:
            raise ValueError("Password must be a non-empty string")
        secret = plaintext.encode("utf-8")
        if len(secret) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return bcrypt.hashpw(secret, bcrypt.gensalt(rounds=self._rounds)).decode("ascii")

    def verify(self, plaintext: str, hashed: str) -> bool:
        """Check a password against a stored hash.

        Returns False on any mismatch, including over-long input and malformed
        stored hashes. The comparison inside bcrypt is constant-time.
        """
        if not isinstance(plaintext, str) or not isinstance(hashed, str):
            return False
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), hashed.encode("ascii"))
        except (ValueError, UnicodeEncodeError):
            return False
