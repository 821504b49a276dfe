"""Password hashing utilities.

Learn: Uses bcrypt for secure password hashing. bcrypt automatically
handles salting and is resistant to rainbow table attacks. The salt and
the work factor are embedded in the digest itself ("$2b$12$..."), so
verification needs nothing but the stored string.

The work factor is configuration (TASKIFY_BCRYPT_ROUNDS), never user
input. 12 rounds takes ~100ms per hash on modern hardware.
"""

import bcrypt

# bcrypt only looks at the first 72 bytes of the password.
MAX_PASSWORD_BYTES = 72


class CredentialHasher:
    """One-way password hashing with a fixed, configured work factor."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a password with a fresh random salt.

        Two calls with the same password produce different digests;
        both verify against that password.
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against its digest in constant time.

        Malformed or empty digests return False instead of raising.
        """
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except (ValueError, TypeError, AttributeError):
            return False


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:MAX_PASSWORD_BYTES]
