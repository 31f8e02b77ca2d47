"""Password hashing and verification service."""

from pwdlib import PasswordHash
from pwdlib.exceptions import UnknownHashError


class PasswordService:
    """
    Argon2 password hashing with an application-wide pepper.

    Verification tries the peppered form first, then the bare password so
    hashes stored before a pepper was configured keep working.
    """

    def __init__(self, pepper: str = "") -> None:
        self.pepper = pepper
        self._password_hash = PasswordHash.recommended()

    def hash(self, password: str) -> str:
        return self._password_hash.hash(password + self.pepper)

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            if self._password_hash.verify(password + self.pepper, password_hash):
                return True
            if not self.pepper:
                return False
            return self._password_hash.verify(password, password_hash)
        except UnknownHashError:
            return False
