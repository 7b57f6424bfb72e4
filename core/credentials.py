"""
Credential store for the blog core.

Holds the known accounts as salted Scrypt hashes and answers the single
question the session layer asks: do these credentials match an account?
"""

import os
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt
from cryptography.hazmat.backends import default_backend


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PasswordHash:
    """Salted Scrypt digest of a password."""
    salt: bytes
    digest: bytes


class CredentialStore:
    """
    Verifies username/password pairs against registered accounts.

    Passwords are never kept in plain text; each account stores a random
    salt and the Scrypt digest of its password.
    """

    # Scrypt parameters
    SALT_SIZE = 16
    KEY_LENGTH = 32
    N = 2**14  # CPU/memory cost parameter
    R = 8      # Block size
    P = 1      # Parallelization parameter

    def __init__(self, accounts: Iterable[Mapping[str, str]] = ()):
        """
        Initialize CredentialStore.

        Args:
            accounts: Account entries with ``username`` and ``password`` keys
        """
        self.backend = default_backend()
        self._accounts: Dict[str, PasswordHash] = {}

        for account in accounts:
            self.add_account(account['username'], account['password'])

    def _kdf(self, salt: bytes) -> Scrypt:
        return Scrypt(
            salt=salt,
            length=self.KEY_LENGTH,
            n=self.N,
            r=self.R,
            p=self.P,
            backend=self.backend
        )

    def add_account(self, username: str, password: str) -> None:
        """
        Register an account, replacing any existing one with the same name.

        Args:
            username: Account name
            password: Plain-text password, hashed before storage
        """
        salt = os.urandom(self.SALT_SIZE)
        digest = self._kdf(salt).derive(password.encode('utf-8'))
        self._accounts[username] = PasswordHash(salt=salt, digest=digest)
        logger.debug(f"Registered account '{username}'")

    def has_account(self, username: str) -> bool:
        return username in self._accounts

    def verify(self, username: str, password: str) -> bool:
        """
        Check a username/password pair.

        Args:
            username: Account name
            password: Plain-text password

        Returns:
            True if the account exists and the password matches
        """
        stored = self._accounts.get(username)
        if stored is None:
            return False

        try:
            self._kdf(stored.salt).verify(password.encode('utf-8'), stored.digest)
            return True
        except InvalidKey:
            return False

    def __len__(self) -> int:
        return len(self._accounts)
