"""Pluggable blob encryption.

The event store encrypts every blob with the current encryption key before
writing it and decrypts with the same key on read. No concrete algorithm
ships here; ``IdentityCipher`` passes bytes through unchanged and is the
default until a real cipher is injected.
"""

from typing import Protocol


class Cipher(Protocol):
    """Symmetric transform applied to blob contents.

    Implementations may raise any exception on failure, for example on a
    wrong key. The event store wraps whatever is raised in ``CipherError``
    and reports it as a codec failure.
    """

    def encrypt(self, data: bytes, key: str) -> bytes:
        ...

    def decrypt(self, data: bytes, key: str) -> bytes:
        ...


class IdentityCipher:
    """Cipher that leaves data untouched regardless of the key."""

    def encrypt(self, data: bytes, key: str) -> bytes:
        return data

    def decrypt(self, data: bytes, key: str) -> bytes:
        return data
